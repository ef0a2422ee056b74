import pytest

from operr.config import ReportingConfig


@pytest.fixture
def raw_error():
    return ConnectionError("connection refused")


@pytest.fixture
def reporting_config():
    return ReportingConfig(log_origin=False)
