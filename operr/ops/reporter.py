import logging
from dataclasses import dataclass
from typing import Any, Optional

import grpc

from ..common.errors import error_message, get_kind, is_kind, origin
from ..config import ReportingConfig, load_config
from ..http.errors import to_http_status
from ..transport.grpc_codes import to_grpc_code
from .logger import setup_logger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorReport:
    message: str
    kind: Any
    grpc_code: grpc.StatusCode
    http_status: int
    origin: Optional[BaseException]


class ErrorReporter:
    """
    Resolves an error chain at a service boundary: renders it, maps it to
    protocol status codes and logs it once. Caller-caused kinds are logged at
    WARNING, everything else at ERROR.
    """

    def __init__(self, config: Optional[ReportingConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or ReportingConfig()
        self.logger = logger or logging.getLogger(__name__)

    def report(self, err) -> Optional[ErrorReport]:
        if err is None:
            return None

        report = ErrorReport(
            message=error_message(err),
            kind=get_kind(err),
            grpc_code=to_grpc_code(err),
            http_status=to_http_status(err),
            origin=origin(err),
        )

        level = logging.ERROR
        if any(is_kind(kind, err) for kind in self.config.warning_kinds):
            level = logging.WARNING

        if self.config.log_origin and report.origin is not None:
            self.logger.log(level, "%s (origin: %s)", report.message, type(report.origin).__name__)
        else:
            self.logger.log(level, "%s", report.message)
        return report


def build_reporter(config_path: Optional[str] = None) -> ErrorReporter:
    """
    Loads the config at config_path (defaults if None), configures the package
    logger from its logging section and returns a reporter for its reporting
    section.
    """
    config = load_config(config_path)
    setup_logger(config.logging)
    logger.debug("Error reporting configured (warning kinds: %s)", [k.name for k in config.reporting.warning_kinds])
    return ErrorReporter(config.reporting)
