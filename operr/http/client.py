import logging
from http import HTTPStatus
from typing import Optional

import requests

from ..common.errors import OpError
from ..common.kinds import ErrorKind
from .errors import new_http_error, status_text

logger = logging.getLogger(__name__)

_STATUS_KINDS = {
    400: ErrorKind.INVALID_ARGUMENT,
    401: ErrorKind.UNAUTHENTICATED,
    403: ErrorKind.PERMISSION_DENIED,
    404: ErrorKind.NOT_FOUND,
    405: ErrorKind.INVALID_OPERATION,
    408: ErrorKind.TIMEOUT,
    409: ErrorKind.ALREADY_EXISTS,
    422: ErrorKind.INVALID_REQUEST_BODY,
    429: ErrorKind.TOO_MANY,
    504: ErrorKind.TIMEOUT,
}


def kind_for_status(status: int) -> ErrorKind:
    """Classifies an upstream HTTP error status."""
    if status in _STATUS_KINDS:
        return _STATUS_KINDS[status]
    if 500 <= status < 600:
        return ErrorKind.IO
    return ErrorKind.UNEXPECTED


def _http_failure(op: str, status: int, exc: Exception) -> OpError:
    # Upstream codes without a status text are answered as 502, not 400.
    answer = status if status_text(status) else HTTPStatus.BAD_GATEWAY.value
    return OpError(kind_for_status(status), op, new_http_error(answer, exc))


def check_response(op: str, response) -> Optional[OpError]:
    """
    None for a successful response, otherwise a classified error whose cause
    is an HTTPError carrying the upstream status.
    """
    status = response.status_code
    if status < 400:
        return None
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        return _http_failure(op, status, exc)
    # raise_for_status ignores codes >= 600
    return _http_failure(op, status, requests.HTTPError(f"HTTP {status}", response=response))


def classify_exception(op: str, exc: requests.RequestException) -> OpError:
    if isinstance(exc, requests.Timeout):
        return OpError(ErrorKind.TIMEOUT, op, exc)
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return _http_failure(op, exc.response.status_code, exc)
    return OpError(ErrorKind.IO, op, exc)


class RequestsHttpClient:
    """
    Thin adapter over requests.Session that raises OpError on failure.
    """

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()

    def request(self, method: str, url: str, op: Optional[str] = None, **kwargs):
        op = op or f"{method} {url}"
        try:
            response = self.session.request(method=method, url=url, **kwargs)
        except requests.RequestException as exc:
            err = classify_exception(op, exc)
            logger.debug("Request failed: %s", err)
            raise err from exc

        err = check_response(op, response)
        if err is not None:
            logger.debug("Request failed: %s", err)
            raise err
        return response
