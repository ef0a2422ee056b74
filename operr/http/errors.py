"""
HTTP status wrapping for errors crossing an HTTP boundary.
"""

from http import HTTPStatus
from typing import Optional

from ..common.errors import OpError, is_kind, origin
from ..common.kinds import ErrorKind

DEFAULT_STATUS = HTTPStatus.BAD_REQUEST.value

# Checked in order, first match wins.
KIND_TO_HTTP_STATUS = (
    (ErrorKind.INVALID_ARGUMENT, HTTPStatus.BAD_REQUEST),
    (ErrorKind.INVALID_REQUEST_BODY, HTTPStatus.BAD_REQUEST),
    (ErrorKind.NOT_FOUND, HTTPStatus.NOT_FOUND),
    (ErrorKind.INVALID_OPERATION, HTTPStatus.METHOD_NOT_ALLOWED),
    (ErrorKind.TIMEOUT, HTTPStatus.GATEWAY_TIMEOUT),
    (ErrorKind.PERMISSION_DENIED, HTTPStatus.FORBIDDEN),
    (ErrorKind.UNAUTHENTICATED, HTTPStatus.UNAUTHORIZED),
    (ErrorKind.TOO_MANY, HTTPStatus.TOO_MANY_REQUESTS),
    (ErrorKind.ALREADY_EXISTS, HTTPStatus.CONFLICT),
)


def status_text(status) -> str:
    """Reason phrase of an HTTP status code, empty string if the code is unknown."""
    if isinstance(status, bool) or not isinstance(status, int):
        return ""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class HTTPError(Exception):
    """
    Wraps an error together with the HTTP status to answer with. The message
    is the wrapped error's message.
    """

    def __init__(self, status: int, err):
        super().__init__(status, err)
        self._status = status
        self._err = err

    @property
    def status(self) -> int:
        return self._status

    @property
    def err(self):
        return self._err

    def cause(self):
        return self._err

    def __str__(self) -> str:
        if self._err is None:
            return ""
        return str(self._err)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self._status!r}, err={self._err!r})"


def new_http_error(status: int, err) -> Optional[HTTPError]:
    """
    Returns an HTTPError embedding err, or None if err is None. An unknown
    status code falls back to 400 Bad Request.
    """
    if err is None:
        return None
    if not status_text(status):
        status = DEFAULT_STATUS
    return HTTPError(status, err)


def cause(err):
    """
    Deepest error reachable through `cause()` methods. OpError does not have
    one, so the walk stops at the first classified error.
    """
    while err is not None:
        unwrap = getattr(err, "cause", None)
        if not callable(unwrap):
            break
        err = unwrap()
    return err


def to_http_status(err) -> int:
    """HTTP status to answer with for err."""
    if err is None:
        return HTTPStatus.OK.value
    if isinstance(err, HTTPError):
        return err.status
    if not isinstance(err, OpError):
        return HTTPStatus.INTERNAL_SERVER_ERROR.value
    for kind, status in KIND_TO_HTTP_STATUS:
        if is_kind(kind, err):
            return status.value
    # Only server-side origin statuses are passed on.
    root = origin(err)
    if isinstance(root, HTTPError) and isinstance(root.status, int) and root.status >= 500:
        return root.status
    return HTTPStatus.INTERNAL_SERVER_ERROR.value
