"""
operr - classified, chainable errors for service code.

Quick Start:
    >>> from operr import ErrorKind, new, to_grpc_code
    >>> err = new(ErrorKind.NOT_FOUND, "get user", KeyError("42"))
    >>> to_grpc_code(err)
    <StatusCode.NOT_FOUND: (5, 'not found')>
"""

__version__ = "0.1.0"

from .common.kinds import ErrorKind, kind_label
from .common.errors import (
    OpError,
    new,
    first_error,
    get_kind,
    is_kind,
    origin,
    error_message,
)
from .http.errors import HTTPError, new_http_error, cause, to_http_status
from .transport.grpc_codes import to_grpc_code, abort_with

__all__ = [
    "__version__",
    "ErrorKind",
    "kind_label",
    "OpError",
    "new",
    "first_error",
    "get_kind",
    "is_kind",
    "origin",
    "error_message",
    "HTTPError",
    "new_http_error",
    "cause",
    "to_http_status",
    "to_grpc_code",
    "abort_with",
]
