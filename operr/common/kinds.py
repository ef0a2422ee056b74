from enum import IntEnum


class ErrorKind(IntEnum):
    """
    Coarse-grained classification of a failure. OTHER (0) means the node
    carries no classification of its own.
    """

    OTHER = 0
    INTERNAL = 1
    INVALID_ARGUMENT = 2
    INVALID_REQUEST_BODY = 3
    INVALID_OPERATION = 4  # e.g. method not allowed
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    IO = 8  # external io error (network failure etc)
    TIMEOUT = 9
    TOO_MANY = 10  # overload
    UNEXPECTED = 11  # should be escalated
    UNAUTHENTICATED = 12

    @property
    def label(self) -> str:
        return _LABELS[self]


UNKNOWN_LABEL = "unknown error type"

_LABELS = {
    ErrorKind.OTHER: "error",
    ErrorKind.INTERNAL: "internal error",
    ErrorKind.INVALID_ARGUMENT: "invalid argument(s)",
    ErrorKind.INVALID_REQUEST_BODY: "invalid request body",
    ErrorKind.INVALID_OPERATION: "invalid",
    ErrorKind.NOT_FOUND: "resource not found",
    ErrorKind.ALREADY_EXISTS: "conflict with existing resource",
    ErrorKind.PERMISSION_DENIED: "permission denied",
    ErrorKind.IO: "io error",
    ErrorKind.TIMEOUT: "request timeout",
    ErrorKind.TOO_MANY: "overload",
    ErrorKind.UNEXPECTED: "unexpected error",
    ErrorKind.UNAUTHENTICATED: "unauthenticated",
}


def to_kind(value):
    """Returns the ErrorKind for value, or value unchanged when it is out of range."""
    if isinstance(value, ErrorKind):
        return value
    try:
        return ErrorKind(value)
    except (ValueError, TypeError):
        return value


def kind_label(value) -> str:
    """Printable label of a kind. Never fails: unknown values map to UNKNOWN_LABEL."""
    kind = to_kind(value)
    if isinstance(kind, ErrorKind):
        return kind.label
    return UNKNOWN_LABEL
