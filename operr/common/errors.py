"""
Classified, chainable errors.

Every layer that wants to add context wraps the error it received in a new
OpError naming the operation it was performing:

    >>> raw = ConnectionError("connection refused")
    >>> err = new(ErrorKind.NOT_FOUND, "get", new(ErrorKind.INTERNAL, "fetch", raw))
    >>> str(err)
    'get: resource not found => fetch: internal error: connection refused'

Two inspection helpers answer different questions and must not be confused:

- get_kind(err) returns the kind declared by the outermost node only.
- is_kind(kind, err) walks through OTHER-typed wrappers and reports whether
  the first explicitly typed node in the chain is `kind`.

Any value that is not an OpError is treated as an opaque error: its message
is used as-is and it is never inspected further.
"""

from typing import Optional

from .kinds import ErrorKind, kind_label, to_kind

NO_ERROR = "no error"
SEPARATOR = " => "
FIELD_SEPARATOR = ": "


class OpError(Exception):
    """
    A classified error node: kind + operation + optional cause. Immutable once
    constructed.
    """

    def __init__(self, kind=ErrorKind.OTHER, op: Optional[str] = "", cause=None):
        super().__init__(kind, op, cause)
        self._kind = to_kind(kind)
        self._op = "" if op is None else op
        self._cause = cause

    @property
    def kind(self):
        return self._kind

    @property
    def op(self) -> str:
        return self._op

    @property
    def cause(self):
        return self._cause

    def is_zero(self) -> bool:
        return self._op == "" and self._kind == ErrorKind.OTHER and self._cause is None

    def _fields(self) -> str:
        fields = []
        if self._op != "":
            fields.append(str(self._op))
        if isinstance(self._kind, int) and self._kind > 0:
            fields.append(kind_label(self._kind))
        return FIELD_SEPARATOR.join(fields)

    def __str__(self) -> str:
        # Iterative: chains may be deeper than the recursion limit.
        chain = [self]
        while isinstance(chain[-1]._cause, OpError) and not chain[-1]._cause.is_zero():
            chain.append(chain[-1]._cause)

        rendered = None
        for node in reversed(chain):
            text = node._fields()
            if rendered is not None:
                separator, tail = SEPARATOR, rendered
            elif node._cause is not None and not isinstance(node._cause, OpError):
                separator, tail = FIELD_SEPARATOR, str(node._cause)
            else:
                separator, tail = "", None
            if tail is not None:
                if text:
                    text += separator
                text += tail
            rendered = text or NO_ERROR
        return rendered

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind!r}, op={self._op!r}, cause={self._cause!r})"


def new(kind: ErrorKind, op: str, cause=None) -> OpError:
    """Classified error for op, wrapping cause (another OpError, any error, or None)."""
    return OpError(kind, op, cause)


def first_error(kind: ErrorKind, op: str, *causes) -> Optional[OpError]:
    """
    Wraps the first non-None cause, or returns None when every cause is None.
    Handy to collapse several fallible sub-steps into a single failure.
    """
    for cause in causes:
        if cause is not None:
            return OpError(kind, op, cause)
    return None


def get_kind(err) -> ErrorKind:
    """
    Kind declared by err itself, ErrorKind.OTHER if err is not an OpError.
    The cause chain is NOT consulted; use is_kind for that.
    """
    if not isinstance(err, OpError):
        return ErrorKind.OTHER
    return err.kind


def is_kind(kind: ErrorKind, err) -> bool:
    """
    True if the first explicitly typed node of the chain is `kind`.

    Nodes typed OTHER defer to their cause; the first node with any other kind
    decides the answer, even when a deeper node matches.
    """
    while isinstance(err, OpError):
        if err.kind != ErrorKind.OTHER:
            return err.kind == kind
        err = err.cause
    return False


def origin(err):
    """
    Deepest opaque (non OpError) cause of the chain, None when the chain ends
    with None. Opaque errors are returned as found, not unwrapped.
    """
    if not isinstance(err, OpError):
        return None
    while isinstance(err.cause, OpError):
        err = err.cause
    return err.cause


def error_message(err) -> str:
    """Rendered message of err, "no error" for None."""
    if err is None:
        return NO_ERROR
    return str(err)
