import grpc

from ..common.errors import OpError, error_message, is_kind
from ..common.kinds import ErrorKind

# Checked in order, first match wins. Kinds not listed map to INTERNAL.
KIND_TO_GRPC_CODE = (
    (ErrorKind.INVALID_ARGUMENT, grpc.StatusCode.INVALID_ARGUMENT),
    (ErrorKind.NOT_FOUND, grpc.StatusCode.NOT_FOUND),
    (ErrorKind.INVALID_OPERATION, grpc.StatusCode.NOT_FOUND),
    (ErrorKind.TIMEOUT, grpc.StatusCode.DEADLINE_EXCEEDED),
    (ErrorKind.PERMISSION_DENIED, grpc.StatusCode.PERMISSION_DENIED),
    (ErrorKind.UNAUTHENTICATED, grpc.StatusCode.UNAUTHENTICATED),
    (ErrorKind.TOO_MANY, grpc.StatusCode.RESOURCE_EXHAUSTED),
    (ErrorKind.ALREADY_EXISTS, grpc.StatusCode.ALREADY_EXISTS),
)


def to_grpc_code(err) -> grpc.StatusCode:
    """
    gRPC status code for err. Unclassified errors are internal faults.
    """
    if err is None:
        return grpc.StatusCode.OK
    if not isinstance(err, OpError):
        return grpc.StatusCode.INTERNAL
    for kind, code in KIND_TO_GRPC_CODE:
        if is_kind(kind, err):
            return code
    return grpc.StatusCode.INTERNAL


def abort_with(context, err) -> None:
    """
    Aborts the RPC behind a grpc.ServicerContext with the code and message of
    err. Does nothing when err is None.
    """
    if err is None:
        return
    context.abort(to_grpc_code(err), error_message(err))
