import enum
from typing import Callable, Dict, Type


@enum.unique
class Status(str, enum.Enum):
    """Coarse classification of a response status code or of the error that
    ended a request."""

    UNSPECIFIED = "unspecified"
    OK = "ok"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    INVALID_ARGUMENT = "invalid_argument"
    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    THROTTLED = "throttled"
    DISCONNECTED = "disconnected"
    TCP_ERROR = "tcp_error"
    HTTP_ERROR = "http_error"

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name


_RESPONSE_CODES = {
    400: Status.INVALID_ARGUMENT,
    401: Status.UNAUTHENTICATED,
    403: Status.PERMISSION_DENIED,
    404: Status.NOT_FOUND,
    408: Status.TIMEOUT,
    429: Status.THROTTLED,
}

_RESPONSE_CLASSES = {
    2: Status.OK,
    3: Status.REDIRECT,
    4: Status.CLIENT_ERROR,
    5: Status.SERVER_ERROR,
}

_ERROR_HANDLERS: Dict[Type[BaseException], Callable[[BaseException], Status]] = {}


def http_response_code_status(code: int) -> Status:
    """Returns the Status of an HTTP response code: a specific one for the
    codes callers usually branch on, otherwise one per class of codes."""
    status = _RESPONSE_CODES.get(code)
    if status is None:
        status = _RESPONSE_CLASSES.get(code // 100, Status.UNSPECIFIED)
    return status


def status_for_error(error: BaseException) -> Status:
    """Returns the Status of the handler registered for the closest base
    class of error, or UNSPECIFIED."""
    for cls in type(error).__mro__:
        handler = _ERROR_HANDLERS.get(cls)
        if handler is not None:
            return handler(error)
    return Status.UNSPECIFIED


def register_error_type(
    error_type: Type[BaseException], handler: Callable[[BaseException], Status]
):
    """Register the handler deriving a Status from errors of error_type and
    its subclasses."""
    _ERROR_HANDLERS[error_type] = handler
