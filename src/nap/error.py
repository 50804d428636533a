from typing import cast

from nap.status import Status, register_error_type


class NapError(Exception):
    """Base class for nap exceptions."""

    _status = Status.UNSPECIFIED

    @property
    def status(self) -> Status:
        return self._status


class InvalidArgumentError(NapError, ValueError):
    """Invalid argument was received, for example an unsupported verb or an
    incomplete set of TLS options."""

    _status = Status.INVALID_ARGUMENT


class DisconnectedError(NapError, ConnectionError):
    """The connection ended before a complete response was read."""

    _status = Status.DISCONNECTED


def nap_error_status(error: BaseException) -> Status:
    return cast(NapError, error)._status


register_error_type(NapError, nap_error_status)
