"""Exceptions raised by session operations.

Every exception carries the specific :class:`~paroduscl.result.Result` that
describes the failure, plus the platform errno (0 when there is none).
"""

from __future__ import annotations

from typing import Optional

from .result import Result, result_str


class Error(Exception):
    """Base class for all paroduscl errors."""

    default_result = Result.ERROR_INTERNAL

    def __init__(self, text: Optional[str] = None, result: Optional[Result] = None, errno: int = 0):
        if result is None:
            result = self.default_result
        self.result = Result(result)
        self.errno = errno or 0
        self.text = text

        message = result_str(self.result)
        if text:
            message = f"{message}: {text}"
        if self.errno:
            message = f"{message} (errno {self.errno})"

        super().__init__(message)


class ParamsError(Error, ValueError):
    """Invalid arguments or configuration."""

    default_result = Result.ERROR_PARAMS


class OutOfMemoryError(Error):
    default_result = Result.ERROR_OUT_OF_MEMORY


class EndpointError(Error):
    """An inbound or outbound endpoint could not be set up."""


class ReceiveError(Error):
    """A message could not be read, decoded, or classified."""

    default_result = Result.ERROR_SOCK_RECV_READ


class SendError(Error):
    default_result = Result.ERROR_SOCK_SEND_WRITE


class AuthorizationError(SendError):
    """The relay has not (or no longer) authorized this session."""

    default_result = Result.ERROR_SOCK_SEND_AUTH


class RegistrationError(Error):
    default_result = Result.ERROR_REGISTER


class InternalError(Error):
    default_result = Result.ERROR_INTERNAL


_endpoint_results = set((
    Result.ERROR_SOCK_RECV_CREATE,
    Result.ERROR_SOCK_RECV_SETOPT,
    Result.ERROR_SOCK_RECV_GETOPT,
    Result.ERROR_SOCK_RECV_BIND,
    Result.ERROR_SOCK_SEND_CREATE,
    Result.ERROR_SOCK_SEND_SETOPT,
    Result.ERROR_SOCK_SEND_GETOPT,
    Result.ERROR_SOCK_SEND_CONNECT,
))

_receive_results = set((
    Result.ERROR_SOCK_RECV_TIMEOUT,
    Result.ERROR_SOCK_RECV_READ,
    Result.ERROR_SOCK_RECV_WRP,
    Result.ERROR_SOCK_RECV_SVCNAME,
    Result.ERROR_SOCK_RECV_MSGTYPE,
    Result.ERROR_SOCK_RECV_CONTENT,
    Result.ERROR_SOCK_RECV_PAYLOAD,
))

_send_results = set((
    Result.ERROR_SOCK_SEND_WRP,
    Result.ERROR_SOCK_SEND_WRITE,
    Result.ERROR_SOCK_SEND_PARTIAL,
))


def error_for(result: Result, errno: int = 0, text: Optional[str] = None) -> Error:
    """Build the exception instance appropriate for *result*."""

    result = Result(result)

    if result == Result.SUCCESS:
        raise ValueError("SUCCESS is not an error")
    elif result == Result.ERROR_PARAMS:
        cls = ParamsError
    elif result == Result.ERROR_OUT_OF_MEMORY:
        cls = OutOfMemoryError
    elif result in _endpoint_results:
        cls = EndpointError
    elif result in _receive_results:
        cls = ReceiveError
    elif result == Result.ERROR_SOCK_SEND_AUTH:
        cls = AuthorizationError
    elif result in _send_results:
        cls = SendError
    elif result == Result.ERROR_REGISTER:
        cls = RegistrationError
    else:
        cls = InternalError

    return cls(text, result=result, errno=errno)
