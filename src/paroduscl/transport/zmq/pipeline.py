"""ZeroMQ PUSH/PULL pipeline transport.

A session holds one PULL socket bound to its local address, on which the
relay delivers messages, and one PUSH socket connected to the relay. Each
message is a single frame containing one encoded WRP envelope.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Optional

import zmq

from ..base import (
    PULL,
    PUSH,
    Endpoint,
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportPortError,
)


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()

_socket_types = {
    PULL: zmq.PULL,
    PUSH: zmq.PUSH,
}


def _translate(exc: zmq.ZMQError, cls=TransportError) -> TransportError:
    if isinstance(exc, zmq.Again):
        cls = TransportTimeout
    return cls(str(exc), errno=exc.errno)


class PipelineEndpoint(Endpoint):
    """A single ZeroMQ PUSH or PULL socket.

    The socket is not thread-safe; callers serialize access to it. The
    session does so with its own lock.
    """

    def __init__(self, role: str, address: str, context: Optional[zmq.Context] = None):
        if role not in _socket_types:
            raise TransportError(f"unknown endpoint role: {role!r}")

        self.role = role
        self.address = address
        self.context = context or zmq_context

        try:
            self.socket = self.context.socket(_socket_types[role])
        except zmq.ZMQError as exc:
            raise _translate(exc) from exc

        try:
            self.socket.setsockopt(zmq.LINGER, 0)
        except zmq.ZMQError as exc:
            self.socket.close()
            raise _translate(exc) from exc

        try:
            if role == PULL:
                self.socket.bind(address)
            else:
                self.socket.connect(address)
        except zmq.ZMQError as exc:
            self.socket.close()
            if role == PULL:
                raise _translate(exc, TransportPortError) from exc
            raise _translate(exc, TransportConnectionError) from exc

        logger.debug("%s endpoint open on %s", role, address)

    def set_timeout(self, milliseconds: int) -> None:
        option = zmq.RCVTIMEO if self.role == PULL else zmq.SNDTIMEO
        try:
            self.socket.setsockopt(option, int(milliseconds))
        except zmq.ZMQError as exc:
            raise _translate(exc) from exc

    def send(self, data: bytes) -> int:
        try:
            self.socket.send(data, copy=True)
        except zmq.ZMQError as exc:
            raise _translate(exc) from exc

        # ZeroMQ frames are atomic: a send either queues the whole frame
        # or fails.
        return len(data)

    def recv(self) -> bytes:
        try:
            return self.socket.recv()
        except zmq.ZMQError as exc:
            raise _translate(exc) from exc

    def fileno(self) -> int:
        try:
            return self.socket.getsockopt(zmq.FD)
        except zmq.ZMQError as exc:
            raise _translate(exc) from exc

    def close(self) -> None:
        try:
            self.socket.close(linger=0)
        except zmq.ZMQError as exc:
            raise _translate(exc) from exc
        logger.debug("%s endpoint closed on %s", self.role, self.address)

    @property
    def is_open(self) -> bool:
        return not self.socket.closed


class PipelineTransport(Transport):

    def __init__(self, context: Optional[zmq.Context] = None):
        self.context = context or zmq_context

    def open(self, role: str, address: str) -> PipelineEndpoint:
        return PipelineEndpoint(role, address, self.context)


_transport: Optional[PipelineTransport] = None
_transport_lock = threading.Lock()


def transport() -> PipelineTransport:
    """Return the shared transport instance for this process."""

    global _transport
    with _transport_lock:
        if _transport is None:
            _transport = PipelineTransport()
        return _transport


def _cleanup() -> None:
    try:
        zmq_context.destroy(linger=0)
    except zmq.ZMQError:
        pass


atexit.register(_cleanup)
