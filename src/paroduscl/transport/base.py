"""Transport interface.

This is the (small) contract that a transport implementation follows. The
session only ever needs a pair of one-way pipes: a PULL endpoint bound to a
local address, and a PUSH endpoint connected to the relay.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


PULL = "pull"
PUSH = "push"


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""

    def __init__(self, *args, errno: int = 0):
        super().__init__(*args)
        self.errno = errno


class TransportTimeout(TransportError):
    """A blocking send or receive did not complete in time."""


class TransportConnectionError(TransportError):
    """An endpoint could not be connected to its remote address."""


class TransportPortError(TransportError):
    """An endpoint could not be bound to its local address."""


class Endpoint(ABC):
    """One end of a unidirectional pipe."""

    role: str
    address: str

    @abstractmethod
    def set_timeout(self, milliseconds: int) -> None:
        """Bound blocking calls on this endpoint to *milliseconds*."""

    @abstractmethod
    def send(self, data: bytes) -> int:
        """Send one message; return the number of bytes accepted."""

    @abstractmethod
    def recv(self) -> bytes:
        """Receive one complete message."""

    @abstractmethod
    def fileno(self) -> int:
        """Return a descriptor usable with select/poll for readiness."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the endpoint."""

    @property
    def is_open(self) -> bool:
        """Whether the endpoint is currently usable."""
        return False


class Transport(ABC):
    """Factory for :class:`Endpoint` instances."""

    @abstractmethod
    def open(self, role: str, address: str) -> Endpoint:
        """Create an endpoint; PULL endpoints bind, PUSH endpoints connect."""
