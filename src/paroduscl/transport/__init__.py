"""Transport layer implementations."""

import os

from .base import (
    PULL,
    PUSH,
    Endpoint,
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportPortError,
)

_BACKEND = os.environ.get("PARODUSCL_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from .zmq import pipeline as backend
else:
    raise ImportError(f"unknown PARODUSCL_TRANSPORT backend: {_BACKEND!r}")


def default():
    """Return the transport selected for this process."""
    return backend.transport()
