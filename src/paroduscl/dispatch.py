"""Classification of inbound messages and delivery to handlers."""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from . import errors
from .result import Result, result_str
from .wrp.message import Message, MsgType, addressed


logger = logging.getLogger(__name__)

prefix = "mac:"
terminators = frozenset("/?#")


def service_name_match(dest: Optional[str], service_name: str) -> bool:
    """Return True if the destination *dest* addresses *service_name*.

    A destination looks like ``mac:112233445566/iot/some/path``. The device
    identifier between the ``mac:`` prefix and the first ``/`` is not
    checked here. The service name must match exactly, and be followed by
    ``/``, ``?``, ``#``, or nothing, so that ``iot`` does not match
    ``iot2``.
    """

    if not dest or not dest.startswith(prefix):
        return False

    slash = dest.find("/", len(prefix))
    if slash < 0:
        return False

    service = dest[slash + 1:]
    if not service.startswith(service_name):
        return False

    remainder = service[len(service_name):]
    return remainder == "" or remainder[0] in terminators


class Dispatcher:
    """Route one decoded message to the handler bound for its type.

    *authorize* is invoked with the status code of every AUTH message; the
    session uses it to update its authorization state. *table* is the
    frozen mapping built by :func:`paroduscl.handlers.table`.
    """

    def __init__(self, service_name: str, table: Mapping[MsgType, Callable], authorize: Callable[[int], None]):
        self.service_name = service_name
        self.table = table
        self.authorize = authorize

    def __call__(self, msg: Message) -> Result:
        kind = msg.kind

        if kind == MsgType.AUTH:
            self.authorize(msg.status)
            return Result.SUCCESS

        if kind == MsgType.SVC_REGISTRATION:
            self.table[kind](msg)
            return Result.SUCCESS

        if kind == MsgType.SVC_ALIVE:
            return _result(self.table[kind]())

        if kind in addressed:
            if not service_name_match(msg.dest, self.service_name):
                logger.debug("%s for %r dropped, not addressed to %r", kind.name, msg.dest, self.service_name)
                return Result.ERROR_SOCK_RECV_SVCNAME

            result = _result(self.table[kind](msg))
            logger.debug("%s for %r handled: %s", kind.name, msg.dest, result_str(result))
            return result

        code = getattr(msg, "code", None)
        logger.warning("unknown message type %r", code if code is not None else kind)
        raise errors.ReceiveError(f"unknown message type {code if code is not None else int(kind)}",
                                  result=Result.ERROR_SOCK_RECV_MSGTYPE)


def _result(value):
    # Handlers may return nothing to signal success.
    if value is None:
        return Result.SUCCESS
    return value
