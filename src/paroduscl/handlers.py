""" Application hooks for inbound messages. Subclass :class:`Handlers` and
    override the methods for the message types of interest; any method not
    overridden quietly accepts the message. Alternatively, individual
    callables can be supplied via :class:`paroduscl.config.Params`.

    Each handler receives the decoded :mod:`paroduscl.wrp` message and
    returns a :class:`paroduscl.result.Result`, which becomes the return
    value of :func:`paroduscl.Session.recv`. Returning None is the same as
    returning ``Result.SUCCESS``. The message is only valid for the duration
    of the call; copy anything that needs to be retained.
"""

import types

from .result import Result
from .wrp.message import MsgType


class Handlers:
    """ Default handler implementations; every one is a no-op.
    """

    def request(self, msg):
        return Result.SUCCESS

    def event(self, msg):
        return Result.SUCCESS

    def create(self, msg):
        return Result.SUCCESS

    def retrieve(self, msg):
        return Result.SUCCESS

    def update(self, msg):
        return Result.SUCCESS

    def delete(self, msg):
        return Result.SUCCESS

    def alive(self):
        """ Invoked for every service-alive message from the relay. Takes
            no arguments; the message carries no content.
        """
        return Result.SUCCESS

    def register(self, msg):
        """ Invoked when the relay echoes a service registration. The
            return value is ignored.
        """
        return Result.SUCCESS


# end of class Handlers


slots = {
    MsgType.REQ: 'request',
    MsgType.EVENT: 'event',
    MsgType.CREATE: 'create',
    MsgType.RETRIEVE: 'retrieve',
    MsgType.UPDATE: 'update',
    MsgType.DELETE: 'delete',
    MsgType.SVC_ALIVE: 'alive',
    MsgType.SVC_REGISTRATION: 'register',
}

_by_name = dict((name, kind) for kind, name in slots.items())


def table(handlers=None, callbacks=None):
    """ Return a read-only mapping of :class:`MsgType` to the callable
        bound for that message type. *handlers* is a :class:`Handlers`
        instance, or None to use the defaults; *callbacks* is an optional
        dictionary of handler name to callable that takes precedence.
    """

    if handlers is None:
        handlers = Handlers()

    bound = dict()

    for kind, name in slots.items():
        bound[kind] = getattr(handlers, name)

    if callbacks:
        for name, callback in callbacks.items():
            try:
                kind = _by_name[name]
            except KeyError:
                raise ValueError('no such handler: ' + repr(name))
            bound[kind] = callback

    return types.MappingProxyType(bound)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
