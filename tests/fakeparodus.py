""" A stand-in transport that never touches the network, to act as a foil
    for the session unit tests. Every operation can be made to fail on
    demand, and every open and close is counted, so that tests can verify
    no endpoint is leaked or closed twice.
"""

import collections
import errno
import itertools

import paroduscl
from paroduscl.transport import (
    PULL,
    PUSH,
    Endpoint,
    Transport,
    TransportError,
    TransportTimeout,
)


_fd = itertools.count(100)


class FakeEndpoint(Endpoint):

    def __init__(self, transport, role, address):

        self.transport = transport
        self.role = role
        self.address = address
        self.timeout = None
        self.fd = next(_fd)

        self.inbox = collections.deque()
        self.sent = list()
        self.short = 0
        self.closes = 0


    def set_timeout(self, milliseconds):
        self.transport.check(self.role + '.set_timeout')
        self.timeout = milliseconds


    def send(self, data):
        self.transport.check(self.role + '.send')
        self.sent.append(data)
        return len(data) - self.short


    def recv(self):
        self.transport.check(self.role + '.recv')

        if len(self.inbox) == 0:
            raise TransportTimeout('Resource temporarily unavailable', errno=errno.EAGAIN)

        return self.inbox.popleft()


    def fileno(self):
        self.transport.check(self.role + '.fileno')
        return self.fd


    def close(self):
        self.closes += 1
        self.transport.check(self.role + '.close')


    @property
    def is_open(self):
        return self.closes == 0


# end of class FakeEndpoint



class FakeTransport(Transport):
    """ Set entries in the *failures* dictionary, for example
        ``failures['push.send'] = TransportError(...)``, to make the named
        operation raise.
    """

    def __init__(self):
        self.failures = dict()
        self.opened = list()


    def check(self, operation):
        try:
            failure = self.failures[operation]
        except KeyError:
            return
        raise failure


    def open(self, role, address):
        self.check(role + '.open')
        endpoint = FakeEndpoint(self, role, address)
        self.opened.append(endpoint)
        return endpoint


    def endpoint(self, role):
        for endpoint in self.opened:
            if endpoint.role == role:
                return endpoint


    @property
    def inbound(self):
        return self.endpoint(PULL)


    @property
    def outbound(self):
        return self.endpoint(PUSH)


    def deliver(self, msg):
        """ Queue a message, or raw bytes, for the session to receive.
        """

        if isinstance(msg, bytes):
            data = msg
        else:
            data = paroduscl.wrp.encode(msg)

        self.inbound.inbox.append(data)


# end of class FakeTransport


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
