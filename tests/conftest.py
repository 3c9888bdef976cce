import itertools
import pytest
import zmq

import paroduscl
from paroduscl.transport.zmq import pipeline

from fakeparodus import FakeTransport


_unique = itertools.count()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):

    # Defaults can be overridden from the environment; make sure the
    # invoking shell doesn't influence the results.

    for variable in paroduscl.config.environment.values():
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def session(transport):

    session = paroduscl.Session(transport=transport)
    yield session
    session.term()


@pytest.fixture
def authorized(session, transport):

    transport.deliver(paroduscl.wrp.Auth(status=200))
    assert session.recv() == paroduscl.Result.SUCCESS
    assert session.authorized == True

    # Discard the registration message, tests only care about what
    # follows it.

    del transport.outbound.sent[:]
    return session


@pytest.fixture
def relay():
    """ A ZeroMQ stand-in for the parodus relay, using inproc endpoints on
        the same context as the pipeline transport.
    """

    index = next(_unique)
    relay = Relay('inproc://parodus.%d' % (index), 'inproc://client.%d' % (index))
    yield relay
    relay.close()



class Relay:

    def __init__(self, url_parodus, url_client):

        self.url_parodus = url_parodus
        self.url_client = url_client

        self.pull = pipeline.zmq_context.socket(zmq.PULL)
        self.pull.setsockopt(zmq.LINGER, 0)
        self.pull.setsockopt(zmq.RCVTIMEO, 2000)
        self.pull.bind(url_parodus)

        self.push = None


    def params(self, **kwargs):
        return paroduscl.Params(url_parodus=self.url_parodus, url_client=self.url_client, **kwargs)


    def receive(self):
        return paroduscl.wrp.decode(self.pull.recv())


    def deliver(self, msg):

        if self.push is None:
            self.push = pipeline.zmq_context.socket(zmq.PUSH)
            self.push.setsockopt(zmq.LINGER, 0)
            self.push.setsockopt(zmq.SNDTIMEO, 2000)
            self.push.connect(self.url_client)

        self.push.send(paroduscl.wrp.encode(msg))


    def close(self):
        self.pull.close()
        if self.push is not None:
            self.push.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
