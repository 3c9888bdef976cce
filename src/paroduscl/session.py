""" The :class:`Session` is the client side of a link to the parodus relay.
    It owns one inbound endpoint, bound locally, on which the relay delivers
    messages; and one outbound endpoint, connected to the relay, used for
    everything this client sends.

    A session is usable from several threads at once, for example one thread
    looping on :func:`Session.recv` while another issues :func:`Session.send`
    calls. All access to the endpoints and to the authorization state is
    serialized by a single lock, which is never held while an application
    handler runs.

    It is the caller's responsibility to ensure no :func:`Session.recv` or
    :func:`Session.send` call is in progress when :func:`Session.term` is
    invoked; stop the polling thread first.
"""

import contextlib
import logging
import threading

from . import config
from . import errors
from . import handlers
from . import transport as transports
from . import wrp
from .dispatch import Dispatcher
from .result import Result
from .transport import PULL, PUSH, TransportError, TransportTimeout, TransportConnectionError, TransportPortError


logger = logging.getLogger(__name__)

authorized_status = 200


@contextlib.contextmanager
def _failure(result):
    """ Translate any :class:`TransportError` raised within the block into
        the :class:`paroduscl.errors.Error` appropriate for *result*.
    """

    try:
        yield
    except TransportError as exc:
        raise errors.error_for(result, exc.errno, str(exc)) from exc



class Session:
    """ Establish the endpoint pair and register with the relay. *params* is
        an optional :class:`paroduscl.config.Params` instance; *transport* is
        an optional :class:`paroduscl.transport.Transport`, the default being
        the ZeroMQ pipeline transport.

        Construction either succeeds completely, or raises a
        :class:`paroduscl.errors.Error` describing the step that failed
        after closing any endpoint opened along the way.

        The readiness descriptors for the inbound and outbound endpoints
        are available as :attr:`recv_fd` and :attr:`send_fd`, for use with
        :mod:`select` or similar event loops.

        :ivar authorized: True if the most recent AUTH from the relay
            carried status 200.
        :ivar auth_status: The status of the most recent AUTH, or -1 if
            none has been received.
    """

    def __init__(self, params=None, transport=None):

        params = config.resolve(params)

        self.service_name = params.service_name
        self.url_parodus = params.url_parodus
        self.url_client = params.url_client
        self.timeout_recv = params.timeout_recv * 1000
        self.timeout_send = params.timeout_send * 1000

        self.authorized = False
        self.auth_status = -1
        self.recv_fd = None
        self.send_fd = None

        self.lock = threading.Lock()
        self.terminated = False
        self._recv = None
        self._send = None

        self.handlers = handlers.table(params.handlers, params.callbacks())
        self.dispatch = Dispatcher(self.service_name, self.handlers, self._authorize)

        if transport is None:
            transport = transports.default()
        self.transport = transport

        logger.info("service name <%s> parodus <%s> client <%s>", self.service_name, self.url_parodus, self.url_client)

        with contextlib.ExitStack() as cleanup:
            cleanup.callback(self._unwind)

            self._open_recv()
            self._open_send()
            self._register()

            cleanup.pop_all()


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.term()


    def __repr__(self):
        return '<Session %r parodus=%r client=%r authorized=%r>' % (self.service_name, self.url_parodus, self.url_client, self.authorized)


    def _open_recv(self):

        try:
            self._recv = self.transport.open(PULL, self.url_client)
        except TransportPortError as exc:
            raise errors.error_for(Result.ERROR_SOCK_RECV_BIND, exc.errno, str(exc)) from exc
        except TransportError as exc:
            raise errors.error_for(Result.ERROR_SOCK_RECV_CREATE, exc.errno, str(exc)) from exc

        if self.timeout_recv > 0:
            with _failure(Result.ERROR_SOCK_RECV_SETOPT):
                self._recv.set_timeout(self.timeout_recv)

        with _failure(Result.ERROR_SOCK_RECV_GETOPT):
            self.recv_fd = self._recv.fileno()


    def _open_send(self):

        try:
            self._send = self.transport.open(PUSH, self.url_parodus)
        except TransportConnectionError as exc:
            raise errors.error_for(Result.ERROR_SOCK_SEND_CONNECT, exc.errno, str(exc)) from exc
        except TransportError as exc:
            raise errors.error_for(Result.ERROR_SOCK_SEND_CREATE, exc.errno, str(exc)) from exc

        with _failure(Result.ERROR_SOCK_SEND_SETOPT):
            self._send.set_timeout(self.timeout_send)

        with _failure(Result.ERROR_SOCK_SEND_GETOPT):
            self.send_fd = self._send.fileno()


    def _register(self):
        """ Announce this service to the relay. This does not wait for a
            response; the relay answers, eventually, with an AUTH message
            that arrives via :func:`recv`.
        """

        msg = wrp.message.registration(self.service_name, self.url_client)

        try:
            self._send_wrp(msg)
        except errors.Error as exc:
            raise errors.RegistrationError(exc.text, errno=exc.errno) from exc


    def _authorize(self, status):

        with self.lock:
            self.authorized = status == authorized_status
            self.auth_status = status

        if status == authorized_status:
            logger.info("authorized by parodus")
        else:
            logger.warning("not authorized by parodus, status %r", status)


    def _close_endpoints(self):
        """ Close whichever endpoints are still open. Both are attempted even
            if the first fails; the first failure, if any, is returned.
        """

        failure = None

        for attribute in ('_recv', '_send'):
            endpoint = getattr(self, attribute)
            if endpoint is None:
                continue

            setattr(self, attribute, None)

            try:
                endpoint.close()
            except TransportError as exc:
                logger.error("failed to close %s endpoint: %s", endpoint.role, exc)
                if failure is None:
                    failure = exc

        self.recv_fd = None
        self.send_fd = None
        return failure


    def _unwind(self):
        # Only reached while construction is failing; the original exception
        # is the one the caller needs to see.
        self._close_endpoints()
        self.terminated = True


    def _check(self):
        if self.terminated:
            raise errors.ParamsError('session has been terminated')


    def _send_wrp(self, msg):

        try:
            data = wrp.encode(msg)
        except wrp.CodecError as exc:
            raise errors.SendError(str(exc), result=Result.ERROR_SOCK_SEND_WRP) from exc

        with self.lock:
            self._check()
            with _failure(Result.ERROR_SOCK_SEND_WRITE):
                sent = self._send.send(data)

        if sent != len(data):
            raise errors.SendError('%d of %d bytes sent' % (sent, len(data)), result=Result.ERROR_SOCK_SEND_PARTIAL)

        return Result.SUCCESS


    def recv(self):
        """ Receive and dispatch a single message, blocking for up to the
            receive timeout. Returns a :class:`paroduscl.result.Result`:

            * ``ERROR_SOCK_RECV_TIMEOUT`` if nothing arrived in time;
            * ``ERROR_SOCK_RECV_SVCNAME`` if an addressed message was for
              some other service, in which case no handler is invoked;
            * the return value of the handler, for messages that were
              handed to one;
            * ``SUCCESS`` for AUTH and registration messages.

            The first two are routine and the caller should simply try
            again. Read, decode, and unknown-type failures raise
            :class:`paroduscl.errors.ReceiveError`.
        """

        with self.lock:
            self._check()

            try:
                data = self._recv.recv()
            except TransportTimeout:
                return Result.ERROR_SOCK_RECV_TIMEOUT
            except TransportError as exc:
                raise errors.ReceiveError(str(exc), result=Result.ERROR_SOCK_RECV_READ, errno=exc.errno) from exc

            try:
                msg = wrp.decode(data)
            except wrp.CodecError as exc:
                logger.warning("discarding undecodable message (%d bytes): %s", len(data), exc)
                raise errors.ReceiveError(str(exc), result=Result.ERROR_SOCK_RECV_WRP) from exc

        return self.dispatch(msg)


    def send(self, msg):
        """ Send a :mod:`paroduscl.wrp` message to the relay. Raises
            :class:`paroduscl.errors.AuthorizationError` if the relay has
            not authorized this session; nothing is sent in that case.
            Returns ``Result.SUCCESS`` once the transport accepts the
            message, which is not a guarantee of delivery.
        """

        if msg is None or not isinstance(msg, wrp.Message):
            raise errors.ParamsError('expected a WRP message, not ' + type(msg).__name__)

        with self.lock:
            self._check()
            authorized = self.authorized
            status = self.auth_status

        if not authorized:
            raise errors.AuthorizationError('parodus auth status %d' % (status))

        return self._send_wrp(msg)


    def term(self):
        """ Close both endpoints. Calling :func:`term` more than once is
            harmless. Raises :class:`paroduscl.errors.InternalError` if an
            endpoint could not be closed cleanly.
        """

        with self.lock:
            if self.terminated:
                return Result.SUCCESS

            failure = self._close_endpoints()
            self.terminated = True

        if failure is not None:
            raise errors.InternalError(str(failure), errno=failure.errno) from failure

        logger.info("session for <%s> terminated", self.service_name)
        return Result.SUCCESS


# end of class Session



def init(params=None, transport=None):
    """ Create and return a new :class:`Session`; see the class for details.
    """

    return Session(params, transport)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
