""" Session configuration. Every field of :class:`Params` is optional; a
    field left as None is filled in with a default when the session is
    created. Defaults can be overridden for a whole process via environment
    variables, which is convenient when the relay is not on its usual port.
"""

import os

from . import errors
from . import handlers


service_name = 'iot'
url_parodus = 'tcp://127.0.0.1:6666'
url_client = 'tcp://127.0.0.1:6667'
timeout_recv = 2
timeout_send = 2

# Limits inherited from the fixed-size buffers of the C client library,
# in bytes, not counting a terminating null.

service_name_max = 63
url_max = 255

environment = {
    'service_name': 'PARODUSCL_SERVICE_NAME',
    'url_parodus': 'PARODUSCL_URL_PARODUS',
    'url_client': 'PARODUSCL_URL_CLIENT',
    'timeout_recv': 'PARODUSCL_TIMEOUT_RECV',
    'timeout_send': 'PARODUSCL_TIMEOUT_SEND',
}

handler_names = ('request', 'event', 'create', 'retrieve', 'update', 'delete', 'alive')


class Params:
    """ Configuration for a :class:`paroduscl.Session`.

        *service_name* is the identity this client answers to; addressed
        messages whose destination does not name this service are dropped.
        *url_parodus* is the relay address the outbound endpoint connects
        to, *url_client* the local address the inbound endpoint binds.
        *timeout_recv* and *timeout_send* are in whole seconds; a receive
        timeout of zero blocks forever.

        Handlers may be supplied either as a :class:`paroduscl.Handlers`
        instance via *handlers*, or individually as plain callables via the
        *handler_request*, *handler_event*, *handler_create*,
        *handler_retrieve*, *handler_update*, *handler_delete*, and
        *handler_alive* keyword arguments. The two styles cannot be mixed.
    """

    def __init__(self, service_name=None, url_parodus=None, url_client=None,
                 timeout_recv=None, timeout_send=None, handlers=None,
                 handler_request=None, handler_event=None, handler_create=None,
                 handler_retrieve=None, handler_update=None,
                 handler_delete=None, handler_alive=None):

        self.service_name = service_name
        self.url_parodus = url_parodus
        self.url_client = url_client
        self.timeout_recv = timeout_recv
        self.timeout_send = timeout_send
        self.handlers = handlers

        self.handler_request = handler_request
        self.handler_event = handler_event
        self.handler_create = handler_create
        self.handler_retrieve = handler_retrieve
        self.handler_update = handler_update
        self.handler_delete = handler_delete
        self.handler_alive = handler_alive


    def callbacks(self):
        """ Return a dictionary of the individually supplied handler
            callables, keyed by handler name, omitting any left as None.
        """

        callbacks = dict()

        for name in handler_names:
            callback = getattr(self, 'handler_' + name)
            if callback is not None:
                callbacks[name] = callback

        return callbacks


# end of class Params



def default(field):
    """ Return the default value for the named *field*, honoring any
        environment override.
    """

    value = globals()[field]

    try:
        override = os.environ[environment[field]]
    except KeyError:
        return value

    if field.startswith('timeout_'):
        try:
            override = int(override)
        except ValueError:
            raise errors.ParamsError('%s must be an integer: %r' % (environment[field], override))

    return override



def resolve(params=None):
    """ Return a new :class:`Params` instance with every None field replaced
        by its default, after validating the contents. Raises
        :class:`paroduscl.errors.ParamsError` for anything unusable.
    """

    if params is None:
        params = Params()
    elif not isinstance(params, Params):
        raise errors.ParamsError('expected a Params instance, not ' + type(params).__name__)

    resolved = Params(handlers=params.handlers, **dict(('handler_' + name, callback) for name, callback in params.callbacks().items()))

    for field in environment.keys():
        value = getattr(params, field)
        if value is None:
            value = default(field)
        setattr(resolved, field, value)

    _check_string('service_name', resolved.service_name, service_name_max)
    _check_string('url_parodus', resolved.url_parodus, url_max)
    _check_string('url_client', resolved.url_client, url_max)
    _check_timeout('timeout_recv', resolved.timeout_recv)
    _check_timeout('timeout_send', resolved.timeout_send)

    if resolved.handlers is not None and not isinstance(resolved.handlers, handlers.Handlers):
        raise errors.ParamsError('handlers must be a Handlers instance, not ' + repr(resolved.handlers))

    for name, callback in resolved.callbacks().items():
        if not callable(callback):
            raise errors.ParamsError('handler_%s is not callable' % (name))

    if resolved.handlers is not None and resolved.callbacks():
        raise errors.ParamsError('specify either a Handlers instance or individual handler callables, not both')

    return resolved



def _check_string(field, value, maximum):

    if not isinstance(value, str) or value == '':
        raise errors.ParamsError('%s must be a non-empty string' % (field))

    length = len(value.encode())
    if length > maximum:
        raise errors.ParamsError('%s is %d bytes, maximum is %d' % (field, length, maximum))



def _check_timeout(field, value):

    # bool is an int subclass, but True is not a meaningful timeout.
    if isinstance(value, bool) or not isinstance(value, int):
        raise errors.ParamsError('%s must be an integer number of seconds' % (field))

    if value < 0:
        raise errors.ParamsError('%s must not be negative' % (field))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
