""" Python client for the parodus relay. A :class:`Session` registers a
    named service with the relay, receives WRP messages addressed to that
    service and hands them to application handlers, and sends messages back
    once the relay has authorized it.
"""

# Utility components.

from . import result
from . import errors
from . import config

# Submodules used by multiple other components.

from . import wrp
from . import transport
from . import handlers
from . import dispatch

# Primary public-facing interfaces.

from . import session
init = session.init

from .config import Params
from .handlers import Handlers
from .result import Result, result_str
from .session import Session

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
