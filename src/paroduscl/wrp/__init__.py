""" WRP envelope model and codec. The session treats this as an opaque
    encode/decode boundary, only inspecting the message kind and a handful
    of fields during dispatch.
"""

from . import codec
from . import message

from .codec import CodecError, encode, decode
from .message import (
    MsgType,
    Message,
    Auth,
    SvcRegistration,
    SvcAlive,
    Req,
    Event,
    Create,
    Retrieve,
    Update,
    Delete,
    Unknown,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
