""" Class representations of WRP (Web Routing Protocol) messages, the
    envelope format spoken with the parodus relay.

    Each message type is a :class:`msgspec.Struct` tagged with its numeric
    wire type in the ``msg_type`` field; the field names match the keys of
    the msgpack map on the wire. Optional fields left as None are omitted
    when encoding.
"""

import enum
from typing import Dict, List, Optional

import msgspec


class MsgType(enum.IntEnum):

    AUTH             = 2
    REQ              = 3
    EVENT            = 4
    CREATE           = 5
    RETRIEVE         = 6
    UPDATE           = 7
    DELETE           = 8
    SVC_REGISTRATION = 9
    SVC_ALIVE        = 10
    UNKNOWN          = 11


class Message(msgspec.Struct, tag_field='msg_type', omit_defaults=True, kw_only=True):
    """ Common base for all WRP messages. The :attr:`kind` property returns
        the :class:`MsgType` for the concrete message class.
    """

    @property
    def kind(self):
        return MsgType(self.__struct_config__.tag)


class Auth(Message, tag=int(MsgType.AUTH)):
    """ Sent by the relay to report whether this service is authorized. A
        *status* of 200 grants authorization, anything else revokes it.
    """

    status: int


class SvcRegistration(Message, tag=int(MsgType.SVC_REGISTRATION)):
    """ Sent to the relay to announce *service_name*, and the *url* on which
        this client is listening. The relay may echo it back.
    """

    service_name: str
    url: str


class SvcAlive(Message, tag=int(MsgType.SVC_ALIVE)):
    pass


class Addressed(Message):
    """ Fields shared by every message routed to a specific destination. The
        *dest* field is what destination matching is applied to, for example
        ``mac:112233445566/iot/some/path``.
    """

    source: str = ''
    dest: str = ''
    content_type: Optional[str] = None
    payload: Optional[bytes] = None
    headers: Optional[List[str]] = None
    metadata: Optional[Dict[str, str]] = None
    partner_ids: Optional[List[str]] = None


class Req(Addressed, tag=int(MsgType.REQ)):

    transaction_uuid: str = ''
    accept: Optional[str] = None


class Event(Addressed, tag=int(MsgType.EVENT)):
    pass


class Crud(Addressed):

    transaction_uuid: str = ''
    accept: Optional[str] = None
    status: Optional[int] = None
    rdr: Optional[int] = None
    path: Optional[str] = None


class Create(Crud, tag=int(MsgType.CREATE)):
    pass


class Retrieve(Crud, tag=int(MsgType.RETRIEVE)):
    pass


class Update(Crud, tag=int(MsgType.UPDATE)):
    pass


class Delete(Crud, tag=int(MsgType.DELETE)):
    pass


class Unknown(Message, tag=int(MsgType.UNKNOWN)):
    """ Stand-in for any message whose type is not recognized. The original
        numeric type, if there was one, is retained as *code*.
    """

    code: Optional[int] = None


# Every concrete message type, in the order the union is presented to the
# decoder.

types = (Auth, Req, Event, Create, Retrieve, Update, Delete, SvcRegistration, SvcAlive, Unknown)

addressed = frozenset((
    MsgType.REQ,
    MsgType.EVENT,
    MsgType.CREATE,
    MsgType.RETRIEVE,
    MsgType.UPDATE,
    MsgType.DELETE,
))


def registration(service_name, url):
    """ Build the :class:`SvcRegistration` message a client sends to the
        relay when it comes online.
    """

    return SvcRegistration(service_name=service_name, url=url)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
