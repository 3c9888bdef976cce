"""Binary codec for WRP messages.

The wire form of a message is a single msgpack map; ``msg_type`` carries the
numeric :class:`~paroduscl.wrp.message.MsgType`.
"""

from __future__ import annotations

from typing import Union

import msgspec

from .message import Message, MsgType, Unknown, types


class CodecError(ValueError):
    """A message could not be encoded or decoded."""


_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder(Union[types])
_known = frozenset(int(msg_type) for msg_type in MsgType)


def encode(msg: Message) -> bytes:
    """Serialize *msg* to bytes."""

    if not isinstance(msg, Message):
        raise CodecError(f"not a WRP message: {type(msg).__name__}")

    try:
        return _encoder.encode(msg)
    except (msgspec.EncodeError, TypeError, OverflowError) as exc:
        raise CodecError(str(exc)) from exc


def decode(data: bytes) -> Message:
    """Deserialize *data* into the appropriate :class:`Message` subclass.

    A well-formed map whose ``msg_type`` is not a known type decodes as
    :class:`Unknown`; anything else that fails to decode raises
    :class:`CodecError`.
    """

    if not data:
        raise CodecError("empty message")

    try:
        return _decoder.decode(data)
    except msgspec.ValidationError as exc:
        error = exc
    except msgspec.DecodeError as exc:
        raise CodecError(str(exc)) from exc

    # The layout was valid msgpack but did not match any known message.
    # Only an unrecognized type code is tolerated; a known type with bad
    # fields is still malformed.

    try:
        raw = msgspec.msgpack.decode(data)
    except msgspec.DecodeError as exc:
        raise CodecError(str(exc)) from exc

    if isinstance(raw, dict):
        code = raw.get('msg_type')
        if isinstance(code, int) and not isinstance(code, bool) and code not in _known:
            return Unknown(code=code)

    raise CodecError(str(error)) from error
