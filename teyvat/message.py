"""Messages and the length-prefixed framing used on the wire."""

from __future__ import annotations

import struct
from dataclasses import dataclass

HEAD_LEN = 8
_HEAD = struct.Struct("<II")
_UINT32_MAX = 0xFFFFFFFF


@dataclass
class Message:
    """A framed message: its id, the declared body length and the body."""

    msg_id: int
    data_len: int
    data: bytes = b""


def new_msg_package(msg_id: int, data: bytes) -> Message:
    """Build a message whose declared length is that of its body."""
    body = bytes(data)
    return Message(msg_id=msg_id, data_len=len(body), data=body)


class MessageTooLarge(ValueError):
    """A message head declares a body larger than the allowed maximum."""


class DataPack:
    """Packs messages into frames and parses frame heads.

    A frame is the body length and the message id, each a little-endian
    unsigned 32-bit integer, followed by the body.
    """

    def __init__(self, max_package_size: int = 4096) -> None:
        self.max_package_size = max_package_size

    @property
    def head_len(self) -> int:
        return HEAD_LEN

    def pack(self, msg: Message) -> bytes:
        """Return the frame for a message."""
        for label, value in (("data length", msg.data_len), ("message id", msg.msg_id)):
            if not 0 <= value <= _UINT32_MAX:
                raise ValueError(f"{label} out of range: {value}")
        return _HEAD.pack(msg.data_len, msg.msg_id) + bytes(msg.data)

    def unpack(self, head: bytes) -> Message:
        """Parse a frame head into a message with an empty body."""
        if len(head) < HEAD_LEN:
            raise ValueError(f"incomplete message head: {len(head)} of {HEAD_LEN} bytes")
        data_len, msg_id = _HEAD.unpack_from(head)
        if self.max_package_size > 0 and data_len > self.max_package_size:
            raise MessageTooLarge(
                f"message body of {data_len} bytes exceeds {self.max_package_size}"
            )
        return Message(msg_id=msg_id, data_len=data_len)