"""JSON message bodies and helpers to frame and send them."""

from __future__ import annotations

import dataclasses
import json
import socket
from dataclasses import dataclass
from typing import Any

from teyvat.message import DataPack, new_msg_package

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class SyncUID:
    """Tells the client its user id."""

    uid: int

    def to_dict(self) -> dict[str, int]:
        return {"UID": self.uid}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SyncUID":
        return cls(uid=int(raw.get("UID", 0)))


def _default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def _to_json(data: Any) -> bytes:
    text = json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=_default)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def encode_json_msg(msg_id: int, data: Any) -> bytes:
    """Return the frame carrying data encoded as JSON."""
    return DataPack().pack(new_msg_package(msg_id, _to_json(data)))


def send_json_msg(msg_id: int, data: Any, sock: socket.socket) -> None:
    """Encode data as JSON, frame it and write it to the socket."""
    sock.sendall(encode_json_msg(msg_id, data))