"""The registry of players currently online."""

from __future__ import annotations

import threading
from typing import Any

REPLACED_MSG_ID = 999
REPLACED_TEXT = "另一个客户端登录,当前账户退出"


class WorldManager:
    """Online players keyed by their database id.

    A player provides a conn with get_property(key) and stop(),
    send_string_msg(msg_id, text) and a user_id attribute.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._players: dict[int, Any] = {}

    def add_player(self, player: Any) -> None:
        """Register a player under the PID of its connection.

        A player already online under that id is told and disconnected.
        """
        try:
            pid = player.conn.get_property("PID")
        except KeyError:
            return
        with self._lock:
            current = self._players.get(pid)
        if current is not None:
            current.send_string_msg(REPLACED_MSG_ID, REPLACED_TEXT)
            current.conn.stop()
        with self._lock:
            self._players[pid] = player

    def remove_player(self, pid: int) -> None:
        with self._lock:
            self._players.pop(pid, None)

    def get_player(self, pid: int) -> Any:
        """The player online under the id, or None."""
        with self._lock:
            return self._players.get(pid)

    def all_players(self) -> list[Any]:
        with self._lock:
            return list(self._players.values())

    def all_player_uids(self) -> list[int]:
        with self._lock:
            return [player.user_id for player in self._players.values()]