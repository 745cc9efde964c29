"""Banned-word detection for player names and signatures."""

from __future__ import annotations

import re
import threading

_BAN_WORD_CONFIG: tuple[tuple[int, str], ...] = (
    (1, "外挂"),
    (2, "辅助"),
    (3, "微信"),
    (4, "代练"),
    (5, "赚钱"),
)

_DEFAULT_EXTRA = ("外挂", "工具", "原神")


def get_ban_word_base() -> list[str]:
    """Return the configured banned words in table order."""
    return [text for _, text in _BAN_WORD_CONFIG]


class BanWordManager:
    """Holds the banned-word lists and checks text against them.

    The configured base list is loaded when run() starts; the extra list is
    there from the beginning.
    """

    _TICK = 1.0

    def __init__(self) -> None:
        self.ban_word_base: list[str] = []
        self.ban_word_extra: list[str] = list(_DEFAULT_EXTRA)
        self._closed = threading.Event()

    def is_ban_word(self, text: str) -> bool:
        """True if any banned word, taken as a pattern, occurs in the text."""
        for word in (*self.ban_word_base, *self.ban_word_extra):
            if re.search(word, text):
                print("发现违禁词:", word)
                return True
        return False

    def run(self) -> None:
        """Load the base list and keep running until close() is called."""
        self.ban_word_base = get_ban_word_base()
        while not self._closed.wait(self._TICK):
            pass
        print("关闭违禁词库")

    def close(self) -> None:
        """Make run() return."""
        self._closed.set()


_manager: BanWordManager | None = None
_manager_lock = threading.Lock()


def get_ban_word_manager() -> BanWordManager:
    """Return the shared manager, creating it on first use."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = BanWordManager()
        return _manager