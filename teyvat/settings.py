"""Server-wide settings with built-in defaults, overridable from a JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("json") / "zinx.json"

# JSON keys are matched case-insensitively against these names.
_JSON_KEYS = {
    "host": "host",
    "tcpport": "tcp_port",
    "name": "name",
    "version": "version",
    "maxconn": "max_conn",
    "maxpackagesize": "max_package_size",
    "workerpoolsize": "worker_pool_size",
    "maxworkerpoolsize": "max_worker_pool_size",
    "maxtaskqueuelen": "max_task_queue_len",
}

_UNSIGNED = {
    "max_package_size",
    "worker_pool_size",
    "max_worker_pool_size",
    "max_task_queue_len",
}


@dataclass
class ServerSettings:
    """Parameters of the TCP server and its worker pool."""

    host: str = ""
    tcp_port: int = 8999
    name: str = "ZinxServerApp"
    version: str = "V0.8"
    max_conn: int = 1000
    max_package_size: int = 4096
    worker_pool_size: int = 10
    max_worker_pool_size: int = 4096
    max_task_queue_len: int = 1024

    def reload(self, path: str | Path = DEFAULT_SETTINGS_PATH) -> None:
        """Override the settings with the values found in a JSON file."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"settings file {path} must hold a JSON object")

        updates: dict[str, Any] = {}
        for key, value in raw.items():
            attr = _JSON_KEYS.get(str(key).lower())
            if attr is None or value is None:
                continue
            updates[attr] = self._checked(attr, value)

        for attr, value in updates.items():
            setattr(self, attr, value)

        if self.worker_pool_size > self.max_worker_pool_size:
            self.worker_pool_size = self.max_worker_pool_size
            logger.info(
                "The max worker pool size is %d, worker pool size reset to %d",
                self.max_worker_pool_size,
                self.max_worker_pool_size,
            )

    def _checked(self, attr: str, value: Any) -> Any:
        current = getattr(self, attr)
        if isinstance(current, str):
            if not isinstance(value, str):
                raise ValueError(f"setting {attr!r} must be a string, got {value!r}")
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"setting {attr!r} must be an integer, got {value!r}")
        if attr in _UNSIGNED and not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"setting {attr!r} out of range: {value}")
        return value


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> ServerSettings:
    """Return the default settings overridden by the given JSON file."""
    settings = ServerSettings()
    settings.reload(path)
    return settings