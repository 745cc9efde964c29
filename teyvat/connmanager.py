"""Registry of the live connections of a server."""

from __future__ import annotations

import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class ConnectionNotFound(LookupError):
    """No connection is registered under the id."""


class ConnManager:
    """Thread-safe map of connection id to connection."""

    def __init__(self) -> None:
        self._connections: dict[int, Any] = {}
        self._lock = threading.RLock()

    def add(self, conn: Any) -> None:
        """Register a connection under its id."""
        with self._lock:
            self._connections[conn.conn_id] = conn
            count = len(self._connections)
        logger.info("connection ID = %d add to connManager, conn num = %d", conn.conn_id, count)

    def remove(self, conn: Any) -> None:
        """Forget a connection; unknown connections are ignored."""
        with self._lock:
            self._connections.pop(conn.conn_id, None)
            count = len(self._connections)
        logger.info("connection Remove ConnID= %d, conn num = %d", conn.conn_id, count)

    def get(self, conn_id: int) -> Any:
        """Return the connection registered under the id."""
        with self._lock:
            try:
                return self._connections[conn_id]
            except KeyError:
                raise ConnectionNotFound(f"connection {conn_id} not found") from None

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, conn_id: object) -> bool:
        with self._lock:
            return conn_id in self._connections

    def clear_conn(self) -> None:
        """Stop every registered connection."""
        with self._lock:
            connections = list(self._connections.values())
        for conn in connections:
            conn.stop()
        logger.info("Clear All Connections, conn num = %d", len(self))