"""The TCP server: accepts clients, tracks them and routes their messages."""

from __future__ import annotations

import logging
import signal
import socket
import threading
import time
from typing import Any, Callable

from teyvat.connection import Connection
from teyvat.connmanager import ConnManager
from teyvat.message import DataPack
from teyvat.routing import BaseRouter, MsgHandler
from teyvat.settings import ServerSettings

logger = logging.getLogger(__name__)

_ACCEPT_POLL = 0.5

ConnHook = Callable[[Any], None]


class Server:
    """Listens for clients and serves each one with a Connection."""

    def __init__(
        self,
        name: str | None = None,
        settings: ServerSettings | None = None,
        shutdown_delay: float = 3.0,
    ) -> None:
        self.settings = settings if settings is not None else ServerSettings()
        self.name = name if name is not None else self.settings.name
        self.ip = self.settings.host
        self.port = self.settings.tcp_port
        self.shutdown_delay = shutdown_delay
        self.msg_handler = MsgHandler(self.settings.worker_pool_size)
        self.conn_mgr = ConnManager()
        self.on_conn_start: ConnHook | None = None
        self.on_conn_stop: ConnHook | None = None
        self.started = threading.Event()
        self.address: tuple[str, int] | None = None

        self._listener: socket.socket | None = None
        self._accept_thread: threading.Thread | None = None
        self._stopping = threading.Event()
        self._shutdown_requested = threading.Event()

    def start(self) -> None:
        """Bind the listening socket and accept clients in the background."""
        logger.info(
            "Server Name : %s, listener at IP : %s, Port: %d is starting",
            self.settings.name, self.settings.host, self.settings.tcp_port,
        )
        logger.info(
            "Version : %s, MaxConn : %d, MaxPackageSize: %d",
            self.settings.version, self.settings.max_conn, self.settings.max_package_size,
        )
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            listener.bind((self.ip, self.port))
            listener.listen()
        except OSError:
            listener.close()
            raise
        listener.settimeout(_ACCEPT_POLL)
        self._listener = listener
        self.address = listener.getsockname()
        self._accept_thread = threading.Thread(
            target=self._accept_loop, name="server-accept", daemon=True
        )
        self._accept_thread.start()
        logger.info("start server %s success, Listening...", self.name)
        self.started.set()

    def _accept_loop(self) -> None:
        assert self._listener is not None
        listener = self._listener
        cid = 0
        while not self._stopping.is_set():
            try:
                sock, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                if self._stopping.is_set():
                    break
                logger.warning("Listener accept err: %s", exc)
                continue
            sock.settimeout(None)
            if len(self.conn_mgr) >= self.settings.max_conn:
                logger.warning("Too Many Connection MaxConn = %d", self.settings.max_conn)
                sock.close()
                continue
            conn = Connection(
                self,
                sock,
                cid,
                self.msg_handler,
                data_pack=DataPack(self.settings.max_package_size),
                use_worker_pool=self.settings.worker_pool_size > 0,
            )
            cid += 1
            conn.start()

    def stop(self) -> None:
        """Stop listening, close every connection and drain the workers."""
        logger.info("[STOP] Server Name : %s", self.name)
        self._stopping.set()
        if self._accept_thread is not None and self._accept_thread is not threading.current_thread():
            self._accept_thread.join()
        if self._listener is not None:
            self._listener.close()
        self.conn_mgr.clear_conn()
        self.msg_handler.shutdown()

    def request_shutdown(self) -> None:
        """Ask a running serve() to stop, as an interrupt signal would."""
        self._shutdown_requested.set()

    def serve(self) -> None:
        """Start, block until interrupted or asked to shut down, then stop."""
        self.start()
        in_main = threading.current_thread() is threading.main_thread()
        previous = None
        if in_main:
            previous = signal.signal(signal.SIGINT, lambda signum, frame: self.request_shutdown())
        try:
            while not self._shutdown_requested.wait(_ACCEPT_POLL):
                pass
        finally:
            if in_main and previous is not None:
                signal.signal(signal.SIGINT, previous)
        logger.info("[!!!!]Close the server after %s seconds", self.shutdown_delay)
        time.sleep(self.shutdown_delay)
        self.stop()

    def add_router(self, msg_id: int, router: BaseRouter) -> None:
        self.msg_handler.add_router(msg_id, router)
        logger.info("add Router successfully")

    def set_on_conn_start(self, hook: ConnHook) -> None:
        self.on_conn_start = hook

    def set_on_conn_stop(self, hook: ConnHook) -> None:
        self.on_conn_stop = hook

    def call_on_conn_start(self, conn: Any) -> None:
        if self.on_conn_start is not None:
            logger.debug("----->Call OnConnStart()...")
            self.on_conn_start(conn)

    def call_on_conn_stop(self, conn: Any) -> None:
        """Run the stop hook, then forget the connection."""
        if self.on_conn_stop is not None:
            logger.debug("----->Call OnConnStop()...")
            self.on_conn_stop(conn)
        self.conn_mgr.remove(conn)