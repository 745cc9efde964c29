"""A client connection served by a reader thread and a writer thread."""

from __future__ import annotations

import logging
import queue
import socket
import threading
from typing import Any

from teyvat.message import DataPack, new_msg_package
from teyvat.routing import MsgHandler, Request

logger = logging.getLogger(__name__)

_WRITER_JOIN_TIMEOUT = 1.0


class ConnectionClosed(ConnectionError):
    """The connection is closed and can no longer send messages."""


class Connection:
    """One TCP client of the server.

    The reader thread parses frames and hands each message to the message
    handler; the writer thread sends queued frames back to the client.
    Creating a connection registers it with the server's connection manager.
    """

    def __init__(
        self,
        server: Any,
        sock: socket.socket,
        conn_id: int,
        msg_handler: MsgHandler,
        data_pack: DataPack | None = None,
        use_worker_pool: bool = True,
    ) -> None:
        self.server = server
        self.sock = sock
        self.conn_id = conn_id
        self.msg_handler = msg_handler
        self.data_pack = data_pack if data_pack is not None else DataPack()
        self.use_worker_pool = use_worker_pool

        self._closed = False
        self._state_lock = threading.Lock()
        self._outbox: queue.Queue[bytes | None] = queue.Queue()
        self._properties: dict[str, Any] = {}
        self._property_lock = threading.RLock()
        try:
            self._remote: Any = sock.getpeername()
        except OSError:
            self._remote = None

        self._reader = threading.Thread(
            target=self._read_loop, name=f"conn-{conn_id}-reader", daemon=True
        )
        self._writer = threading.Thread(
            target=self._write_loop, name=f"conn-{conn_id}-writer", daemon=True
        )
        server.conn_mgr.add(self)

    @property
    def is_closed(self) -> bool:
        with self._state_lock:
            return self._closed

    def start(self) -> None:
        """Start reading and writing, then run the server's start hook."""
        logger.info("Conn Start() ... ConnID: %d", self.conn_id)
        self._reader.start()
        self._writer.start()
        self.server.call_on_conn_start(self)

    def stop(self) -> None:
        """Close the connection; calling it again does nothing."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
        logger.info("Conn Stop() ... ConnID - %d", self.conn_id)

        self.server.call_on_conn_stop(self)
        self._outbox.put(None)
        if self._writer.is_alive() and threading.current_thread() is not self._writer:
            self._writer.join(_WRITER_JOIN_TIMEOUT)
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        try:
            self.sock.close()
        except OSError as exc:
            logger.warning("close connection failed: %s", exc)

    def send_msg(self, msg_id: int, data: bytes) -> None:
        """Frame the data and queue it for the client."""
        if self.is_closed:
            raise ConnectionClosed("connection closed when send msg")
        frame = self.data_pack.pack(new_msg_package(msg_id, data))
        self._outbox.put(frame)

    def set_property(self, key: str, value: Any) -> None:
        with self._property_lock:
            self._properties[key] = value

    def get_property(self, key: str) -> Any:
        with self._property_lock:
            try:
                return self._properties[key]
            except KeyError:
                raise KeyError(f"No the property named {key}") from None

    def remove_property(self, key: str) -> None:
        with self._property_lock:
            self._properties.pop(key, None)

    def remote_addr(self) -> Any:
        """The address of the client, as the socket reported it."""
        return self._remote

    def _recv_exact(self, size: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < size:
            chunk = self.sock.recv(size - len(chunks))
            if not chunk:
                raise ConnectionError("connection closed by peer")
            chunks.extend(chunk)
        return bytes(chunks)

    def _read_loop(self) -> None:
        logger.debug("[Reader Goroutine is running]")
        try:
            while True:
                try:
                    head = self._recv_exact(self.data_pack.head_len)
                except OSError as exc:
                    logger.info("Read message head error: %s", exc)
                    break
                try:
                    msg = self.data_pack.unpack(head)
                except ValueError as exc:
                    logger.warning("msg struct err: %s", exc)
                    return
                if msg.data_len > 0:
                    try:
                        msg.data = self._recv_exact(msg.data_len)
                    except OSError as exc:
                        logger.warning("reading message body failed: %s", exc)
                        return
                self._dispatch(Request(self, msg))
        finally:
            logger.debug("[Reader is exit!], connID: %d", self.conn_id)
            self.stop()

    def _dispatch(self, request: Request) -> None:
        if self.use_worker_pool:
            self.msg_handler.send_msg_to_task_queue(request)
        else:
            threading.Thread(target=self._run_handler, args=(request,), daemon=True).start()

    def _run_handler(self, request: Request) -> None:
        try:
            self.msg_handler.do_msg_handler(request)
        except Exception:
            logger.exception("handler for msgID %d failed", request.msg_id)

    def _write_loop(self) -> None:
        logger.debug("[Writer Goroutine is running]")
        while True:
            frame = self._outbox.get()
            if frame is None:
                break
            try:
                self.sock.sendall(frame)
            except OSError as exc:
                logger.warning("Send data error: %s", exc)
                break
        logger.debug("[conn Writer exit!] %s", self._remote)