import socket
import struct
import threading

import pytest

from teyvat.connection import Connection, ConnectionClosed
from teyvat.connmanager import ConnManager
from teyvat.message import HEAD_LEN, DataPack, new_msg_package
from teyvat.routing import BaseRouter, MsgHandler


class _StubServer:
    def __init__(self):
        self.conn_mgr = ConnManager()
        self.started = []
        self.stopped = []
        self.stop_event = threading.Event()

    def call_on_conn_start(self, conn):
        self.started.append(conn.conn_id)

    def call_on_conn_stop(self, conn):
        self.stopped.append(conn.conn_id)
        self.conn_mgr.remove(conn)
        self.stop_event.set()


class _Recorder(BaseRouter):
    def __init__(self, expected=1):
        self.received = []
        self.requests = []
        self.expected = expected
        self.done = threading.Event()
        self._lock = threading.Lock()

    def handle(self, request):
        with self._lock:
            self.received.append((request.msg_id, request.data))
            self.requests.append(request)
            if len(self.received) >= self.expected:
                self.done.set()


def _recv_exact(sock, size):
    buf = b""
    while len(buf) < size:
        chunk = sock.recv(size - len(buf))
        if not chunk:
            raise ConnectionError("eof")
        buf += chunk
    return buf


def _read_frame(sock):
    msg = DataPack().unpack(_recv_exact(sock, HEAD_LEN))
    msg.data = _recv_exact(sock, msg.data_len)
    return msg


@pytest.fixture
def setup():
    server = _StubServer()
    handler = MsgHandler(2)
    local, remote = socket.socketpair()
    remote.settimeout(5)
    conn = Connection(server, local, 7, handler)
    yield server, handler, conn, remote
    conn.stop()
    remote.close()
    handler.shutdown()


def test_new_connection_is_registered(setup):
    server, _, conn, _ = setup
    assert server.conn_mgr.get(7) is conn
    assert len(server.conn_mgr) == 1


def test_start_runs_start_hook(setup):
    server, _, conn, _ = setup
    conn.start()
    assert server.started == [7]


def test_incoming_message_is_dispatched(setup):
    _, handler, conn, remote = setup
    router = _Recorder()
    handler.add_router(1, router)
    conn.start()
    remote.sendall(DataPack().pack(new_msg_package(1, b"zinx")))
    assert router.done.wait(5)
    assert router.received == [(1, b"zinx")]
    assert router.requests[0].connection is conn


def test_two_frames_in_one_write_are_split(setup):
    _, handler, conn, remote = setup
    router = _Recorder(expected=2)
    handler.add_router(1, router)
    handler.add_router(2, router)
    conn.start()
    dp = DataPack()
    remote.sendall(
        dp.pack(new_msg_package(1, b"zinx")) + dp.pack(new_msg_package(2, b"nihao!!"))
    )
    assert router.done.wait(5)
    assert sorted(router.received) == [(1, b"zinx"), (2, b"nihao!!")]


def test_send_msg_reaches_client(setup):
    _, _, conn, remote = setup
    conn.start()
    payload = b"ping...ping...ping"
    conn.send_msg(200, payload)
    msg = _read_frame(remote)
    assert msg.msg_id == 200
    assert msg.data_len == len(payload)
    assert msg.data == payload


def test_stop_is_idempotent_and_blocks_sending(setup):
    server, _, conn, _ = setup
    conn.start()
    conn.stop()
    conn.stop()
    assert server.stopped == [7]
    assert conn.is_closed
    assert 7 not in server.conn_mgr
    with pytest.raises(ConnectionClosed):
        conn.send_msg(1, b"late")


def test_peer_close_stops_connection(setup):
    server, _, conn, remote = setup
    conn.start()
    remote.close()
    assert server.stop_event.wait(5)
    assert server.stopped == [7]
    assert conn.is_closed


def test_oversized_head_stops_connection(setup):
    server, _, conn, remote = setup
    conn.start()
    remote.sendall(struct.pack("<II", 4097, 1))
    assert server.stop_event.wait(5)
    assert conn.is_closed


def test_properties_set_get_remove(setup):
    _, _, conn, _ = setup
    conn.set_property("PID", 42)
    assert conn.get_property("PID") == 42
    conn.remove_property("PID")
    with pytest.raises(KeyError):
        conn.get_property("PID")


def test_missing_property_raises(setup):
    _, _, conn, _ = setup
    with pytest.raises(KeyError):
        conn.get_property("Home")