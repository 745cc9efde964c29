import pytest

from teyvat.connmanager import ConnectionNotFound, ConnManager


class FakeConn:
    def __init__(self, conn_id, manager=None):
        self.conn_id = conn_id
        self.manager = manager
        self.stopped = False

    def stop(self):
        self.stopped = True
        if self.manager is not None:
            self.manager.remove(self)


def test_add_and_get():
    mgr = ConnManager()
    conn = FakeConn(3)
    mgr.add(conn)
    assert mgr.get(3) is conn
    assert len(mgr) == 1
    assert 3 in mgr


def test_get_missing_raises():
    with pytest.raises(ConnectionNotFound):
        ConnManager().get(42)


def test_remove_forgets_connection():
    mgr = ConnManager()
    conn = FakeConn(1)
    mgr.add(conn)
    mgr.remove(conn)
    assert len(mgr) == 0
    with pytest.raises(ConnectionNotFound):
        mgr.get(1)


def test_remove_unknown_is_harmless():
    mgr = ConnManager()
    mgr.add(FakeConn(1))
    mgr.remove(FakeConn(2))
    assert len(mgr) == 1


def test_add_same_id_replaces():
    mgr = ConnManager()
    first, second = FakeConn(5), FakeConn(5)
    mgr.add(first)
    mgr.add(second)
    assert mgr.get(5) is second
    assert len(mgr) == 1


def test_clear_conn_stops_all_even_when_stop_removes():
    mgr = ConnManager()
    conns = [FakeConn(i, mgr) for i in range(4)]
    for conn in conns:
        mgr.add(conn)
    mgr.clear_conn()
    assert all(conn.stopped for conn in conns)
    assert len(mgr) == 0