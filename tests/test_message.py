import io

import pytest

from teyvat.message import DataPack, Message, MessageTooLarge, new_msg_package


def _read_frames(stream, dp):
    received = []
    while True:
        head = stream.read(dp.head_len)
        if len(head) < dp.head_len:
            return received
        msg = dp.unpack(head)
        if msg.data_len > 0:
            msg.data = stream.read(msg.data_len)
        received.append(msg)


def test_head_len_is_eight():
    assert DataPack().head_len == 8


def test_pack_first_message_bytes():
    dp = DataPack()
    msg1 = Message(msg_id=1, data_len=4, data=b"zinx")
    assert dp.pack(msg1) == b"\x04\x00\x00\x00\x01\x00\x00\x00zinx"


def test_sticky_packets_are_split_back():
    dp = DataPack()
    msg1 = Message(msg_id=1, data_len=4, data=bytes([ord(c) for c in "zinx"]))
    msg2 = Message(msg_id=2, data_len=7, data=bytes([ord(c) for c in "nihao!!"]))
    stream = io.BytesIO(dp.pack(msg1) + dp.pack(msg2))
    received = _read_frames(stream, dp)
    assert [(m.msg_id, m.data_len, m.data) for m in received] == [
        (1, 4, b"zinx"),
        (2, 7, b"nihao!!"),
    ]


def test_new_msg_package_sets_length():
    msg = new_msg_package(200, b"ping...ping...ping")
    assert msg.data_len == len(msg.data)
    assert msg.msg_id == 200


def test_round_trip_empty_body():
    dp = DataPack()
    frame = dp.pack(new_msg_package(7, b""))
    assert len(frame) == dp.head_len
    assert dp.unpack(frame) == Message(msg_id=7, data_len=0, data=b"")


def test_unpack_leaves_body_empty():
    dp = DataPack()
    frame = dp.pack(new_msg_package(3, b"abc"))
    msg = dp.unpack(frame[: dp.head_len])
    assert (msg.msg_id, msg.data_len, msg.data) == (3, 3, b"")


def test_too_large_message_rejected():
    dp = DataPack(max_package_size=4)
    frame = dp.pack(new_msg_package(1, b"toolong"))
    with pytest.raises(MessageTooLarge):
        dp.unpack(frame)


def test_no_limit_when_max_is_zero():
    dp = DataPack(max_package_size=0)
    body = b"x" * 10000
    assert dp.unpack(dp.pack(new_msg_package(9, body))).data_len == len(body)


def test_short_head_rejected():
    with pytest.raises(ValueError):
        DataPack().unpack(b"\x01\x00\x00")


@pytest.mark.parametrize("msg", [Message(-1, 0), Message(1, 2**32)])
def test_out_of_range_fields_rejected(msg):
    with pytest.raises(ValueError):
        DataPack().pack(msg)