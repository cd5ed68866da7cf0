import pytest

from felixcore.shifter import Shifter


def test_pull_returns_top_bits_in_order():
    shifter = Shifter()
    shifter.push(0xAB)
    assert shifter.pull(4) == 0xA
    assert shifter.pull(4) == 0xB
    assert shifter.size == 0


def test_push_tracks_size():
    shifter = Shifter()
    shifter.push(0x01)
    shifter.push(0x02)
    assert shifter.size == 16


def test_pull_across_bytes():
    shifter = Shifter()
    shifter.push(0x12)
    shifter.push(0x34)
    assert shifter.pull(16) == 0x1234


def test_pull_too_many_reports_shortfall_and_keeps_bits():
    shifter = Shifter()
    shifter.push(0xFF)
    assert shifter.pull(12) == 8 - 12
    assert shifter.size == 8
    assert shifter.pull(8) == 0xFF


def test_push_int_is_little_endian():
    shifter = Shifter()
    assert shifter.push_int(0x1234, 2) is True
    assert shifter.pull(8) == 0x34
    assert shifter.pull(8) == 0x12


def test_push_int_without_room_pushes_nothing():
    shifter = Shifter()
    assert shifter.push_int(0x1122334455667788, 8) is True
    assert shifter.push_int(0x99, 1) is False
    assert shifter.size == 64


def test_push_when_full_raises():
    shifter = Shifter()
    for byte in range(8):
        shifter.push(byte)
    with pytest.raises(OverflowError):
        shifter.push(0)


def test_round_trip_of_full_word():
    shifter = Shifter()
    data = bytes(range(0x10, 0x18))
    for byte in data:
        shifter.push(byte)
    assert bytes(shifter.pull(8) for _ in data) == data