import struct

import pytest

from jclassparse.binary import ByteReader
from jclassparse.errors import ParseError


def test_read_u4_magic():
    reader = ByteReader(b"\xca\xfe\xba\xbe")
    assert reader.read_u4() == 0xCAFEBABE
    assert reader.at_end() is True


def test_sequential_reads_advance_position():
    reader = ByteReader(b"\x01\x00\x02\x00\x00\x00\x03")
    assert reader.read_u1() == 1
    assert reader.read_u2() == 2
    assert reader.read_u4() == 3
    assert reader.position == 7
    assert reader.at_end() is True


@pytest.mark.parametrize("value", [0, 1, 2**63, 2**64 - 1, 0x0102030405060708])
def test_read_u8_round_trip(value):
    reader = ByteReader(struct.pack(">Q", value))
    assert reader.read_u8() == value


@pytest.mark.parametrize("value", [0, 255, 0xCAFE, 0xFFFF])
def test_read_u2_round_trip(value):
    assert ByteReader(struct.pack(">H", value)).read_u2() == value


def test_read_bytes():
    reader = ByteReader(b"abcdef")
    reader.read_u1()
    assert reader.read_bytes(3) == b"bcd"
    assert reader.position == 4
    assert reader.at_end() is False


def test_read_bytes_zero_length():
    reader = ByteReader(b"xy")
    assert reader.read_bytes(0) == b""
    assert reader.position == 0


def test_read_bytes_negative_length():
    with pytest.raises(ValueError):
        ByteReader(b"xy").read_bytes(-1)


def test_short_u2_reports_index_and_keeps_position():
    reader = ByteReader(b"\x00\x01")
    reader.read_u1()
    with pytest.raises(ParseError) as info:
        reader.read_u2()
    assert str(info.value) == "Unexpected end of stream reading u2 at index 1"
    assert reader.position == 1


@pytest.mark.parametrize(
    "method, label",
    [("read_u1", "u1"), ("read_u2", "u2"), ("read_u4", "u4"), ("read_u8", "u8")],
)
def test_empty_reader_fails(method, label):
    with pytest.raises(ParseError) as info:
        getattr(ByteReader(b""), method)()
    assert str(info.value) == f"Unexpected end of stream reading {label} at index 0"


def test_read_bytes_past_end_fails():
    reader = ByteReader(b"abc")
    with pytest.raises(ParseError):
        reader.read_bytes(4)
    assert reader.position == 0