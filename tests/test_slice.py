import pytest

from kiwidb.slice import Slice


def test_default():
    piece = Slice()
    assert piece.empty()
    assert piece.size() == 0
    assert piece.data is None


def test_new():
    data = bytes([1, 2, 3, 4, 5])
    piece = Slice(data)
    assert piece.size() == len(data)
    assert piece.data[0] == data[0]


def test_new_with_string():
    text = "hello"
    piece = Slice.from_str(text)
    assert piece.size() == len(text)
    assert piece.as_string(False) == text


def test_at():
    piece = Slice(bytes([10, 20, 30]))
    assert piece.at(0) == 10
    assert piece.at(1) == 20
    assert piece.at(2) == 30


def test_at_out_of_bounds():
    piece = Slice(bytes([10, 20, 30]))
    with pytest.raises(IndexError, match="Index out of bounds"):
        piece.at(3)


def test_clear():
    piece = Slice(bytes([1, 2, 3]))
    piece.clear()
    assert piece.empty()
    assert piece.size() == 0
    assert piece.data is None


def test_to_string():
    piece = Slice.from_str("hello")
    assert piece.as_string(False) == "hello"
    assert piece.as_string(True) == "68656C6C6F"


def test_empty_slice_conversions():
    piece = Slice()
    assert piece.as_string() == ""
    assert piece.as_bytes() == b""
    assert piece.count_byte(0) == 0


def test_count_byte():
    piece = Slice(b"a,b,,c")
    assert piece.count_byte(ord(",")) == 3
    assert piece.count_byte(ord("z")) == 0


def test_as_bytes_round_trip():
    data = b"\x00\xffabc"
    assert Slice(data).as_bytes() == data
    assert Slice(bytearray(data)).as_bytes() == data