import pytest

from kiwidb.command import CommandType
from kiwidb.errors import InvalidDataError, RespParseError
from kiwidb.parse import RespParser
from kiwidb.resp_types import (
    Array,
    BulkString,
    ErrorReply,
    Inline,
    Integer,
    RespVersion,
    SimpleString,
)


@pytest.fixture
def parser():
    return RespParser(RespVersion.RESP2)


def test_parse_simple_string_ok(parser):
    assert parser.parse(b"+OK\r\n") == SimpleString(b"OK")


def test_parse_error(parser):
    assert parser.parse(b"-Error message\r\n") == ErrorReply(b"Error message")


def test_parse_integer(parser):
    assert parser.parse(b":1000\r\n") == Integer(1000)


@pytest.mark.parametrize(
    "raw", [b"PING\r\n\r\n", b"PING\n", b"PING\n\n", b"PING\r\n\n"]
)
def test_parse_inline_line_endings(parser, raw):
    assert parser.parse(raw) == Inline([b"PING"])


def test_parse_inline(parser):
    assert parser.parse(b"ping\r\n") == Inline([b"ping"])
    parser.reset()
    assert parser.parse(b"PING\r\n\r\n") == Inline([b"PING"])


def test_parse_inline_params(parser):
    res = parser.parse(b"hmget fruit apple banana watermelon\r\n")
    assert res == Inline([b"hmget", b"fruit", b"apple", b"banana", b"watermelon"])


def test_parse_multiple_inline(parser):
    res = parser.parse(b"ping\r\nhmget fruit apple banana watermelon\r\n")
    assert res == Inline([b"ping"])
    res = parser.parse(b"")
    assert res == Inline([b"hmget", b"fruit", b"apple", b"banana", b"watermelon"])


def test_parse_bulk_string(parser):
    assert parser.parse(b"$6\r\nfoobar\r\n") == BulkString(b"foobar")


def test_parse_array(parser):
    res = parser.parse(b"*3\r\n$3\r\nfoo\r\n$3\r\nbar\r\n$-1\r\n")
    assert res == Array(
        (BulkString(b"foo"), BulkString(b"bar"), BulkString(None))
    )


def test_parse_array_rest_swap(parser):
    res = parser.parse(b"*2\r\n$3\r\nfoo\r\n$3\r\nbar\r\n")
    assert res == Array((BulkString(b"foo"), BulkString(b"bar")))
    assert parser.parse(b"") is None


def test_parse_empty_bulk_string(parser):
    assert parser.parse(b"$0\r\n\r\n") == BulkString(b"")


def test_parse_empty_array(parser):
    assert parser.parse(b"*0\r\n") == Array(())


def test_parse_incomplete(parser):
    assert parser.parse(b"$10\r\nfoobar") is None


def test_incomplete_then_completed(parser):
    assert parser.parse(b"$6\r\nfoo") is None
    assert parser.parse(b"bar\r\n") == BulkString(b"foobar")


def test_negative_integer(parser):
    assert parser.parse(b":-5\r\n") == Integer(-5)


def test_null_array(parser):
    assert parser.parse(b"*-1\r\n") == Array(None)


def test_integer_overflow_is_error(parser):
    with pytest.raises(RespParseError):
        parser.parse(b":99999999999999999999\r\n")


def test_integer_without_digits_is_error(parser):
    with pytest.raises(RespParseError):
        parser.parse(b":abc\r\n")


def test_bad_terminator_after_bulk_is_error(parser):
    with pytest.raises(RespParseError):
        parser.parse(b"$3\r\nfooXY")


def test_empty_inline_line_is_error(parser):
    with pytest.raises(RespParseError):
        parser.parse(b"\r\n")


def test_array_command_is_queued(parser):
    parser.parse(b"*2\r\n$3\r\nGET\r\n$3\r\nkey\r\n")
    command = parser.next_command()
    assert command.command_type is CommandType.GET
    assert command.args == [b"key"]
    assert parser.next_command() is None


def test_inline_command_is_queued(parser):
    parser.parse(b"set key value\r\n")
    command = parser.next_command()
    assert command.command_type is CommandType.SET
    assert command.args == [b"key", b"value"]


def test_pipeline_flag(parser):
    parser.parse(b"*1\r\n$4\r\nPING\r\n*1\r\n$4\r\nPING\r\n")
    parser.parse(b"")
    first = parser.next_command()
    second = parser.next_command()
    assert first.is_pipeline is False
    assert second.is_pipeline is True
    assert first.command_type is CommandType.PING


def test_unconvertible_command_raises_from_queue(parser):
    parser.parse(b"*3\r\n$3\r\nfoo\r\n$3\r\nbar\r\n$-1\r\n")
    with pytest.raises(InvalidDataError):
        parser.next_command()


def test_reset_drops_everything(parser):
    parser.parse(b"ping\r\n$10\r\nfoo")
    parser.reset()
    assert parser.next_command() is None
    assert parser.parse(b"") is None


def test_default_version():
    assert RespParser().version is RespVersion.RESP2