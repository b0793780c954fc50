"""Encoding of replies into RESP wire bytes."""

from __future__ import annotations

import enum
from typing import Iterable

from .errors import InvalidDataError
from .resp_types import (
    CRLF,
    Array,
    BulkString,
    ErrorReply,
    Inline,
    Integer,
    RespData,
    RespVersion,
    SimpleString,
)

_CRLF = CRLF.encode("ascii")


class CmdRes(enum.IntEnum):
    """Canned command results."""

    NONE = 0
    OK = 1
    PONG = 2
    SYNTAX_ERR = 3
    INVALID_INT = 4
    INVALID_BIT_INT = 5
    INVALID_BIT_OFFSET_INT = 6
    INVALID_FLOAT = 7
    OVERFLOW = 8
    NOT_FOUND = 9
    OUT_OF_RANGE = 10
    INVALID_PWD = 11
    NONE_BGSAVE = 12
    PURGE_EXIST = 13
    INVALID_PARAMETER = 14
    WRONG_NUM = 15
    INVALID_INDEX = 16
    INVALID_DB_TYPE = 17
    INVALID_DB = 18
    INCONSISTENT_HASH_TAG = 19
    ERR_OTHER = 20
    ERR_MOVED = 21
    ERR_CLUSTER_DOWN = 22
    UNKNOWN_CMD = 23
    UNKNOWN_SUB_CMD = 24
    INCR_BY_OVERFLOW = 25
    INVALID_CURSOR = 26
    WRONG_LEADER = 27
    MULTI_KEY = 28
    NO_AUTH = 29

    @classmethod
    def from_code(cls, value: int) -> "CmdRes":
        """Return the result with this numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidDataError(f"Invalid CmdRes value: {value}") from None


_FIXED_LINES = {
    CmdRes.OK: "+OK",
    CmdRes.PONG: "+PONG",
    CmdRes.INVALID_INT: "-ERR value is not an integer or out of range",
    CmdRes.INVALID_BIT_INT: "-ERR bit is not an integer or out of range",
    CmdRes.INVALID_BIT_OFFSET_INT: "-ERR bit offset is not an integer or out of range",
    CmdRes.INVALID_FLOAT: "-ERR value is not a valid float",
    CmdRes.OVERFLOW: "-ERR increment or decrement would overflow",
    CmdRes.NOT_FOUND: "-ERR no such key",
    CmdRes.OUT_OF_RANGE: "-ERR index out of range",
    CmdRes.INVALID_PWD: "-ERR invalid password",
    CmdRes.NONE_BGSAVE: "-ERR No BGSave Works now",
    CmdRes.PURGE_EXIST: "-ERR binlog already in purging...",
    CmdRes.INVALID_PARAMETER: "-ERR Invalid Argument",
    CmdRes.INCONSISTENT_HASH_TAG: "-ERR parameters hashtag is inconsistent",
    CmdRes.INVALID_CURSOR: "-ERR invalid cursor",
    CmdRes.NO_AUTH: "-NOAUTH Authentication required",
}

_CONTENT_LINES = {
    CmdRes.SYNTAX_ERR: "-ERR syntax error command '{}'",
    CmdRes.UNKNOWN_CMD: "-ERR unknown command '{}'",
    CmdRes.UNKNOWN_SUB_CMD: "-ERR unknown sub command '{}'",
    CmdRes.WRONG_NUM: "-ERR wrong number of arguments for '{}' command",
    CmdRes.INVALID_INDEX: "-ERR invalid DB index for '{}'",
    CmdRes.INVALID_DB_TYPE: "-ERR invalid DB for '{}'",
    CmdRes.INVALID_DB: "-ERR invalid DB for '{}'",
    CmdRes.ERR_OTHER: "-ERR {}",
    CmdRes.ERR_MOVED: "-MOVED {}",
    CmdRes.ERR_CLUSTER_DOWN: "-CLUSTERDOWN {}",
    CmdRes.INCR_BY_OVERFLOW: "-ERR increment would produce NaN or Infinity {}",
    CmdRes.WRONG_LEADER: "-ERR wrong leader {}",
    CmdRes.MULTI_KEY: "-WRONGTYPE Operation against a key holding the wrong kind of value {}",
}


class RespEncoder:
    """Builds a RESP reply; every appending method returns the encoder."""

    def __init__(self, version: RespVersion = RespVersion.RESP2) -> None:
        self.version = version
        self.res = CmdRes.NONE
        self._buffer = bytearray()

    def _write(self, text: str) -> "RespEncoder":
        self._buffer += text.encode("utf-8")
        return self

    def _crlf(self) -> "RespEncoder":
        self._buffer += _CRLF
        return self

    def set_res(self, res: CmdRes, content: str = "") -> "RespEncoder":
        """Replace the reply with the canned result, filling in content."""
        self.res = res
        self._buffer.clear()
        if res in _FIXED_LINES:
            self.set_line_string(_FIXED_LINES[res])
        elif res in _CONTENT_LINES:
            self._write(_CONTENT_LINES[res].format(content))._crlf()
        return self

    def append_array_len(self, length: int) -> "RespEncoder":
        return self._write(f"*{length}")._crlf()

    def append_integer(self, value: int) -> "RespEncoder":
        return self._write(f":{value}")._crlf()

    def append_string_raw(self, value: str) -> "RespEncoder":
        return self._write(value)

    def append_simple_string(self, value: str) -> "RespEncoder":
        return self._write(f"+{value}")._crlf()

    def append_bulk_string(self, value: bytes) -> "RespEncoder":
        self._write(f"${len(value)}")._crlf()
        self._buffer += value
        return self._crlf()

    def append_string(self, value: str) -> "RespEncoder":
        return self.append_bulk_string(value.encode("utf-8"))

    def append_string_vec(self, values: Iterable[str]) -> "RespEncoder":
        values = list(values)
        self.append_array_len(len(values))
        for value in values:
            self.append_string(value)
        return self

    def set_line_string(self, value: str) -> "RespEncoder":
        """Replace the reply with one line."""
        self._buffer.clear()
        return self._write(value)._crlf()

    def clear(self) -> "RespEncoder":
        self._buffer.clear()
        self.res = CmdRes.NONE
        return self

    def get_response(self) -> bytes:
        return bytes(self._buffer)

    def encode_resp_data(self, data: RespData) -> "RespEncoder":
        """Append the wire form of a RESP value."""
        match data:
            case SimpleString(value):
                self._buffer += b"+" + value
                return self._crlf()
            case ErrorReply(value):
                self._buffer += b"-" + value
                return self._crlf()
            case Integer(value):
                return self.append_integer(value)
            case BulkString(None):
                return self._write("$-1")._crlf()
            case BulkString(value):
                return self.append_bulk_string(value)
            case Array(None):
                return self.append_array_len(-1)
            case Array(items):
                self.append_array_len(len(items))
                for item in items:
                    self.encode_resp_data(item)
                return self
            case Inline(parts):
                self._buffer += b" ".join(parts)
                return self._crlf()
        raise TypeError(f"cannot encode {data!r}")