"""Streaming RESP parser that also queues decoded commands."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Tuple, Union

from .command import RespCommand, to_command
from .errors import RespError, RespParseError
from .resp_types import (
    Array,
    BulkString,
    ErrorReply,
    Inline,
    Integer,
    RespData,
    RespVersion,
    SimpleString,
)

_CR = ord("\r")
_LF = ord("\n")
_SPACE = ord(" ")
_TAB = ord("\t")
_MINUS = ord("-")
_WORD_STOPS = frozenset((_SPACE, _CR, _LF))
_BLANKS = frozenset((_SPACE, _TAB))
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class _Incomplete(Exception):
    """More input is needed before a value can be read."""


class _Failure(Exception):
    """The input cannot be read as RESP."""

    def __init__(self, kind: str, buf: bytes, pos: int) -> None:
        super().__init__(f"{kind} at byte {pos}: {bytes(buf[pos:pos + 32])!r}")


def _line_ending(buf: bytes, pos: int) -> int:
    if pos >= len(buf):
        raise _Incomplete
    if buf[pos] == _LF:
        return pos + 1
    if buf[pos] == _CR:
        if pos + 1 >= len(buf):
            raise _Incomplete
        if buf[pos + 1] == _LF:
            return pos + 2
    raise _Failure("CrLf", buf, pos)


def _not_line_ending(buf: bytes, pos: int) -> Tuple[bytes, int]:
    end = pos
    while end < len(buf) and buf[end] not in (_CR, _LF):
        end += 1
    if end >= len(buf):
        raise _Incomplete
    if buf[end] == _CR:
        if end + 1 >= len(buf):
            raise _Incomplete
        if buf[end + 1] != _LF:
            raise _Failure("Tag", buf, end)
    return bytes(buf[pos:end]), end


def _line(buf: bytes, pos: int) -> Tuple[bytes, int]:
    data, end = _not_line_ending(buf, pos)
    return data, _line_ending(buf, end)


def _signed_number(buf: bytes, pos: int) -> Tuple[int, int]:
    start = pos
    if pos >= len(buf):
        raise _Incomplete
    if buf[pos] == _MINUS:
        pos += 1
    digits_start = pos
    while pos < len(buf) and 0x30 <= buf[pos] <= 0x39:
        pos += 1
    if pos >= len(buf):
        raise _Incomplete
    if pos == digits_start:
        raise _Failure("Digit", buf, pos)
    end = _line_ending(buf, pos)
    value = int(buf[start:pos])
    if not _I64_MIN <= value <= _I64_MAX:
        raise _Failure("MapRes", buf, start)
    return value, end


def _word(buf: bytes, pos: int) -> Optional[Tuple[bytes, int]]:
    end = pos
    while end < len(buf) and buf[end] not in _WORD_STOPS:
        end += 1
    if end >= len(buf):
        raise _Incomplete
    if end == pos:
        return None
    return bytes(buf[pos:end]), end


def _inline(buf: bytes, pos: int) -> Tuple[RespData, int]:
    parts: List[bytes] = []
    cur = pos
    found = _word(buf, cur)
    if found is not None:
        part, cur = found
        parts.append(part)
        while True:
            after = cur
            while after < len(buf) and buf[after] in _BLANKS:
                after += 1
            if after >= len(buf):
                raise _Incomplete
            if after == cur:
                break
            found = _word(buf, after)
            if found is None:
                break
            part, cur = found
            parts.append(part)
    end = _line_ending(buf, cur)
    if not parts:
        raise _Failure("Verify", buf, end)
    return Inline(parts), end


def _bulk_string(buf: bytes, pos: int) -> Tuple[RespData, int]:
    length, pos = _signed_number(buf, pos + 1)
    if length < 0:
        return BulkString(None), pos
    end = pos + length
    if end > len(buf):
        raise _Incomplete
    return BulkString(bytes(buf[pos:end])), _line_ending(buf, end)


def _array(buf: bytes, pos: int) -> Tuple[RespData, int]:
    length, pos = _signed_number(buf, pos + 1)
    if length < 0:
        return Array(None), pos
    items = []
    for _ in range(length):
        item, pos = _value(buf, pos)
        items.append(item)
    return Array(tuple(items)), pos


def _value(buf: bytes, pos: int) -> Tuple[RespData, int]:
    if pos >= len(buf):
        raise _Incomplete
    prefix = chr(buf[pos])
    if prefix == "+":
        data, end = _line(buf, pos + 1)
        return SimpleString(data), end
    if prefix == "-":
        data, end = _line(buf, pos + 1)
        return ErrorReply(data), end
    if prefix == ":":
        number, end = _signed_number(buf, pos + 1)
        return Integer(number), end
    if prefix == "$":
        return _bulk_string(buf, pos)
    if prefix == "*":
        return _array(buf, pos)
    return _inline(buf, pos)


class RespParser:
    """Accumulates input and reads one RESP value per call to parse."""

    def __init__(self, version: RespVersion = RespVersion.RESP2) -> None:
        self.version = version
        self._buffer = bytearray()
        self._commands: Deque[Union[RespCommand, RespError]] = deque()
        self._is_pipeline = False

    def parse(self, data: bytes = b"") -> Optional[RespData]:
        """Add data and read the next value.

        Returns the value, or None when more input is needed. Raises
        RespParseError when the buffered input is not valid RESP.
        """
        self._buffer += data
        if not self._buffer:
            return None
        try:
            value, consumed = _value(bytes(self._buffer), 0)
        except _Incomplete:
            return None
        except _Failure as exc:
            raise RespParseError(str(exc)) from None
        del self._buffer[:consumed]

        try:
            command = to_command(value)
        except RespError as exc:
            self._commands.append(exc)
        else:
            command.is_pipeline = self._is_pipeline
            self._is_pipeline = bool(self._buffer)
            self._commands.append(command)
        return value

    def next_command(self) -> Optional[RespCommand]:
        """Pop the oldest queued command, or None when the queue is empty.

        A value that could not be turned into a command raises its error.
        """
        if not self._commands:
            return None
        entry = self._commands.popleft()
        if isinstance(entry, RespError):
            raise entry
        return entry

    def reset(self) -> None:
        """Drop buffered input and queued commands."""
        self._buffer.clear()
        self._commands.clear()
        self._is_pipeline = False