"""A minimal request reader for arrays of bulk strings."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

_USIZE_RE = re.compile(rb"\+?[0-9]+")
_USIZE_MAX = 2**64 - 1


class ProtocolError(Exception):
    """Base class of protocol errors."""


class InvalidFormatError(ProtocolError):
    """The request does not follow the expected format."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid Protocol format: {message}")


def _invalid(buf: bytes) -> InvalidFormatError:
    return InvalidFormatError(
        f"Invalid format: {buf.decode('utf-8', errors='replace')}"
    )


def _usize(raw: bytes) -> Optional[int]:
    if not _USIZE_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if value <= _USIZE_MAX else None


class RespProtocol:
    """Reads `*<n>` arrays of `$<len>` bulk strings and builds bulk replies."""

    def __init__(self) -> None:
        self._params: List[bytes] = []
        self._buffer = bytearray()
        self._response = bytearray()

    def push_bulk_string(self, text: str) -> None:
        """Append text to the pending response."""
        self._response += text.encode("utf-8")

    def push_null_bulk_string(self) -> None:
        """Append a null bulk string to the pending response."""
        self._response += b"$-1\r\n"

    def serialize(self) -> bytes:
        """Wrap the pending response in one bulk string."""
        body = bytes(self._response)
        return b"$" + str(len(body)).encode("ascii") + b"\r\n" + body + b"\r\n"

    def take_params(self) -> List[bytes]:
        """Return the arguments of the last request and forget them."""
        params, self._params = self._params, []
        return params

    def parse(self, data: bytes) -> bool:
        """Add data and try to read a whole request.

        Returns True once a request is read (its arguments are then
        available from take_params), False when more data is needed.
        """
        self._buffer += data
        buf = bytes(self._buffer)

        if buf[:1] != b"*":
            raise _invalid(buf)
        count, pos = self._read_header(buf, 1)
        if count is None:
            return False

        parsed: List[bytes] = []
        for _ in range(count):
            element = self._read_element(buf, pos)
            if element is None:
                return False
            value, pos = element
            parsed.append(value)

        self._params = parsed
        del self._buffer[:pos]
        return True

    @staticmethod
    def _read_header(buf: bytes, pos: int) -> Tuple[Optional[int], int]:
        end = buf.find(b"\r", pos)
        if end < 0:
            return None, pos
        if end + 1 >= len(buf) or buf[end + 1] != ord("\n"):
            raise _invalid(buf)
        count = _usize(buf[pos:end])
        if count is None:
            raise _invalid(buf)
        return count, end + 2

    @staticmethod
    def _read_element(buf: bytes, pos: int) -> Optional[Tuple[bytes, int]]:
        if buf[pos:pos + 1] != b"$":
            return None
        pos += 1
        end = buf.find(b"\r", pos)
        if end < 0:
            return None
        if end + 1 >= len(buf) or buf[end + 1] != ord("\n"):
            return None
        length = _usize(buf[pos:end])
        if length is None:
            raise _invalid(buf)
        pos = end + 2
        if pos + length + 2 > len(buf):
            return None
        if buf[pos + length:pos + length + 2] != b"\r\n":
            raise _invalid(buf)
        return buf[pos:pos + length], pos + length + 2