"""RESP value types."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence, Tuple

CRLF = "\r\n"

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_INT_RE = re.compile(rb"[+-]?[0-9]+")


class RespVersion(enum.Enum):
    """Protocol version; RESP2 is the default."""

    RESP1 = 1
    RESP2 = 2

    @classmethod
    def default(cls) -> "RespVersion":
        return cls.RESP2


class RespType(enum.Enum):
    """The kind of a RESP value."""

    SIMPLE_STRING = "simple_string"
    ERROR = "error"
    INTEGER = "integer"
    BULK_STRING = "bulk_string"
    ARRAY = "array"
    INLINE = "inline"

    @classmethod
    def from_prefix(cls, byte: int) -> Optional["RespType"]:
        """Return the type announced by a leading byte, or None."""
        return _BY_PREFIX.get(byte)

    def prefix_byte(self) -> Optional[int]:
        """Return the leading byte of this type; inline commands have none."""
        return _PREFIXES.get(self)


_PREFIXES = {
    RespType.SIMPLE_STRING: ord("+"),
    RespType.ERROR: ord("-"),
    RespType.INTEGER: ord(":"),
    RespType.BULK_STRING: ord("$"),
    RespType.ARRAY: ord("*"),
}
_BY_PREFIX = {byte: kind for kind, byte in _PREFIXES.items()}


def _decode(data: bytes) -> Optional[str]:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _parse_i64(data: bytes) -> Optional[int]:
    if not _INT_RE.fullmatch(data):
        return None
    value = int(data)
    if _I64_MIN <= value <= _I64_MAX:
        return value
    return None


def _debug_bytes(data: bytes) -> str:
    text = _decode(data)
    if text is None:
        return repr(data)
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class RespData:
    """Base class of every RESP value."""

    _type: ClassVar[RespType]

    def get_type(self) -> RespType:
        return self._type

    def as_string(self) -> Optional[str]:
        """Return the value as text, or None when it has no text form."""
        return None

    def as_bytes(self) -> Optional[bytes]:
        """Return the value as bytes, or None when it has no byte form."""
        return None

    def as_integer(self) -> Optional[int]:
        """Return the value as a 64-bit integer, or None."""
        return None


@dataclass(frozen=True, repr=False)
class SimpleString(RespData):
    value: bytes
    _type: ClassVar[RespType] = RespType.SIMPLE_STRING

    def as_string(self) -> Optional[str]:
        return _decode(self.value)

    def as_bytes(self) -> Optional[bytes]:
        return self.value

    def as_integer(self) -> Optional[int]:
        return _parse_i64(self.value)

    def __repr__(self) -> str:
        return f"SimpleString({_debug_bytes(self.value)})"


@dataclass(frozen=True, repr=False)
class ErrorReply(RespData):
    value: bytes
    _type: ClassVar[RespType] = RespType.ERROR

    def as_string(self) -> Optional[str]:
        return _decode(self.value)

    def as_bytes(self) -> Optional[bytes]:
        return self.value

    def __repr__(self) -> str:
        return f"Error({_debug_bytes(self.value)})"


@dataclass(frozen=True, repr=False)
class Integer(RespData):
    value: int
    _type: ClassVar[RespType] = RespType.INTEGER

    def as_string(self) -> Optional[str]:
        return str(self.value)

    def as_bytes(self) -> Optional[bytes]:
        return str(self.value).encode("ascii")

    def as_integer(self) -> Optional[int]:
        return self.value

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True, repr=False)
class BulkString(RespData):
    """A bulk string; a value of None is the null bulk string."""

    value: Optional[bytes]
    _type: ClassVar[RespType] = RespType.BULK_STRING

    def as_string(self) -> Optional[str]:
        return None if self.value is None else _decode(self.value)

    def as_bytes(self) -> Optional[bytes]:
        return self.value

    def as_integer(self) -> Optional[int]:
        return None if self.value is None else _parse_i64(self.value)

    def __repr__(self) -> str:
        if self.value is None:
            return "BulkString(nil)"
        return f"BulkString({_debug_bytes(self.value)})"


@dataclass(frozen=True, repr=False)
class Array(RespData):
    """An array of values; items of None is the null array."""

    items: Optional[Tuple[RespData, ...]]
    _type: ClassVar[RespType] = RespType.ARRAY

    def __post_init__(self) -> None:
        if self.items is not None:
            object.__setattr__(self, "items", tuple(self.items))

    def __repr__(self) -> str:
        if self.items is None:
            return "Array(nil)"
        return "Array([" + ", ".join(repr(item) for item in self.items) + "])"


@dataclass(frozen=True, repr=False)
class Inline(RespData):
    """An inline command: space separated words ended by a newline."""

    parts: Tuple[bytes, ...]
    _type: ClassVar[RespType] = RespType.INLINE

    def __init__(self, parts: Sequence[bytes]) -> None:
        object.__setattr__(self, "parts", tuple(parts))

    def as_string(self) -> Optional[str]:
        return _decode(self.parts[0]) if self.parts else None

    def as_bytes(self) -> Optional[bytes]:
        return self.parts[0] if self.parts else None

    def __repr__(self) -> str:
        texts = (_decode(part) for part in self.parts)
        shown = ", ".join(_debug_bytes(t.encode("utf-8")) for t in texts if t is not None)
        return f"Inline([{shown}])"