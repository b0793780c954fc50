"""A read-only view over a run of bytes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Slice:
    """Holds a run of bytes; a data of None is the empty, unset slice."""

    data: Optional[bytes] = None

    def __post_init__(self) -> None:
        if self.data is not None:
            self.data = bytes(self.data)

    @classmethod
    def from_str(cls, text: str) -> "Slice":
        """Return a slice over the UTF-8 bytes of text."""
        return cls(text.encode("utf-8"))

    def size(self) -> int:
        """Return the number of bytes referred to."""
        return 0 if self.data is None else len(self.data)

    def empty(self) -> bool:
        return self.size() == 0

    def at(self, n: int) -> int:
        """Return the byte at position n; n must be below size()."""
        if not 0 <= n < self.size():
            raise IndexError("Index out of bounds")
        return self.data[n]

    def clear(self) -> None:
        """Make this slice refer to nothing."""
        self.data = None

    def as_string(self, hex: bool = False) -> str:
        """Return the bytes as text, or as upper-case hex digits when hex is true."""
        if self.data is None:
            return ""
        if hex:
            return self.data.hex().upper()
        return self.data.decode("utf-8", errors="replace")

    def as_bytes(self) -> bytes:
        return b"" if self.data is None else self.data

    def count_byte(self, byte: int) -> int:
        """Return how many times byte occurs."""
        if self.data is None:
            return 0
        return self.data.count(bytes([byte]))