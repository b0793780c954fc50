"""Outcome of an operation that can succeed, time out or find a resource busy."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Code(enum.Enum):
    """Kind of outcome."""

    OK = "Ok"
    TIMEOUT = "Timeout"
    BUSY = "Busy"


@dataclass(frozen=True)
class Status:
    """An outcome code together with a message describing it."""

    code: Code
    message: str = ""

    @classmethod
    def ok(cls) -> "Status":
        """Return a success status with an empty message."""
        return cls(Code.OK)

    @classmethod
    def timeout(cls, msg: str) -> "Status":
        return cls(Code.TIMEOUT, msg)

    @classmethod
    def busy(cls, msg: str) -> "Status":
        return cls(Code.BUSY, msg)

    def is_ok(self) -> bool:
        return self.code is Code.OK

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"