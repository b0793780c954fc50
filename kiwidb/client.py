"""A connected client: its stream and the state of the request being served."""

from __future__ import annotations

from typing import List, Protocol

from .resp_types import BulkString, RespData


class Stream(Protocol):
    """A byte stream a client talks over."""

    async def read(self, size: int) -> bytes:
        """Return up to size bytes; an empty result means the peer closed."""
        ...

    async def write(self, data: bytes) -> int:
        """Send data and return the number of bytes written."""
        ...


class Client:
    """One connection together with the request and reply in progress."""

    def __init__(self, stream: Stream) -> None:
        self.stream = stream
        self.argv: List[bytes] = []
        self.name: bytes = b""
        self.cmd_name: bytes = b""
        self.key: bytes = b""
        self.reply: RespData = BulkString(None)

    async def read(self, size: int = 1024) -> bytes:
        """Read up to size bytes from the stream."""
        return await self.stream.read(size)

    async def write(self, data: bytes) -> int:
        """Write data to the stream."""
        return await self.stream.write(data)

    def take_reply(self) -> RespData:
        """Return the pending reply and reset it to the null bulk string."""
        reply, self.reply = self.reply, BulkString(None)
        return reply