import pytest

from kiwidb.client import Client
from kiwidb.resp_types import BulkString, SimpleString


class FakeStream:
    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.written = []
        self.sizes = []

    async def read(self, size):
        self.sizes.append(size)
        if not self.chunks:
            return b""
        return self.chunks.pop(0)

    async def write(self, data):
        self.written.append(bytes(data))
        return len(data)


def test_new_client_has_empty_state():
    client = Client(FakeStream([]))
    assert client.argv == []
    assert client.name == b""
    assert client.cmd_name == b""
    assert client.key == b""
    assert client.reply == BulkString(None)


def test_take_reply_returns_and_resets():
    client = Client(FakeStream([]))
    client.reply = SimpleString(b"OK")
    assert client.take_reply() == SimpleString(b"OK")
    assert client.reply == BulkString(None)
    assert client.take_reply() == BulkString(None)


@pytest.mark.asyncio
async def test_read_delegates_to_stream():
    stream = FakeStream([b"abc", b"de"])
    client = Client(stream)
    assert await client.read(16) == b"abc"
    assert await client.read(16) == b"de"
    assert await client.read(16) == b""
    assert stream.sizes == [16, 16, 16]


@pytest.mark.asyncio
async def test_write_delegates_to_stream():
    stream = FakeStream([])
    client = Client(stream)
    count = await client.write(b"+OK\r\n")
    assert count == len(b"+OK\r\n")
    assert stream.written == [b"+OK\r\n"]


def test_state_attributes_are_independent():
    client = Client(FakeStream([]))
    client.argv = [b"get", b"k"]
    client.key = client.argv[1]
    client.name = b"bob"
    assert client.key == b"k"
    assert client.argv == [b"get", b"k"]
    assert client.name == b"bob"