"""Serving one connection: read requests, run commands, write replies."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .client import Client
from .cmd import Cmd
from .encode import RespEncoder
from .errors import RespParseError
from .parse import RespParser
from .resp_types import Array, BulkString, ErrorReply, RespVersion

_log = logging.getLogger(__name__)

_READ_SIZE = 1024


async def process_connection(
    client: Client, storage: Any, cmd_table: Mapping[str, Cmd]
) -> None:
    """Serve the client until it closes the connection.

    Read errors and protocol errors are logged and raised; write errors
    are logged and the connection carries on.
    """
    parser = RespParser(RespVersion.RESP2)
    while True:
        try:
            data = await client.read(_READ_SIZE)
        except OSError as exc:
            _log.error("Read error: %r", exc)
            raise
        if not data:
            return

        try:
            value = parser.parse(data)
        except RespParseError as exc:
            _log.error("Protocol error: %r", exc)
            raise

        if not isinstance(value, Array) or value.items is None:
            continue
        params = value.items
        if not params:
            continue

        first = params[0]
        if isinstance(first, BulkString) and first.value is not None:
            client.cmd_name = first.value
        client.argv = [
            p.value if isinstance(p, BulkString) and p.value is not None else b""
            for p in params
        ]
        handle_command(client, storage, cmd_table)

        encoder = RespEncoder(RespVersion.RESP2)
        encoder.encode_resp_data(client.take_reply())
        try:
            await client.write(encoder.get_response())
        except OSError as exc:
            _log.error("Write error: %s", exc)


def handle_command(client: Client, storage: Any, cmd_table: Mapping[str, Cmd]) -> None:
    """Run the client's current command, or reply that it is unknown."""
    cmd_name = client.cmd_name.decode("utf-8", errors="replace").lower()
    cmd = cmd_table.get(cmd_name)
    if cmd is None:
        client.reply = ErrorReply(f"ERR unknown command `{cmd_name}`".encode("utf-8"))
        return
    cmd.clone().execute(client, storage)