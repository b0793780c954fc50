"""Command objects, their metadata and command groups."""

from __future__ import annotations

import abc
import copy
import dataclasses
import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .client import Client
from .resp_types import BulkString, ErrorReply, SimpleString

_log = logging.getLogger(__name__)


class CmdFlags(enum.IntFlag):
    """Properties of a command."""

    WRITE = 1 << 0
    READONLY = 1 << 1
    MODULE = 1 << 2
    ADMIN = 1 << 3
    PUBSUB = 1 << 4
    NOSCRIPT = 1 << 5
    BLOCKING = 1 << 6
    SKIP_MONITOR = 1 << 7
    SKIP_SLOWLOG = 1 << 8
    FAST = 1 << 9
    NO_AUTH = 1 << 10
    MAY_REPLICATE = 1 << 11
    PROTECTED = 1 << 12
    MODULE_NO_CLUSTER = 1 << 13
    NO_MULTI = 1 << 14
    EXCLUSIVE = 1 << 15
    RAFT = 1 << 16


class AclCategory(enum.IntFlag):
    """Access-control categories a command belongs to."""

    KEYSPACE = 1 << 0
    READ = 1 << 1
    WRITE = 1 << 2
    SET = 1 << 3
    SORTEDSET = 1 << 4
    LIST = 1 << 5
    HASH = 1 << 6
    STRING = 1 << 7
    BITMAP = 1 << 8
    HYPERLOGLOG = 1 << 9
    GEO = 1 << 10
    STREAM = 1 << 11
    PUBSUB = 1 << 12
    ADMIN = 1 << 13
    FAST = 1 << 14
    SLOW = 1 << 15
    BLOCKING = 1 << 16
    DANGEROUS = 1 << 17
    CONNECTION = 1 << 18
    TRANSACTION = 1 << 19
    SCRIPTING = 1 << 20
    RAFT = 1 << 21


@dataclass
class CmdMeta:
    """Name, arity and flags of a command.

    A positive arity is the exact argument count (command name included);
    a negative arity is the minimum count.
    """

    name: str = ""
    arity: int = 0
    flags: CmdFlags = CmdFlags(0)
    acl_category: AclCategory = AclCategory(0)
    cmd_id: int = 0


class Cmd(abc.ABC):
    """A command the server can run for a client."""

    def __init__(self, meta: CmdMeta) -> None:
        self.meta = meta

    @property
    def name(self) -> str:
        return self.meta.name

    @property
    def acl_category(self) -> AclCategory:
        return self.meta.acl_category

    @abc.abstractmethod
    def do_initial(self, client: Client) -> bool:
        """Prepare the client for the command; return False to skip running it."""

    @abc.abstractmethod
    def do_cmd(self, client: Client, storage: Any) -> None:
        """Run the command, leaving the reply on the client."""

    def execute(self, client: Client, storage: Any) -> None:
        _log.debug("execute command: %r", client.cmd_name)
        if self.do_initial(client):
            self.do_cmd(client, storage)

    def check_arg(self, num: int) -> bool:
        """Return whether num arguments satisfy the arity."""
        arity = self.meta.arity
        if arity > 0:
            return num == arity
        return num >= -arity

    def has_flag(self, flag: CmdFlags) -> bool:
        return flag in self.meta.flags

    def has_sub_command(self) -> bool:
        return False

    def get_sub_cmd(self, cmd_name: str) -> Optional["Cmd"]:
        return None

    def clone(self) -> "Cmd":
        """Return an independent copy of this command."""
        duplicate = copy.copy(self)
        duplicate.meta = dataclasses.replace(self.meta)
        return duplicate


class BaseCmdGroup(Cmd):
    """A command whose second argument selects one of its sub-commands."""

    def __init__(
        self, name: str, arity: int, flags: CmdFlags, acl_category: AclCategory
    ) -> None:
        super().__init__(
            CmdMeta(name=name, arity=arity, flags=flags, acl_category=acl_category)
        )
        self.sub_cmds: Dict[str, Cmd] = {}

    def add_sub_cmd(self, cmd: Cmd) -> None:
        self.sub_cmds[cmd.name.lower()] = cmd

    def do_initial(self, client: Client) -> bool:
        return True

    def do_cmd(self, client: Client, storage: Any) -> None:
        if len(client.argv) < 2:
            client.reply = ErrorReply(b"ERR wrong number of arguments for command")
            return
        sub_name = client.argv[1].decode("utf-8", errors="replace").lower()
        sub_cmd = self.sub_cmds.get(sub_name)
        if sub_cmd is None:
            message = f"ERR unknown command '{self.name} {sub_name}'"
            client.reply = ErrorReply(message.encode("utf-8"))
            return
        sub_cmd.execute(client, storage)

    def has_sub_command(self) -> bool:
        return True

    def get_sub_cmd(self, cmd_name: str) -> Optional[Cmd]:
        return self.sub_cmds.get(cmd_name)

    def clone(self) -> "BaseCmdGroup":
        group = BaseCmdGroup(
            self.meta.name, self.meta.arity, self.meta.flags, self.meta.acl_category
        )
        group.sub_cmds = {name: cmd.clone() for name, cmd in self.sub_cmds.items()}
        return group


class CmdClientGetname(Cmd):
    """CLIENT GETNAME: reply with the client's name."""

    def __init__(self) -> None:
        super().__init__(
            CmdMeta(
                name="getname",
                arity=2,
                flags=CmdFlags.ADMIN | CmdFlags.READONLY,
                acl_category=AclCategory.ADMIN,
            )
        )

    def do_initial(self, client: Client) -> bool:
        return True

    def do_cmd(self, client: Client, storage: Any) -> None:
        name = client.name.decode("utf-8", errors="replace")
        client.reply = BulkString(name.encode("utf-8"))


class CmdClientSetname(Cmd):
    """CLIENT SETNAME name: give the client a name."""

    def __init__(self) -> None:
        super().__init__(
            CmdMeta(
                name="setname",
                arity=3,
                flags=CmdFlags.ADMIN | CmdFlags.WRITE,
                acl_category=AclCategory.ADMIN,
            )
        )

    def do_initial(self, client: Client) -> bool:
        return True

    def do_cmd(self, client: Client, storage: Any) -> None:
        if len(client.argv) < 3:
            client.reply = ErrorReply(b"ERR wrong number of arguments")
            return
        client.name = bytes(client.argv[2])
        client.reply = SimpleString(b"OK")


def new_client_group_cmd() -> BaseCmdGroup:
    """Build the CLIENT command group with its sub-commands."""
    group = BaseCmdGroup("client", -2, CmdFlags.ADMIN, AclCategory.ADMIN)
    group.add_sub_cmd(CmdClientGetname())
    group.add_sub_cmd(CmdClientSetname())
    return group