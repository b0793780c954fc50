"""Commands: names recognised by the server and the decoding of requests."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidDataError
from .resp_types import Array, Inline, RespData


class CommandType(enum.Enum):
    """Every command name the protocol layer knows; the value is the wire name."""

    # Keys
    DEL = "DEL"
    EXISTS = "EXISTS"
    EXPIRE = "EXPIRE"
    EXPIREAT = "EXPIREAT"
    KEYS = "KEYS"
    PERSIST = "PERSIST"
    PEXPIRE = "PEXPIRE"
    PEXPIREAT = "PEXPIREAT"
    PTTL = "PTTL"
    RENAME = "RENAME"
    RENAMENX = "RENAMENX"
    SCAN = "SCAN"
    TOUCH = "TOUCH"
    TTL = "TTL"
    TYPE = "TYPE"
    UNLINK = "UNLINK"

    # Strings
    APPEND = "APPEND"
    BITCOUNT = "BITCOUNT"
    BITOP = "BITOP"
    BITPOS = "BITPOS"
    DECR = "DECR"
    DECRBY = "DECRBY"
    GET = "GET"
    GETBIT = "GETBIT"
    GETRANGE = "GETRANGE"
    GETSET = "GETSET"
    INCR = "INCR"
    INCRBY = "INCRBY"
    INCRBYFLOAT = "INCRBYFLOAT"
    MGET = "MGET"
    MSET = "MSET"
    MSETNX = "MSETNX"
    PSETEX = "PSETEX"
    SET = "SET"
    SETBIT = "SETBIT"
    SETEX = "SETEX"
    SETNX = "SETNX"
    SETRANGE = "SETRANGE"
    STRLEN = "STRLEN"

    # Lists
    BLPOP = "BLPOP"
    BRPOP = "BRPOP"
    BRPOPLPUSH = "BRPOPLPUSH"
    LINDEX = "LINDEX"
    LINSERT = "LINSERT"
    LLEN = "LLEN"
    LPOP = "LPOP"
    LPUSH = "LPUSH"
    LPUSHX = "LPUSHX"
    LRANGE = "LRANGE"
    LREM = "LREM"
    LSET = "LSET"
    LTRIM = "LTRIM"
    RPOP = "RPOP"
    RPOPLPUSH = "RPOPLPUSH"
    RPUSH = "RPUSH"
    RPUSHX = "RPUSHX"

    # Sets
    SADD = "SADD"
    SCARD = "SCARD"
    SDIFF = "SDIFF"
    SDIFFSTORE = "SDIFFSTORE"
    SINTER = "SINTER"
    SINTERSTORE = "SINTERSTORE"
    SISMEMBER = "SISMEMBER"
    SMEMBERS = "SMEMBERS"
    SMOVE = "SMOVE"
    SPOP = "SPOP"
    SRANDMEMBER = "SRANDMEMBER"
    SREM = "SREM"
    SSCAN = "SSCAN"
    SUNION = "SUNION"
    SUNIONSTORE = "SUNIONSTORE"

    # Sorted sets
    ZADD = "ZADD"
    ZCARD = "ZCARD"
    ZCOUNT = "ZCOUNT"
    ZINCRBY = "ZINCRBY"
    ZINTERSTORE = "ZINTERSTORE"
    ZLEXCOUNT = "ZLEXCOUNT"
    ZRANGE = "ZRANGE"
    ZRANGEBYLEX = "ZRANGEBYLEX"
    ZRANGEBYSCORE = "ZRANGEBYSCORE"
    ZRANK = "ZRANK"
    ZREM = "ZREM"
    ZREMRANGEBYLEX = "ZREMRANGEBYLEX"
    ZREMRANGEBYRANK = "ZREMRANGEBYRANK"
    ZREMRANGEBYSCORE = "ZREMRANGEBYSCORE"
    ZREVRANGE = "ZREVRANGE"
    ZREVRANGEBYLEX = "ZREVRANGEBYLEX"
    ZREVRANGEBYSCORE = "ZREVRANGEBYSCORE"
    ZREVRANK = "ZREVRANK"
    ZSCAN = "ZSCAN"
    ZSCORE = "ZSCORE"
    ZUNIONSTORE = "ZUNIONSTORE"

    # Hashes
    HDEL = "HDEL"
    HEXISTS = "HEXISTS"
    HGET = "HGET"
    HGETALL = "HGETALL"
    HINCRBY = "HINCRBY"
    HINCRBYFLOAT = "HINCRBYFLOAT"
    HKEYS = "HKEYS"
    HLEN = "HLEN"
    HMGET = "HMGET"
    HMSET = "HMSET"
    HSCAN = "HSCAN"
    HSET = "HSET"
    HSETNX = "HSETNX"
    HSTRLEN = "HSTRLEN"
    HVALS = "HVALS"

    # Server
    AUTH = "AUTH"
    ECHO = "ECHO"
    FLUSHALL = "FLUSHALL"
    FLUSHDB = "FLUSHDB"
    INFO = "INFO"
    PING = "PING"
    SELECT = "SELECT"

    # Transactions
    DISCARD = "DISCARD"
    EXEC = "EXEC"
    MULTI = "MULTI"
    UNWATCH = "UNWATCH"
    WATCH = "WATCH"

    # Pub/Sub
    PSUBSCRIBE = "PSUBSCRIBE"
    PUBLISH = "PUBLISH"
    PUNSUBSCRIBE = "PUNSUBSCRIBE"
    SUBSCRIBE = "SUBSCRIBE"
    UNSUBSCRIBE = "UNSUBSCRIBE"

    # Connection
    QUIT = "QUIT"

    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_name(cls, name: str) -> "CommandType":
        """Look a command up by name, ignoring case; unknown names give UNKNOWN."""
        try:
            return cls(name.upper())
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


@dataclass
class RespCommand:
    """A decoded request: the command and its arguments."""

    command_type: CommandType
    args: List[bytes] = field(default_factory=list)
    is_pipeline: bool = False

    def arg(self, index: int) -> Optional[bytes]:
        """Return the argument at index, or None when there is none."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return None

    def arg_count(self) -> int:
        return len(self.args)

    def arg_string(self, index: int) -> Optional[str]:
        """Return the argument at index as UTF-8 text, or None."""
        value = self.arg(index)
        if value is None:
            return None
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return None


def to_command(data: RespData) -> RespCommand:
    """Turn a parsed array or inline request into a command."""
    if isinstance(data, Array) and data.items:
        command_name = data.items[0].as_string()
        if command_name is None:
            raise InvalidDataError("Command name must be a string")
        args = []
        for item in data.items[1:]:
            value = item.as_bytes()
            if value is None:
                raise InvalidDataError("Command argument must be convertible to bytes")
            args.append(value)
        return RespCommand(CommandType.from_name(command_name), args)

    if isinstance(data, Inline) and data.parts:
        try:
            command_name = data.parts[0].decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidDataError("Command name must be a valid UTF-8 string") from None
        return RespCommand(CommandType.from_name(command_name), list(data.parts[1:]))

    raise InvalidDataError("Invalid command format")