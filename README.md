# kiwidb

The core pieces of a Redis-compatible key-value server, written as a plain
Python library with no third-party dependencies:

- **RESP values** – `kiwidb.resp_types` holds `SimpleString`, `ErrorReply`,
  `Integer`, `BulkString`, `Array` and `Inline`, all subclasses of `RespData`,
  together with `RespType` and `RespVersion`.
- **RESP parsing** – `kiwidb.parse.RespParser` is an incremental parser for
  simple strings, errors, integers, bulk strings, arrays and inline commands.
  Each value it reads is also turned into a queued `RespCommand`.
- **RESP encoding** – `kiwidb.encode.RespEncoder` builds replies, including
  the canned replies listed in `kiwidb.encode.CmdRes`.
- **Commands** – `kiwidb.command.CommandType` names the known Redis commands,
  and `kiwidb.command.to_command` turns a parsed value into a `RespCommand`.
- **A simpler request reader** – `kiwidb.protocol.RespProtocol` reads only
  `*<n>` arrays of `$<len>` bulk strings and raises `InvalidFormatError` on
  anything else.
- **Command dispatch** – `kiwidb.cmd` defines the `Cmd` base class with its
  `CmdFlags` and `AclCategory`, command groups (`BaseCmdGroup`) and the
  `CLIENT GETNAME` / `CLIENT SETNAME` sub-commands (`new_client_group_cmd`).
  `kiwidb.client.Client` carries a connection's stream and request state, and
  `kiwidb.handle` drives a client through parse, dispatch and reply.
- **Key locks** – `kiwidb.lock_mgr.LockMgr` is a sharded, per-key lock manager
  with an optional limit on how many keys may be held at once;
  `ScopeRecordLock` holds one key for the length of a `with` block. Outcomes
  are reported as `kiwidb.status.Status` values.
- **Configuration** – `kiwidb.config.Config` loads an INI file, with memory
  sizes such as `256MB` and yes/no switches, and validates it.
- **Small helpers** – `kiwidb.slice.Slice` (a view over bytes with hex
  output) and `kiwidb.env` (`is_dir`, `mkdir_with_path`, `delete_dir`).

## Installing

Install the package with your usual Python package installer; it needs
Python 3.10 or later. The `test` extra adds what the test suite needs.

## Encoding replies

```python
from kiwidb.encode import CmdRes, RespEncoder
from kiwidb.resp_types import BulkString, RespVersion

encoder = RespEncoder(RespVersion.RESP2)
encoder.append_simple_string("OK")
print(encoder.get_response())        # b'+OK\r\n'

encoder.clear()
encoder.set_res(CmdRes.WRONG_NUM, "get")
print(encoder.get_response())        # b"-ERR wrong number of arguments for 'get' command\r\n"

encoder.clear()
encoder.encode_resp_data(BulkString(None))
print(encoder.get_response())        # b'$-1\r\n'
```

## Parsing requests

```python
from kiwidb.parse import RespParser
from kiwidb.resp_types import RespVersion

parser = RespParser(RespVersion.RESP2)
value = parser.parse(b"*2\r\n$3\r\nGET\r\n$3\r\nfoo\r\n")
print(value)                         # Array([BulkString("GET"), BulkString("foo")])

command = parser.next_command()
print(command.command_type)          # GET
print(command.arg_string(0))         # foo
```

Data may arrive in pieces: `parse` returns `None` while a value is
incomplete, keeps what it has been given, and returns the value once the rest
arrives. Input that is not valid RESP raises `kiwidb.errors.RespParseError`.
When one call delivers several values, call `parse(b"")` again to read the
next one.

## Dispatching commands

```python
from kiwidb.client import Client
from kiwidb.cmd import new_client_group_cmd
from kiwidb.handle import handle_command

table = {"client": new_client_group_cmd()}
client = Client(stream=None)         # a Stream is only needed for read/write

client.cmd_name = b"CLIENT"
client.argv = [b"CLIENT", b"SETNAME", b"worker-1"]
handle_command(client, None, table)
print(client.take_reply())           # SimpleString("OK")
```

`process_connection(client, storage, cmd_table)` is a coroutine that reads
from the client's stream, runs each array request through `handle_command`
and writes the encoded reply, until the stream returns no data.

## Locking keys

```python
from kiwidb.lock_mgr import LockMgr, ScopeRecordLock

mgr = LockMgr(4, 2)                  # four shards, at most two keys held at once

with ScopeRecordLock(mgr, "user:1"):
    print(mgr.try_lock("user:1"))    # Busy: Lock already held

print(mgr.try_lock("user:1").is_ok())  # True: released when the block ended
mgr.unlock("user:1")
```

`try_lock` never waits; it returns a busy `Status` when the key is already
held or the limit has been reached. `lock` waits until both are free.

## Configuration

```ini
port = 9221
timeout = 50
log_dir = /var/log/kiwidb
memory = 1GB
redis_compatible_mode = yes
```

```python
from kiwidb.config import Config, parse_memory

config = Config.load("config.ini")
print(config.memory)                 # 1073741824

print(parse_memory("256MB"))         # 268435456
```

Only keys that stand before any `[section]` header are read. Port must lie
between 1024 and 65535 and timeout between 1 and 1000; a file that cannot be
read, does not parse or fails validation raises a `ConfigError` subclass.

## What this package does not do

- It has no network server and no command to start one: nothing here opens
  a listening socket. `process_connection` serves a single `Client` over
  whatever `Stream` you hand it.
- It has no storage engine. The `storage` argument of `handle_command`,
  `process_connection` and `Cmd.execute` is passed through untouched, and the
  only commands provided are `CLIENT GETNAME` and `CLIENT SETNAME`; there is
  no `GET`, `SET` or other data command, and no ready-made command table.

## Running the tests

Install the `test` extra and run pytest from the project root.