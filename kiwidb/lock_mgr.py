"""Per-key record locks spread over shards, with an optional global limit."""

from __future__ import annotations

import threading
from typing import Optional, Set

from .status import Status


class _Shard:
    def __init__(self) -> None:
        self.cond = threading.Condition()
        self.keys: Set[str] = set()


class LockMgr:
    """Grants exclusive locks on string keys.

    A max_locks of zero or less means there is no limit on the number of
    keys held at once.
    """

    def __init__(self, num_shards: int, max_locks: int = -1) -> None:
        if num_shards <= 0:
            raise ValueError("num_shards must be positive")
        self._shards = [_Shard() for _ in range(num_shards)]
        self._max_locks = max_locks
        self._lock_cnt = 0
        self._cnt_lock = threading.Lock()

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def _limited(self) -> bool:
        return self._max_locks > 0

    def _has_quota(self) -> bool:
        if not self._limited():
            return True
        with self._cnt_lock:
            return self._lock_cnt < self._max_locks

    def _add_count(self, delta: int) -> None:
        if self._limited():
            with self._cnt_lock:
                self._lock_cnt += delta

    def lock(self, key: str) -> Status:
        """Block until the key is free and the limit allows it, then take it."""
        shard = self._shard_for(key)
        with shard.cond:
            while key in shard.keys or not self._has_quota():
                shard.cond.wait()
            shard.keys.add(key)
            self._add_count(1)
        return Status.ok()

    def unlock(self, key: str) -> None:
        """Release the key; releasing a key that is not held does nothing."""
        shard = self._shard_for(key)
        with shard.cond:
            if key in shard.keys:
                shard.keys.remove(key)
                self._add_count(-1)
            shard.cond.notify_all()

    def try_lock(self, key: str) -> Status:
        """Take the key if possible without waiting; otherwise return a busy status."""
        shard = self._shard_for(key)
        with shard.cond:
            if key in shard.keys:
                return Status.busy("Lock already held")
            if not self._has_quota():
                return Status.busy("Lock limit reached")
            shard.keys.add(key)
            self._add_count(1)
        return Status.ok()


class ScopeRecordLock:
    """Holds a key of a LockMgr until released or until its with block ends."""

    def __init__(self, mgr: LockMgr, key: str) -> None:
        self._mgr = mgr
        self._key = key
        self._locked = mgr.lock(key).is_ok()

    @classmethod
    def try_new(cls, mgr: LockMgr, key: str) -> Optional["ScopeRecordLock"]:
        """Return a held lock if the key can be taken at once, else None."""
        if not mgr.try_lock(key).is_ok():
            return None
        held = cls.__new__(cls)
        held._mgr = mgr
        held._key = key
        held._locked = True
        return held

    def is_locked(self) -> bool:
        return self._locked

    def release(self) -> None:
        """Give the key back; calling this again does nothing."""
        if self._locked:
            self._locked = False
            self._mgr.unlock(self._key)

    def __enter__(self) -> "ScopeRecordLock":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()