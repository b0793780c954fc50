import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from kiwidb.lock_mgr import LockMgr, ScopeRecordLock
from kiwidb.status import Code


def test_basic_lock_unlock():
    mgr = LockMgr(4)
    assert mgr.lock("test_key").is_ok()
    mgr.unlock("test_key")
    assert mgr.try_lock("test_key").is_ok()


def test_try_lock_success():
    mgr = LockMgr(4)
    assert mgr.try_lock("test_key").is_ok()
    mgr.unlock("test_key")


def test_try_lock_already_locked():
    mgr = LockMgr(4)
    assert mgr.try_lock("test_key").is_ok()
    second = mgr.try_lock("test_key")
    assert not second.is_ok()
    assert second.code is Code.BUSY
    assert second.message == "Lock already held"
    mgr.unlock("test_key")


def test_max_locks_limit():
    mgr = LockMgr(4, 2)
    assert mgr.try_lock("key1").is_ok()
    assert mgr.try_lock("key2").is_ok()
    third = mgr.try_lock("key3")
    assert not third.is_ok()
    assert third.message == "Lock limit reached"

    mgr.unlock("key1")
    assert mgr.try_lock("key3").is_ok()
    mgr.unlock("key2")
    mgr.unlock("key3")


def test_invalid_shard_count():
    with pytest.raises(ValueError):
        LockMgr(0)


def test_scope_record_lock():
    mgr = LockMgr(4)
    with ScopeRecordLock(mgr, "test_key") as lock:
        assert lock.is_locked()
        assert ScopeRecordLock.try_new(mgr, "test_key") is None
    assert not lock.is_locked()
    again = ScopeRecordLock.try_new(mgr, "test_key")
    assert again is not None and again.is_locked()
    again.release()
    assert not again.is_locked()
    assert mgr.try_lock("test_key").is_ok()


def test_release_twice_keeps_other_holder():
    mgr = LockMgr(4)
    lock = ScopeRecordLock(mgr, "k")
    lock.release()
    assert mgr.try_lock("k").is_ok()
    lock.release()
    assert not mgr.try_lock("k").is_ok()


def test_concurrent_access():
    mgr = LockMgr(4)
    counter = [0]
    held = []
    held_lock = threading.Lock()

    def work():
        with ScopeRecordLock(mgr, "shared_key") as lock:
            locked = lock.is_locked()
            with held_lock:
                held.append(locked)
            if locked:
                current = counter[0]
                time.sleep(0.001)
                counter[0] = current + 1

    threads = [threading.Thread(target=work) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert held == [True] * 10
    assert counter[0] == 10
    assert mgr.try_lock("shared_key").is_ok()
    mgr.unlock("shared_key")


def test_different_shards():
    mgr = LockMgr(4)
    keys = ["key1", "key2", "key3", "key4"]
    locked = [key for key in keys if mgr.try_lock(key).is_ok()]
    assert locked == keys
    for key in locked:
        mgr.unlock(key)


def test_edge_cases():
    mgr = LockMgr(1)
    assert mgr.try_lock("").is_ok()
    mgr.unlock("")
    long_key = "a" * 1000
    assert mgr.try_lock(long_key).is_ok()
    mgr.unlock(long_key)


def test_multiple_threads_same_key_contention():
    mgr = LockMgr(4)
    key = "contested_key"
    order = []
    order_lock = threading.Lock()
    counter = [0]
    races = []

    def work(thread_id):
        assert mgr.lock(key).is_ok()
        with order_lock:
            order.append(thread_id)
        current = counter[0]
        time.sleep(0.05)
        counter[0] = current + 1
        if counter[0] != current + 1:
            races.append(thread_id)
        mgr.unlock(key)

    threads = [threading.Thread(target=work, args=(i,)) for i in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter[0] == 5
    assert races == []
    assert sorted(order) == [0, 1, 2, 3, 4]
    assert mgr.try_lock(key).is_ok()
    mgr.unlock(key)


def test_try_lock_contention():
    mgr = LockMgr(4)
    key = "try_lock_key"
    results = []
    results_lock = threading.Lock()
    assert mgr.try_lock(key).is_ok()

    def work():
        ok = mgr.try_lock(key).is_ok()
        if ok:
            mgr.unlock(key)
        with results_lock:
            results.append(ok)

    threads = [threading.Thread(target=work) for _ in range(10)]
    for t in threads:
        t.start()
    time.sleep(0.1)
    mgr.unlock(key)
    for t in threads:
        t.join()
    assert len(results) == 10


def test_lock_blocks_until_unlocked():
    mgr = LockMgr(4)
    assert mgr.try_lock("k").is_ok()
    acquired = threading.Event()

    def work():
        mgr.lock("k")
        acquired.set()

    t = threading.Thread(target=work)
    t.start()
    assert not acquired.wait(0.1)
    mgr.unlock("k")
    assert acquired.wait(2)
    t.join()
    assert not mgr.try_lock("k").is_ok()


def test_lock_waits_for_quota():
    mgr = LockMgr(1, 1)
    assert mgr.try_lock("a").is_ok()
    acquired = threading.Event()

    def work():
        mgr.lock("b")
        acquired.set()

    t = threading.Thread(target=work)
    t.start()
    assert not acquired.wait(0.1)
    mgr.unlock("a")
    assert acquired.wait(2)
    t.join()
    assert mgr.try_lock("a").message == "Lock limit reached"


def test_scope_lock_survives_exception():
    mgr = LockMgr(4)

    def work():
        with ScopeRecordLock(mgr, "panic_key") as lock:
            assert lock.is_locked()
            raise RuntimeError("simulated failure while holding lock")

    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(work)
        assert isinstance(future.exception(), RuntimeError)

    assert mgr.try_lock("panic_key").is_ok()
    mgr.unlock("panic_key")


def test_multiple_exceptions_with_same_key():
    mgr = LockMgr(4)

    def work(thread_id):
        with ScopeRecordLock(mgr, "multi_panic_key"):
            time.sleep(thread_id * 0.01)
            raise RuntimeError(f"thread {thread_id} failed")

    with ThreadPoolExecutor(max_workers=3) as pool:
        futures = [pool.submit(work, i) for i in range(3)]
        errors = [f.exception() for f in futures]
    assert all(isinstance(e, RuntimeError) for e in errors)
    assert mgr.try_lock("multi_panic_key").is_ok()
    mgr.unlock("multi_panic_key")


def test_nested_scope_locks_with_exception():
    mgr = LockMgr(4)

    def work():
        with ScopeRecordLock(mgr, "outer_key") as outer:
            with ScopeRecordLock(mgr, "inner_key") as inner:
                assert outer.is_locked()
                assert inner.is_locked()
                raise RuntimeError("nested failure")

    with ThreadPoolExecutor(max_workers=1) as pool:
        assert isinstance(pool.submit(work).exception(), RuntimeError)

    assert mgr.try_lock("outer_key").is_ok()
    assert mgr.try_lock("inner_key").is_ok()
    mgr.unlock("outer_key")
    mgr.unlock("inner_key")