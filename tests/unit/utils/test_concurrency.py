"""
appcontext - unit tests for the reader/writer lock

File: tests/unit/utils/test_concurrency.py
Last updated: 2026-10-17

Purpose
- Validate shared/exclusive semantics of the lock guarding both typed stores.

Functional requirements
- Offline operation.

Non-functional requirements
- Deterministic and non-flaky; every wait is bounded.
"""

from __future__ import annotations

import threading

import pytest

from appcontext.utils.concurrency import ReadWriteLock


def test_multiple_readers_hold_the_lock_together() -> None:
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader() -> None:
        with lock.read_locked():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert all(not thread.is_alive() for thread in threads)
    assert lock.snapshot() == {"readers": 0, "writer_active": False, "writers_waiting": 0}


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    reader_entered = threading.Event()

    lock.acquire_write()

    def reader() -> None:
        with lock.read_locked():
            reader_entered.set()

    thread = threading.Thread(target=reader)
    thread.start()

    assert not reader_entered.wait(timeout=0.2)
    lock.release_write()
    assert reader_entered.wait(timeout=5)
    thread.join(timeout=5)


def test_writer_waits_for_active_reader() -> None:
    lock = ReadWriteLock()
    writer_entered = threading.Event()

    lock.acquire_read()

    def writer() -> None:
        with lock.write_locked():
            writer_entered.set()

    thread = threading.Thread(target=writer)
    thread.start()

    assert not writer_entered.wait(timeout=0.2)
    assert lock.snapshot()["writers_waiting"] == 1
    lock.release_read()
    assert writer_entered.wait(timeout=5)
    thread.join(timeout=5)


def test_lock_is_released_when_body_raises() -> None:
    lock = ReadWriteLock()

    with pytest.raises(RuntimeError, match="boom"), lock.write_locked():
        raise RuntimeError("boom")

    assert lock.snapshot()["writer_active"] is False


def test_unmatched_release_is_rejected() -> None:
    lock = ReadWriteLock()

    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()
