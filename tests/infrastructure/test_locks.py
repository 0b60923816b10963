"""Tests for the writer-preferring reader/writer lock."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

import pytest

from wikigraph.infrastructure.locks import ReadWriteLock


def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestReadWriteLock:
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        entered = threading.Event()

        def reader() -> None:
            with lock.read_locked():
                entered.set()

        with lock.read_locked():
            t = threading.Thread(target=reader)
            t.start()
            assert entered.wait(timeout=2)
        t.join(timeout=2)
        assert not t.is_alive()

    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                acquired.set()

        lock.acquire_read()
        t = threading.Thread(target=writer)
        t.start()
        assert not acquired.wait(timeout=0.05)
        lock.release_read()
        assert acquired.wait(timeout=2)
        t.join(timeout=2)

    def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = ReadWriteLock()
        order: list[str] = []

        def writer() -> None:
            with lock.write_locked():
                order.append("write")

        def reader() -> None:
            with lock.read_locked():
                order.append("read")

        lock.acquire_read()
        w = threading.Thread(target=writer)
        w.start()
        assert _wait_until(lambda: lock._writers_waiting == 1)

        r = threading.Thread(target=reader)
        r.start()
        time.sleep(0.05)
        assert order == []

        lock.release_read()
        w.join(timeout=2)
        r.join(timeout=2)
        assert order == ["write", "read"]

    def test_context_manager_releases_on_error(self) -> None:
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError), lock.write_locked():
            raise RuntimeError("boom")
        with pytest.raises(RuntimeError), lock.read_locked():
            raise RuntimeError("boom")
        # Both sides are free again.
        with lock.write_locked():
            pass
