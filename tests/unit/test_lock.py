"""Tests for ReentrancyLock."""

import pytest

from amm.errors import ReentrantCall
from amm.lock import ReentrancyLock


def test_try_acquire_is_non_blocking():
    lock = ReentrancyLock()
    assert lock.try_acquire()
    assert lock.locked
    assert not lock.try_acquire()
    lock.release()
    assert not lock.locked


def test_release_unlocked_raises():
    with pytest.raises(RuntimeError):
        ReentrancyLock().release()


def test_guard_rejects_nested_entry():
    lock = ReentrancyLock()
    with lock.guard():
        with pytest.raises(ReentrantCall) as exc_info:
            with lock.guard():
                pass
        assert lock.locked
    assert exc_info.value.code == "LOCKED"
    assert not lock.locked


def test_guard_releases_on_error():
    lock = ReentrancyLock()
    with pytest.raises(KeyError):
        with lock.guard():
            raise KeyError("boom")
    assert not lock.locked
