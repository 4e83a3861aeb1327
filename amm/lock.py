"""Re-entrancy lock shared by every public pool operation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from amm.errors import ReentrantCall


class ReentrancyLock:
    """Single non-blocking mutual-exclusion flag.

    Operations run serially, but a ledger transfer hook can call back into
    the service before the outer operation finishes. The lock turns such a
    call into an immediate ReentrantCall instead of letting it see
    half-updated pool state.
    """

    def __init__(self) -> None:
        self._held = False

    @property
    def locked(self) -> bool:
        return self._held

    def try_acquire(self) -> bool:
        """Take the lock. Returns False, without waiting, if already held."""
        if self._held:
            return False
        self._held = True
        return True

    def release(self) -> None:
        """Release the lock.

        Raises:
            RuntimeError: If the lock is not held
        """
        if not self._held:
            raise RuntimeError("release() called on an unlocked ReentrancyLock")
        self._held = False

    @contextmanager
    def guard(self) -> Iterator[None]:
        """Hold the lock for the duration of the block.

        Raises:
            ReentrantCall: If the lock is already held
        """
        if not self.try_acquire():
            raise ReentrantCall()
        try:
            yield
        finally:
            self.release()


__all__ = ["ReentrancyLock"]
