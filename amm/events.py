"""Notifications emitted by successful pool operations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class LiquidityAdded:
    """Shares were minted against a deposit."""

    provider: str
    asset_a: str
    asset_b: str
    amount_a: int
    amount_b: int
    liquidity_minted: int
    timestamp: int


@dataclass(frozen=True)
class LiquidityRemoved:
    """Shares were burned and assets withdrawn."""

    provider: str
    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class TokensSwapped:
    """One asset was exchanged for the other through a pool."""

    swapper: str
    asset_in: str
    asset_out: str
    amount_in: int
    amount_out: int
    timestamp: int


PoolEvent = LiquidityAdded | LiquidityRemoved | TokensSwapped


class EventLog:
    """Append-only record of pool notifications.

    Only the pool service appends. Aborted operations truncate back to the
    length they started at, so a failed call never leaves a notification.
    """

    def __init__(self) -> None:
        self._events: list[PoolEvent] = []

    def emit(self, event: PoolEvent) -> None:
        self._events.append(event)

    def truncate(self, length: int) -> None:
        del self._events[length:]

    def of_type(self, event_type: type) -> list[PoolEvent]:
        return [e for e in self._events if isinstance(e, event_type)]

    @property
    def last(self) -> PoolEvent | None:
        return self._events[-1] if self._events else None

    def __iter__(self) -> Iterator[PoolEvent]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)


__all__ = ["LiquidityAdded", "LiquidityRemoved", "TokensSwapped", "PoolEvent", "EventLog"]
