"""Asset ledger collaborator.

The pool service never holds balances itself: it asks a Ledger to pull
assets from a sender into pool custody and to push assets out of custody to
a recipient. InMemoryLedger is the reference implementation used by the API
and the tests.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol, runtime_checkable

import structlog

from amm.errors import TransferFailed
from amm.models.types import normalize_address

logger = structlog.get_logger()

# Account that holds assets deposited into pools
POOL_CUSTODY = "0x00000000000000000000000000000000000a4400"

# (asset, sender, recipient, amount), called after each completed transfer
TransferHook = Callable[[str, str, str, int], None]


@runtime_checkable
class Ledger(Protocol):
    """Moves balances between accounts, or fails the whole operation.

    Attributes:
        custody: Account holding the assets deposited into pools
    """

    custody: str

    def pull(self, asset: str, sender: str, amount: int) -> None:
        """Move amount of asset from sender into pool custody."""
        ...

    def push(self, asset: str, recipient: str, amount: int) -> None:
        """Move amount of asset from pool custody to recipient."""
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Context manager: undo every transfer made inside it if it raises."""
        ...


class InMemoryLedger:
    """Dictionary-backed ledger with optional transfer hooks.

    Hooks run arbitrary caller-supplied logic after each transfer, which is
    how tests exercise re-entrant calls into the pool service.

    Usage:
        ledger = InMemoryLedger()
        ledger.mint(WETH, alice, 10**18)
        with ledger.atomic():
            ledger.pull(WETH, alice, 10**17)
    """

    def __init__(self, custody: str = POOL_CUSTODY) -> None:
        self.custody = normalize_address(custody)
        self._balances: defaultdict[tuple[str, str], int] = defaultdict(int)
        self._hooks: list[TransferHook] = []

    def balance_of(self, asset: str, account: str) -> int:
        return self._balances.get((normalize_address(asset), normalize_address(account)), 0)

    def mint(self, asset: str, account: str, amount: int) -> None:
        """Credit new balance to an account (test and bootstrap helper)."""
        if amount < 0:
            raise ValueError(f"Cannot mint a negative amount: {amount}")
        self._balances[(normalize_address(asset), normalize_address(account))] += amount

    def add_hook(self, hook: TransferHook) -> None:
        self._hooks.append(hook)

    def clear_hooks(self) -> None:
        self._hooks.clear()

    def pull(self, asset: str, sender: str, amount: int) -> None:
        self._transfer(asset, sender, self.custody, amount)

    def push(self, asset: str, recipient: str, amount: int) -> None:
        self._transfer(asset, self.custody, recipient, amount)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Roll back all balance changes made in the block if it raises."""
        saved = dict(self._balances)
        try:
            yield
        except BaseException:
            self._balances = defaultdict(int, saved)
            logger.debug("ledger_rolled_back", accounts=len(saved))
            raise

    def _transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        asset_norm = normalize_address(asset)
        sender_norm = normalize_address(sender)
        recipient_norm = normalize_address(recipient)

        if sender_norm == recipient_norm:
            raise TransferFailed(f"Sender and recipient are the same account: {sender_norm}")
        if amount < 0:
            raise TransferFailed(f"Negative transfer amount: {amount}")
        balance = self._balances.get((asset_norm, sender_norm), 0)
        if balance < amount:
            raise TransferFailed(
                f"Insufficient balance of {asset_norm} for {sender_norm}: {balance} < {amount}"
            )

        self._balances[(asset_norm, sender_norm)] = balance - amount
        self._balances[(asset_norm, recipient_norm)] += amount

        for hook in list(self._hooks):
            hook(asset_norm, sender_norm, recipient_norm, amount)


__all__ = ["Ledger", "InMemoryLedger", "POOL_CUSTODY", "TransferHook"]
