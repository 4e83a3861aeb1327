"""Pool service: the public entry point for liquidity and swap operations.

PoolService composes the registry, the share and swap math, the ledger and
the notification log. Every public operation:

1. Takes the global re-entrancy lock (failing immediately if held)
2. Checks the deadline, recipient and amounts
3. Brings pool state to its final values
4. Moves assets through the ledger
5. Emits exactly one notification

Any exception after step 2 restores the pool snapshot, undoes the ledger
transfers and drops the notification, so an aborted call has no effect.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from amm.config import DEFAULT_POOL_CONFIG, PoolConfig
from amm.constants import ZERO_ADDRESS
from amm.errors import (
    AMMError,
    DeadlineExpired,
    InsufficientAAmount,
    InsufficientBAmount,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InsufficientShares,
    InvalidAmount,
    InvalidPath,
    InvalidRecipient,
    TransferFailed,
    ValidationError,
    ZeroAmount,
)
from amm.events import EventLog, LiquidityAdded, LiquidityRemoved, TokensSwapped
from amm.ledger import InMemoryLedger, Ledger
from amm.lock import ReentrancyLock
from amm.math.liquidity import quote_add, quote_remove
from amm.math.swap import get_amount_out
from amm.models.types import is_valid_address, normalize_address
from amm.pools.pair_key import sort_assets
from amm.pools.pool import Pool
from amm.pools.registry import PoolRegistry
from amm.safe_int import S, is_uint256

logger = structlog.get_logger()


def _unix_now() -> int:
    return int(time.time())


class PoolService:
    """Constant-product AMM over a registry of two-asset pools.

    Args:
        ledger: Asset transfer collaborator. Defaults to a fresh InMemoryLedger.
        registry: Pool registry. Defaults to an empty one.
        config: Fee and price-scale configuration.
        lock: Re-entrancy lock shared by all operations.
        events: Notification log.
        clock: Returns the current time in seconds, compared against deadlines.
    """

    def __init__(
        self,
        ledger: Ledger | None = None,
        registry: PoolRegistry | None = None,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        lock: ReentrancyLock | None = None,
        events: EventLog | None = None,
        clock: Callable[[], int] = _unix_now,
    ) -> None:
        self.ledger: Ledger = ledger if ledger is not None else InMemoryLedger()
        self.registry = registry if registry is not None else PoolRegistry()
        self.config = config
        self.lock = lock if lock is not None else ReentrancyLock()
        self.events = events if events is not None else EventLog()
        self._clock = clock

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def add_liquidity(
        self,
        asset_a: str,
        asset_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        caller: str,
    ) -> tuple[int, int, int]:
        """Deposit a pair of assets and mint liquidity shares to `to`.

        Returns:
            (amount_a, amount_b, liquidity) actually deposited and minted
        """
        with self._operation("add_liquidity"):
            now = self._check_deadline(deadline)
            recipient = self._check_address(to)
            sender = self._check_caller(caller)
            for name, amount in (
                ("amount_a_desired", amount_a_desired),
                ("amount_b_desired", amount_b_desired),
                ("amount_a_min", amount_a_min),
                ("amount_b_min", amount_b_min),
            ):
                self._check_amount(name, amount)
            sort_assets(asset_a, asset_b)
            a, b = normalize_address(asset_a), normalize_address(asset_b)

            created = self.registry.get(a, b) is None
            pool = self.registry.resolve(a, b)
            with self._atomic(pool, created=created):
                amount_a, amount_b, liquidity = quote_add(
                    pool, a, amount_a_desired, amount_b_desired, amount_a_min, amount_b_min
                )
                pool.deposit(a, amount_a, amount_b)
                pool.mint(recipient, liquidity)

                self._pull(a, sender, amount_a)
                self._pull(b, sender, amount_b)

                self.events.emit(
                    LiquidityAdded(
                        provider=sender,
                        asset_a=a,
                        asset_b=b,
                        amount_a=amount_a,
                        amount_b=amount_b,
                        liquidity_minted=liquidity,
                        timestamp=now,
                    )
                )

            logger.info(
                "liquidity_added",
                pair=pool.key.hex()[:16],
                provider=sender[-8:],
                recipient=recipient[-8:],
                amount_a=amount_a,
                amount_b=amount_b,
                liquidity=liquidity,
                total_liquidity=pool.total_liquidity,
            )
            return amount_a, amount_b, liquidity

    def remove_liquidity(
        self,
        asset_a: str,
        asset_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        caller: str,
    ) -> tuple[int, int]:
        """Burn the caller's shares and send the pro-rata reserves to `to`.

        Returns:
            (amount_a, amount_b) withdrawn, in caller order
        """
        with self._operation("remove_liquidity"):
            self._check_deadline(deadline)
            recipient = self._check_address(to)
            sender = self._check_caller(caller)
            self._check_amount("liquidity", liquidity)
            self._check_amount("amount_a_min", amount_a_min)
            self._check_amount("amount_b_min", amount_b_min)
            if liquidity == 0:
                raise ZeroAmount("Liquidity to remove must be greater than zero")
            sort_assets(asset_a, asset_b)
            a, b = normalize_address(asset_a), normalize_address(asset_b)

            pool = self.registry.get(a, b)
            if pool is None or pool.total_liquidity == 0:
                raise InsufficientLiquidity(f"No liquidity for pair {a}/{b}")
            held = pool.share_of(sender)
            if held < liquidity:
                raise InsufficientShares(f"Caller holds {held} shares, cannot burn {liquidity}")

            with self._atomic(pool):
                amount0, amount1 = quote_remove(pool, liquidity, pool.reserve0, pool.reserve1)
                if a == pool.asset0:
                    amount_a, amount_b = amount0, amount1
                else:
                    amount_a, amount_b = amount1, amount0
                if amount_a < amount_a_min:
                    raise InsufficientAAmount(
                        f"Amount A {amount_a} is below minimum {amount_a_min}"
                    )
                if amount_b < amount_b_min:
                    raise InsufficientBAmount(
                        f"Amount B {amount_b} is below minimum {amount_b_min}"
                    )

                pool.burn(sender, liquidity)
                pool.withdraw(amount0, amount1)

                self._push(a, recipient, amount_a)
                self._push(b, recipient, amount_b)

                self.events.emit(
                    LiquidityRemoved(provider=sender, amount_a=amount_a, amount_b=amount_b)
                )

            logger.info(
                "liquidity_removed",
                pair=pool.key.hex()[:16],
                provider=sender[-8:],
                recipient=recipient[-8:],
                amount_a=amount_a,
                amount_b=amount_b,
                liquidity=liquidity,
                total_liquidity=pool.total_liquidity,
            )
            return amount_a, amount_b

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        caller: str,
    ) -> list[int]:
        """Swap an exact input of path[0] for as much path[1] as the pool gives.

        Returns:
            [amount_in, amount_out]
        """
        with self._operation("swap_exact_tokens_for_tokens"):
            now = self._check_deadline(deadline)
            recipient = self._check_address(to)
            sender = self._check_caller(caller)
            if len(path) != 2:
                raise InvalidPath(f"Swap path must contain exactly two assets, got {len(path)}")
            self._check_amount("amount_in", amount_in)
            self._check_amount("amount_out_min", amount_out_min)
            if amount_in == 0:
                raise InsufficientInputAmount()
            sort_assets(path[0], path[1])
            asset_in, asset_out = normalize_address(path[0]), normalize_address(path[1])

            pool = self.registry.get(asset_in, asset_out)
            if pool is None or not pool.is_funded:
                raise InsufficientLiquidity(f"No liquidity for pair {asset_in}/{asset_out}")

            reserve_in, reserve_out = pool.get_reserves(asset_in)
            amount_out = get_amount_out(
                amount_in,
                reserve_in,
                reserve_out,
                self.config.fee_numerator,
                self.config.fee_denominator,
            )
            if amount_out == 0 or amount_out < amount_out_min:
                raise InsufficientOutputAmount(
                    f"Output {amount_out} is below minimum {max(amount_out_min, 1)}"
                )

            with self._atomic(pool):
                pool.apply_swap(asset_in, amount_in, amount_out)

                self._pull(asset_in, sender, amount_in)
                self._push(asset_out, recipient, amount_out)

                self.events.emit(
                    TokensSwapped(
                        swapper=sender,
                        asset_in=asset_in,
                        asset_out=asset_out,
                        amount_in=amount_in,
                        amount_out=amount_out,
                        timestamp=now,
                    )
                )

            logger.info(
                "tokens_swapped",
                pair=pool.key.hex()[:16],
                swapper=sender[-8:],
                asset_in=asset_in[-8:],
                asset_out=asset_out[-8:],
                amount_in=amount_in,
                amount_out=amount_out,
            )
            return [amount_in, amount_out]

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_price(self, asset_a: str, asset_b: str) -> int:
        """Price of asset_a in units of asset_b, scaled by config.price_scale.

        Raises:
            InsufficientLiquidity: If the pair has no pool or an empty reserve
        """
        with self._operation("get_price"):
            pool = self._funded_pool(asset_a, asset_b)
            reserve_a, reserve_b = pool.get_reserves(asset_a)
            return (S(reserve_b) * S(self.config.price_scale) // S(reserve_a)).value

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Pure swap quote with the configured fee (no pool state involved)."""
        return get_amount_out(
            amount_in,
            reserve_in,
            reserve_out,
            self.config.fee_numerator,
            self.config.fee_denominator,
        )

    def get_reserves(self, asset_a: str, asset_b: str) -> tuple[int, int]:
        """Reserves of (asset_a, asset_b); (0, 0) for a pair without a pool."""
        with self._operation("get_reserves"):
            pool = self.registry.get(asset_a, asset_b)
            if pool is None:
                return 0, 0
            return pool.get_reserves(asset_a)

    def total_liquidity(self, asset_a: str, asset_b: str) -> int:
        """Outstanding shares of the pair's pool; 0 for a pair without a pool."""
        with self._operation("total_liquidity"):
            pool = self.registry.get(asset_a, asset_b)
            return pool.total_liquidity if pool is not None else 0

    def liquidity_of(self, asset_a: str, asset_b: str, provider: str) -> int:
        """Shares held by provider in the pair's pool."""
        with self._operation("liquidity_of"):
            pool = self.registry.get(asset_a, asset_b)
            if pool is None:
                return 0
            return pool.share_of(provider)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """Hold the re-entrancy lock and log rejected calls."""
        with self.lock.guard():
            try:
                yield
            except AMMError as err:
                logger.warning(
                    "operation_rejected",
                    operation=name,
                    code=err.code,
                    detail=err.detail,
                )
                raise

    @contextmanager
    def _atomic(self, pool: Pool, created: bool = False) -> Iterator[None]:
        """Undo pool, ledger and notification changes if the block raises."""
        snapshot = pool.snapshot()
        events_before = len(self.events)
        try:
            with self.ledger.atomic():
                yield
        except BaseException:
            pool.restore(snapshot)
            self.events.truncate(events_before)
            if created:
                self.registry.discard(pool)
            logger.warning("operation_rolled_back", pair=pool.key.hex()[:16])
            raise

    def _funded_pool(self, asset_a: str, asset_b: str) -> Pool:
        pool = self.registry.get(asset_a, asset_b)
        if pool is None or not pool.is_funded:
            raise InsufficientLiquidity(
                f"No liquidity for pair {normalize_address(asset_a)}/{normalize_address(asset_b)}"
            )
        return pool

    def _pull(self, asset: str, sender: str, amount: int) -> None:
        try:
            self.ledger.pull(asset, sender, amount)
        except AMMError:
            raise
        except Exception as err:
            raise TransferFailed(f"pull of {amount} {asset} from {sender} failed: {err}") from err

    def _push(self, asset: str, recipient: str, amount: int) -> None:
        try:
            self.ledger.push(asset, recipient, amount)
        except AMMError:
            raise
        except Exception as err:
            raise TransferFailed(f"push of {amount} {asset} to {recipient} failed: {err}") from err

    def _check_deadline(self, deadline: int) -> int:
        now = self._clock()
        if not is_uint256(deadline):
            raise InvalidAmount(f"deadline must be a uint256 timestamp: {deadline!r}")
        if now > deadline:
            raise DeadlineExpired(f"Deadline {deadline} has passed (now {now})")
        return now

    def _check_address(self, to: str) -> str:
        if not is_valid_address(to):
            raise InvalidRecipient(f"Invalid recipient address: {to!r}")
        recipient = normalize_address(to)
        if recipient == ZERO_ADDRESS:
            raise InvalidRecipient("Recipient cannot be the zero address")
        if recipient == normalize_address(self.ledger.custody):
            raise InvalidRecipient("Recipient cannot be the pool custody account")
        return recipient

    def _check_caller(self, caller: str) -> str:
        if not is_valid_address(caller) or normalize_address(caller) == ZERO_ADDRESS:
            raise ValidationError(f"Invalid caller address: {caller!r}")
        sender = normalize_address(caller)
        if sender == normalize_address(self.ledger.custody):
            raise ValidationError("Caller cannot be the pool custody account")
        return sender

    @staticmethod
    def _check_amount(name: str, amount: int) -> None:
        if not is_uint256(amount):
            raise InvalidAmount(f"{name} must be an integer in the uint256 range: {amount!r}")


__all__ = ["PoolService", "get_default_service"]


# Singleton service used by the API, with fee overrides from the environment
def _create_default_service() -> PoolService:
    """Create the default service backed by an InMemoryLedger.

    AMM_FEE_NUMERATOR / AMM_FEE_DENOMINATOR override the 997/1000 fee.

    Returns:
        Configured PoolService instance
    """
    import os

    numerator = os.environ.get("AMM_FEE_NUMERATOR")
    denominator = os.environ.get("AMM_FEE_DENOMINATOR")
    if numerator is None and denominator is None:
        return PoolService()

    config = PoolConfig(
        fee_numerator=int(numerator) if numerator is not None else DEFAULT_POOL_CONFIG.fee_numerator,
        fee_denominator=(
            int(denominator) if denominator is not None else DEFAULT_POOL_CONFIG.fee_denominator
        ),
    )
    logger.info(
        "custom_fee_configured",
        fee_numerator=config.fee_numerator,
        fee_denominator=config.fee_denominator,
    )
    return PoolService(config=config)


_default_service: PoolService | None = None


def get_default_service() -> PoolService:
    """Return the process-wide PoolService, creating it on first use."""
    global _default_service
    if _default_service is None:
        _default_service = _create_default_service()
    return _default_service
