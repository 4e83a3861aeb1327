"""Liquidity share math: deposit quoting, minting and burning.

All divisions floor. Deposits are credited for the lesser of their two
proportional contributions and withdrawals are paid strictly pro rata, so
rounding always favours the pool over the individual provider.
"""

from __future__ import annotations

from typing import NamedTuple

import structlog

from amm.errors import (
    InsufficientAAmount,
    InsufficientAmount,
    InsufficientBAmount,
    InsufficientLiquidity,
    InsufficientLiquidityMinted,
)
from amm.pools.pool import Pool
from amm.safe_int import S

logger = structlog.get_logger()


class AddQuote(NamedTuple):
    """Amounts actually deposited (in caller order) and shares to mint."""

    amount_a: int
    amount_b: int
    shares: int


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B worth amount_a of A at the current reserve ratio.

    Raises:
        InsufficientAmount: If amount_a is zero
        InsufficientLiquidity: If either reserve is zero
    """
    if amount_a == 0:
        raise InsufficientAmount()
    if reserve_a == 0 or reserve_b == 0:
        raise InsufficientLiquidity()
    return (S(amount_a) * S(reserve_b) // S(reserve_a)).value


def quote_add(
    pool: Pool,
    caller_asset: str,
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int,
    amount_b_min: int,
) -> AddQuote:
    """Compute the deposit pair and shares for an add-liquidity request.

    The first deposit takes both desired amounts and mints their geometric
    mean. Later deposits take the largest pair within both desired maximums
    that matches the reserve ratio exactly.

    Args:
        pool: Target pool
        caller_asset: The asset the caller calls "A"; selects reserve order
        amount_a_desired: Maximum amount of A to deposit
        amount_b_desired: Maximum amount of B to deposit
        amount_a_min: Minimum acceptable amount of A
        amount_b_min: Minimum acceptable amount of B

    Returns:
        AddQuote(amount_a, amount_b, shares)

    Raises:
        InsufficientAmount: First deposit with a zero side
        InsufficientAAmount: Optimal A is below amount_a_min
        InsufficientBAmount: Optimal B is below amount_b_min
        InsufficientLiquidityMinted: Deposit would mint zero shares
    """
    if pool.total_liquidity == 0:
        if amount_a_desired == 0 or amount_b_desired == 0:
            raise InsufficientAmount("Initial deposit amounts must both be greater than zero")
        shares = (S(amount_a_desired) * S(amount_b_desired)).sqrt().value
        if shares == 0:
            raise InsufficientLiquidityMinted()
        return AddQuote(amount_a_desired, amount_b_desired, shares)

    reserve_self, reserve_other = pool.get_reserves(caller_asset)

    amount_b_optimal = quote(amount_a_desired, reserve_self, reserve_other)
    if amount_b_optimal <= amount_b_desired:
        if amount_b_optimal < amount_b_min:
            raise InsufficientBAmount(
                f"Optimal amount B {amount_b_optimal} is below minimum {amount_b_min}"
            )
        amount_a, amount_b = amount_a_desired, amount_b_optimal
    else:
        amount_a_optimal = quote(amount_b_desired, reserve_other, reserve_self)
        if amount_a_optimal < amount_a_min:
            raise InsufficientAAmount(
                f"Optimal amount A {amount_a_optimal} is below minimum {amount_a_min}"
            )
        amount_a, amount_b = amount_a_optimal, amount_b_desired

    total = S(pool.total_liquidity)
    shares = (
        (S(amount_a) * total // S(reserve_self))
        .min(S(amount_b) * total // S(reserve_other))
        .value
    )
    if shares == 0:
        raise InsufficientLiquidityMinted()

    logger.debug(
        "add_liquidity_quoted",
        amount_a=amount_a,
        amount_b=amount_b,
        shares=shares,
    )
    return AddQuote(amount_a, amount_b, shares)


def quote_remove(pool: Pool, shares: int, reserve0: int, reserve1: int) -> tuple[int, int]:
    """Compute the pro-rata withdrawal for burning shares.

    Returns:
        (amount0, amount1) in the pool's canonical order

    Raises:
        InsufficientLiquidity: If the pool has no outstanding shares
    """
    if pool.total_liquidity == 0:
        raise InsufficientLiquidity()
    total = S(pool.total_liquidity)
    amount0 = (S(shares) * S(reserve0) // total).value
    amount1 = (S(shares) * S(reserve1) // total).value
    return amount0, amount1


__all__ = ["AddQuote", "quote", "quote_add", "quote_remove"]
