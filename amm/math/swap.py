"""Constant-product swap pricing.

The fee is taken from the input before pricing:

    amount_in_with_fee = floor(amount_in * fee_numerator / fee_denominator)
    amount_out = floor(amount_in_with_fee * reserve_out / (reserve_in + amount_in_with_fee))

The withheld part of the input stays in the pool, so reserve_in * reserve_out
grows on every swap with a non-zero fee.
"""

from __future__ import annotations

from amm.constants import FEE_DENOMINATOR, FEE_NUMERATOR
from amm.errors import InsufficientInputAmount, InsufficientLiquidity
from amm.safe_int import S


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """Calculate output amount for an exact input.

    Args:
        amount_in: Input asset amount
        reserve_in: Reserve of input asset in pool
        reserve_out: Reserve of output asset in pool
        fee_numerator: Share of the input that is priced (997 for 0.3% fee)
        fee_denominator: Fee denominator (1000)

    Returns:
        Output asset amount

    Raises:
        InsufficientInputAmount: If amount_in is zero
        InsufficientLiquidity: If either reserve is zero
    """
    if amount_in == 0:
        raise InsufficientInputAmount()
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity()

    amount_in_with_fee = S(amount_in) * S(fee_numerator) // S(fee_denominator)
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) + amount_in_with_fee

    return (numerator // denominator).value


__all__ = ["get_amount_out"]
