"""Pricing configuration for the pool service."""

from dataclasses import dataclass

from amm.constants import FEE_DENOMINATOR, FEE_NUMERATOR, PRICE_SCALE


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for swap fees and price scaling.

    Attributes:
        fee_numerator: Share of each swap input that is priced (default: 997)
        fee_denominator: Fee denominator (default: 1000); the difference
            between the two stays in the pool
        price_scale: Fixed-point scale for get_price (default: 1e18)
    """

    fee_numerator: int = FEE_NUMERATOR
    fee_denominator: int = FEE_DENOMINATOR
    price_scale: int = PRICE_SCALE

    def __post_init__(self) -> None:
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive: {self.fee_denominator}")
        if not 0 < self.fee_numerator <= self.fee_denominator:
            raise ValueError(
                f"fee_numerator must be in (0, {self.fee_denominator}]: {self.fee_numerator}"
            )
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive: {self.price_scale}")

    @property
    def fee_bps(self) -> int:
        """Fee in basis points (30 for 997/1000)."""
        return (self.fee_denominator - self.fee_numerator) * 10000 // self.fee_denominator


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
