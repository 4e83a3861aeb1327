"""Per-pair pool state.

A Pool holds the two reserves in canonical asset order plus the liquidity
share ledger. It is either Empty (no shares, no reserves) or Funded (shares
outstanding, both reserves positive).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from amm.errors import AMMError
from amm.models.types import normalize_address
from amm.safe_int import S


class PoolInvariantError(AMMError):
    """Pool state violates an accounting invariant."""

    code = "POOL_INVARIANT"
    kind = "invariant"


@dataclass(frozen=True)
class PoolSnapshot:
    """Copy of a pool's mutable fields, used to roll back aborted operations."""

    reserve0: int
    reserve1: int
    total_liquidity: int
    liquidity_of: dict[str, int]


@dataclass
class Pool:
    """Reserves and liquidity shares for one asset pair."""

    asset0: str
    asset1: str
    key: bytes
    reserve0: int = 0
    reserve1: int = 0
    total_liquidity: int = 0
    liquidity_of: dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.total_liquidity == 0

    @property
    def is_funded(self) -> bool:
        return self.reserve0 > 0 and self.reserve1 > 0

    def has_asset(self, asset: str) -> bool:
        return normalize_address(asset) in (self.asset0, self.asset1)

    def get_reserves(self, asset: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve of asset, reserve of the other asset)."""
        asset_norm = normalize_address(asset)
        if asset_norm == self.asset0:
            return self.reserve0, self.reserve1
        elif asset_norm == self.asset1:
            return self.reserve1, self.reserve0
        else:
            raise ValueError(f"Asset {asset} not in pool")

    def share_of(self, provider: str) -> int:
        return self.liquidity_of.get(normalize_address(provider), 0)

    def _set_reserves(self, asset: str, reserve_self: int, reserve_other: int) -> None:
        if normalize_address(asset) == self.asset0:
            self.reserve0, self.reserve1 = reserve_self, reserve_other
        else:
            self.reserve1, self.reserve0 = reserve_self, reserve_other

    def deposit(self, asset: str, amount_self: int, amount_other: int) -> None:
        """Add caller-order amounts to the reserves (asset first)."""
        reserve_self, reserve_other = self.get_reserves(asset)
        self._set_reserves(
            asset,
            (S(reserve_self) + amount_self).value,
            (S(reserve_other) + amount_other).value,
        )

    def apply_swap(self, asset_in: str, amount_in: int, amount_out: int) -> None:
        """Add amount_in to asset_in's reserve and remove amount_out from the other.

        Raises:
            Underflow: If amount_out exceeds the other reserve
            Uint256Overflow: If the new reserve does not fit in uint256
        """
        reserve_in, reserve_out = self.get_reserves(asset_in)
        self._set_reserves(
            asset_in,
            (S(reserve_in) + amount_in).value,
            (S(reserve_out) - amount_out).value,
        )

    def withdraw(self, amount0: int, amount1: int) -> None:
        """Remove canonical-order amounts from both reserves."""
        self.reserve0 = (S(self.reserve0) - amount0).value
        self.reserve1 = (S(self.reserve1) - amount1).value

    def mint(self, provider: str, shares: int) -> None:
        """Credit shares to provider and grow total liquidity."""
        provider_norm = normalize_address(provider)
        self.total_liquidity = (S(self.total_liquidity) + shares).value
        self.liquidity_of[provider_norm] = (S(self.share_of(provider_norm)) + shares).value

    def burn(self, provider: str, shares: int) -> None:
        """Debit shares from provider and shrink total liquidity.

        Providers whose share reaches zero are dropped from the ledger.
        """
        provider_norm = normalize_address(provider)
        remaining = (S(self.share_of(provider_norm)) - shares).value
        self.total_liquidity = (S(self.total_liquidity) - shares).value
        if remaining:
            self.liquidity_of[provider_norm] = remaining
        else:
            self.liquidity_of.pop(provider_norm, None)

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            reserve0=self.reserve0,
            reserve1=self.reserve1,
            total_liquidity=self.total_liquidity,
            liquidity_of=dict(self.liquidity_of),
        )

    def restore(self, snapshot: PoolSnapshot) -> None:
        self.reserve0 = snapshot.reserve0
        self.reserve1 = snapshot.reserve1
        self.total_liquidity = snapshot.total_liquidity
        self.liquidity_of = dict(snapshot.liquidity_of)

    def check_invariants(self) -> None:
        """Verify the accounting invariants.

        Raises:
            PoolInvariantError: If shares and reserves disagree
        """
        share_sum = sum(self.liquidity_of.values())
        if self.total_liquidity != share_sum:
            raise PoolInvariantError(
                f"total_liquidity {self.total_liquidity} != sum of shares {share_sum}"
            )
        if self.total_liquidity == 0:
            if self.reserve0 != 0 or self.reserve1 != 0:
                raise PoolInvariantError(
                    f"Empty pool holds reserves ({self.reserve0}, {self.reserve1})"
                )
        elif not self.is_funded:
            raise PoolInvariantError(
                f"Funded pool has a zero reserve ({self.reserve0}, {self.reserve1})"
            )


__all__ = ["Pool", "PoolSnapshot", "PoolInvariantError"]
