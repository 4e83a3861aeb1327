"""Pool registry keyed by canonical pair.

PoolRegistry owns every Pool. Pools are created lazily, in the zero state,
the first time a pair is resolved, and are never removed.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from amm.pools.pair_key import pair_key, sort_assets
from amm.pools.pool import Pool

logger = structlog.get_logger()


class PoolRegistry:
    """Registry of constant-product pools, one per unordered asset pair."""

    def __init__(self) -> None:
        self._pools: dict[bytes, Pool] = {}

    def resolve(self, asset_a: str, asset_b: str) -> Pool:
        """Get the pool for a pair, creating an empty one if needed.

        Args:
            asset_a: First asset address (any case)
            asset_b: Second asset address (any case)

        Returns:
            The Pool for this pair (order independent)

        Raises:
            IdenticalAssets: If both assets are the same
            ZeroAddress: If either asset is invalid
        """
        token0, token1 = sort_assets(asset_a, asset_b)
        key = pair_key(token0, token1)
        pool = self._pools.get(key)
        if pool is None:
            pool = Pool(asset0=token0, asset1=token1, key=key)
            self._pools[key] = pool
            logger.debug(
                "pool_created",
                pair_key=key.hex()[:16],
                asset0=token0[-8:],
                asset1=token1[-8:],
            )
        return pool

    def get(self, asset_a: str, asset_b: str) -> Pool | None:
        """Get the pool for a pair without creating it.

        Raises:
            IdenticalAssets: If both assets are the same
            ZeroAddress: If either asset is invalid
        """
        return self._pools.get(pair_key(asset_a, asset_b))

    def discard(self, pool: Pool) -> None:
        """Forget a pool created by an operation that was then aborted.

        Only empty pools can be discarded.

        Raises:
            ValueError: If the pool still holds liquidity
        """
        if not pool.is_empty or pool.reserve0 or pool.reserve1:
            raise ValueError("Cannot discard a pool that holds liquidity")
        self._pools.pop(pool.key, None)

    def pools(self) -> list[Pool]:
        """Return all pools in creation order."""
        return list(self._pools.values())

    def __iter__(self) -> Iterator[Pool]:
        return iter(self._pools.values())

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, key: object) -> bool:
        return key in self._pools

    @property
    def pool_count(self) -> int:
        """Return the number of pools in the registry."""
        return len(self._pools)


__all__ = ["PoolRegistry"]
