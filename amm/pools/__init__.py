"""Pool management package.

Provides the Pool state record, pair canonicalization and the PoolRegistry.
"""

from .pair_key import pair_key, sort_assets
from .pool import Pool, PoolInvariantError, PoolSnapshot
from .registry import PoolRegistry

__all__ = [
    "Pool",
    "PoolSnapshot",
    "PoolInvariantError",
    "PoolRegistry",
    "pair_key",
    "sort_assets",
]
