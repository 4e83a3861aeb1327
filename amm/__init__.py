"""Constant-product AMM - two-asset liquidity pools."""

from amm.service import PoolService, get_default_service

__version__ = "0.1.0"
__all__ = ["PoolService", "get_default_service", "__version__"]
