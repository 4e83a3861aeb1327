"""Identifier types and API request/response models."""

from amm.models.requests import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ErrorResponse,
    PoolResponse,
    PriceResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from amm.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "SwapRequest",
    "SwapResponse",
    "PriceResponse",
    "PoolResponse",
    "ErrorResponse",
]
