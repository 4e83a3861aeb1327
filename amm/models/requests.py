"""Pydantic request/response bodies for the pool API.

Amounts travel as uint256 decimal strings, the same way on-chain tooling
serializes them, and are converted to int at the service boundary.
"""

from pydantic import BaseModel, Field

from amm.constants import NO_DEADLINE
from amm.models.types import Address, Uint256


class AddLiquidityRequest(BaseModel):
    """Deposit a pair of assets into their pool."""

    caller: Address = Field(description="Account the assets are pulled from")
    asset_a: Address = Field(alias="assetA")
    asset_b: Address = Field(alias="assetB")
    amount_a_desired: Uint256 = Field(alias="amountADesired")
    amount_b_desired: Uint256 = Field(alias="amountBDesired")
    amount_a_min: Uint256 = Field(default="0", alias="amountAMin")
    amount_b_min: Uint256 = Field(default="0", alias="amountBMin")
    to: Address = Field(description="Account credited with the minted shares")
    deadline: Uint256 = Field(default=str(NO_DEADLINE))

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    liquidity: Uint256

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Burn liquidity shares for the underlying assets."""

    caller: Address = Field(description="Account whose shares are burned")
    asset_a: Address = Field(alias="assetA")
    asset_b: Address = Field(alias="assetB")
    liquidity: Uint256
    amount_a_min: Uint256 = Field(default="0", alias="amountAMin")
    amount_b_min: Uint256 = Field(default="0", alias="amountBMin")
    to: Address = Field(description="Account receiving the withdrawn assets")
    deadline: Uint256 = Field(default=str(NO_DEADLINE))

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Swap an exact input amount along a two-asset path."""

    caller: Address
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out_min: Uint256 = Field(default="0", alias="amountOutMin")
    path: list[Address] = Field(description="[assetIn, assetOut]")
    to: Address
    deadline: Uint256 = Field(default=str(NO_DEADLINE))

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amounts: list[Uint256]


class PriceResponse(BaseModel):
    """Price of asset A in units of asset B, scaled by 1e18."""

    asset_a: Address = Field(alias="assetA")
    asset_b: Address = Field(alias="assetB")
    price: Uint256

    model_config = {"populate_by_name": True}


class PoolResponse(BaseModel):
    """Pool reserves reported in the order the caller asked for."""

    asset_a: Address = Field(alias="assetA")
    asset_b: Address = Field(alias="assetB")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    total_liquidity: Uint256 = Field(alias="totalLiquidity")

    model_config = {"populate_by_name": True}


class AmountOutResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Body returned for rejected operations."""

    error: str = Field(description="Error family: validation, slippage, liquidity, ...")
    code: str = Field(description="Stable machine-readable reason")
    detail: str


__all__ = [
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "SwapRequest",
    "SwapResponse",
    "PriceResponse",
    "PoolResponse",
    "AmountOutResponse",
    "ErrorResponse",
]
