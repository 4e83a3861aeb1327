"""API endpoints for the pool service."""

import structlog
from fastapi import APIRouter, Depends, Query

from amm.models.requests import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    AmountOutResponse,
    PoolResponse,
    PriceResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from amm.models.types import normalize_address
from amm.service import PoolService, get_default_service

logger = structlog.get_logger()

router = APIRouter()


def get_service() -> PoolService:
    """Dependency provider for the pool service.

    Override this in tests to inject a service with its own ledger:
        app.dependency_overrides[get_service] = lambda: service
    """
    return get_default_service()


@router.post("/liquidity/add", response_model=AddLiquidityResponse)
async def add_liquidity(
    request: AddLiquidityRequest,
    service: PoolService = Depends(get_service),
) -> AddLiquidityResponse:
    """Deposit assets and mint liquidity shares.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Rejected operation: 400 with the error code (see amm.api.main)
    """
    amount_a, amount_b, liquidity = service.add_liquidity(
        request.asset_a,
        request.asset_b,
        int(request.amount_a_desired),
        int(request.amount_b_desired),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        int(request.deadline),
        caller=request.caller,
    )
    return AddLiquidityResponse(amount_a=amount_a, amount_b=amount_b, liquidity=liquidity)


@router.post("/liquidity/remove", response_model=RemoveLiquidityResponse)
async def remove_liquidity(
    request: RemoveLiquidityRequest,
    service: PoolService = Depends(get_service),
) -> RemoveLiquidityResponse:
    """Burn liquidity shares and withdraw the underlying assets."""
    amount_a, amount_b = service.remove_liquidity(
        request.asset_a,
        request.asset_b,
        int(request.liquidity),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        int(request.deadline),
        caller=request.caller,
    )
    return RemoveLiquidityResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/swap", response_model=SwapResponse)
async def swap(
    request: SwapRequest,
    service: PoolService = Depends(get_service),
) -> SwapResponse:
    """Swap an exact input along a two-asset path."""
    amounts = service.swap_exact_tokens_for_tokens(
        int(request.amount_in),
        int(request.amount_out_min),
        list(request.path),
        request.to,
        int(request.deadline),
        caller=request.caller,
    )
    return SwapResponse(amounts=amounts)


@router.get("/price/{asset_a}/{asset_b}", response_model=PriceResponse)
async def get_price(
    asset_a: str,
    asset_b: str,
    service: PoolService = Depends(get_service),
) -> PriceResponse:
    """Price of asset_a in asset_b, scaled by 1e18."""
    price = service.get_price(asset_a, asset_b)
    return PriceResponse(
        asset_a=normalize_address(asset_a),
        asset_b=normalize_address(asset_b),
        price=price,
    )


@router.get("/pools/{asset_a}/{asset_b}", response_model=PoolResponse)
async def get_pool(
    asset_a: str,
    asset_b: str,
    service: PoolService = Depends(get_service),
) -> PoolResponse:
    """Reserves and total shares of a pair; zeros for a pair without a pool."""
    reserve_a, reserve_b = service.get_reserves(asset_a, asset_b)
    return PoolResponse(
        asset_a=normalize_address(asset_a),
        asset_b=normalize_address(asset_b),
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_liquidity=service.total_liquidity(asset_a, asset_b),
    )


@router.get("/amount-out", response_model=AmountOutResponse)
async def get_amount_out(
    amount_in: int = Query(ge=0),
    reserve_in: int = Query(ge=0),
    reserve_out: int = Query(ge=0),
    service: PoolService = Depends(get_service),
) -> AmountOutResponse:
    """Stateless constant-product quote with the service's fee."""
    amount_out = service.get_amount_out(amount_in, reserve_in, reserve_out)
    logger.debug(
        "amount_out_quoted",
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_out=amount_out,
    )
    return AmountOutResponse(amount_out=amount_out)
