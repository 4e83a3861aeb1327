"""FastAPI application for the pool service.

Endpoints are async and call the service synchronously, so operations run
one at a time on the event loop, which is the serial execution model the
re-entrancy lock assumes.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm import __version__
from amm.api.endpoints import router
from amm.errors import AMMError
from amm.models.requests import ErrorResponse
from amm.safe_int import SafeIntError

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("AMM_PORT", "8000"))
DEBUG = os.environ.get("AMM_DEBUG", "false").lower() in ("true", "1", "yes")

logger = structlog.get_logger()

app = FastAPI(
    title="Constant-product AMM",
    description="Two-asset liquidity pools with constant-product pricing",
    version=__version__,
)


@app.exception_handler(AMMError)
async def amm_error_handler(_request: Request, exc: AMMError) -> JSONResponse:
    """Map rejected operations to 400 with a machine-readable code."""
    body = ErrorResponse(error=exc.kind, code=exc.code, detail=exc.detail)
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(SafeIntError)
async def arithmetic_error_handler(_request: Request, exc: SafeIntError) -> JSONResponse:
    """Overflow and underflow abort the operation like any other rejection."""
    logger.warning("arithmetic_error", error=type(exc).__name__, detail=str(exc))
    body = ErrorResponse(error="arithmetic", code=type(exc).__name__.upper(), detail=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging() -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ]
    )


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - AMM_HOST: Host to bind to (default: 0.0.0.0)
    - AMM_PORT: Port to bind to (default: 8000)
    - AMM_DEBUG: Enable debug/reload mode (default: false)
    - AMM_FEE_NUMERATOR / AMM_FEE_DENOMINATOR: Swap fee (default: 997/1000)
    """
    configure_logging()
    uvicorn.run(
        "amm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
