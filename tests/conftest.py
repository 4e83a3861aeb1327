"""Pytest configuration and fixtures."""

import pytest

from amm.ledger import InMemoryLedger
from amm.service import PoolService
from tests.helpers import (
    ALICE,
    BOB,
    CAROL,
    FAR_FUTURE,
    INITIAL_BALANCE,
    NOW,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    USDC,
    WETH,
)

# =============================================================================
# Test doubles
# =============================================================================


class FixedClock:
    """Clock for deadline checks that only moves when told to.

    Usage:
        clock = FixedClock()
        service = PoolService(clock=clock)
        clock.advance(60)
    """

    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class FailingLedger(InMemoryLedger):
    """InMemoryLedger whose push always fails with a non-domain exception."""

    def push(self, asset: str, recipient: str, amount: int) -> None:
        raise ConnectionError("ledger unavailable")


def fund_accounts(ledger: InMemoryLedger) -> InMemoryLedger:
    for account in (ALICE, BOB, CAROL):
        for asset in (TOKEN_A, TOKEN_B, TOKEN_C, WETH, USDC):
            ledger.mint(asset, account, INITIAL_BALANCE)
    return ledger


# =============================================================================
# Pytest fixtures
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Ledger where ALICE, BOB and CAROL hold every test asset."""
    return fund_accounts(InMemoryLedger())


@pytest.fixture
def service(ledger: InMemoryLedger, clock: FixedClock) -> PoolService:
    """Service with no pools."""
    return PoolService(ledger=ledger, clock=clock)


@pytest.fixture
def funded_service(service: PoolService) -> PoolService:
    """Service with a TOKEN_A/TOKEN_B pool at reserves (1000, 4000), 2000 shares to ALICE."""
    service.add_liquidity(TOKEN_A, TOKEN_B, 1000, 4000, 0, 0, ALICE, FAR_FUTURE, caller=ALICE)
    return service
