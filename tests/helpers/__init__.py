"""Test helpers module for shared test utilities.

- constants: Asset and account addresses, clock values
- assertions: Pool and ledger invariant checks
"""

from tests.helpers.assertions import assert_pool_invariants, product
from tests.helpers.constants import (
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
    ZERO,
)

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "WETH",
    "USDC",
    "ALICE",
    "BOB",
    "CAROL",
    "ZERO",
    "NOW",
    "FAR_FUTURE",
    "INITIAL_BALANCE",
    # Assertions
    "assert_pool_invariants",
    "product",
]
