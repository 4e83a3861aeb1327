"""Tests for Pool reserve and share bookkeeping."""

import pytest

from amm.errors import AMMError
from amm.pools import Pool, PoolInvariantError, PoolRegistry
from amm.safe_int import Underflow
from tests.helpers import ALICE, BOB, TOKEN_A, TOKEN_B, TOKEN_C


@pytest.fixture
def pool() -> Pool:
    return PoolRegistry().resolve(TOKEN_B, TOKEN_A)


class TestPoolState:
    def test_new_pool_is_empty(self, pool):
        assert pool.is_empty
        assert not pool.is_funded
        assert (pool.reserve0, pool.reserve1, pool.total_liquidity) == (0, 0, 0)

    def test_canonical_order(self, pool):
        assert pool.asset0 == TOKEN_A
        assert pool.asset1 == TOKEN_B

    def test_has_asset(self, pool):
        assert pool.has_asset(TOKEN_A)
        assert pool.has_asset(TOKEN_B.upper().replace("0X", "0x"))
        assert not pool.has_asset(TOKEN_C)

    def test_get_reserves_in_asking_order(self, pool):
        pool.deposit(TOKEN_A, 1000, 4000)
        assert pool.get_reserves(TOKEN_A) == (1000, 4000)
        assert pool.get_reserves(TOKEN_B) == (4000, 1000)

    def test_get_reserves_unknown_asset(self, pool):
        with pytest.raises(ValueError, match="not in pool"):
            pool.get_reserves(TOKEN_C)


class TestPoolMutation:
    def test_deposit_in_caller_order(self, pool):
        pool.deposit(TOKEN_B, 4000, 1000)
        assert (pool.reserve0, pool.reserve1) == (1000, 4000)

    def test_apply_swap(self, pool):
        pool.deposit(TOKEN_A, 1000, 4000)
        pool.apply_swap(TOKEN_A, 100, 360)
        assert (pool.reserve0, pool.reserve1) == (1100, 3640)
        pool.apply_swap(TOKEN_B, 400, 110)
        assert (pool.reserve0, pool.reserve1) == (990, 4040)

    def test_apply_swap_cannot_overdraw(self, pool):
        pool.deposit(TOKEN_A, 10, 10)
        with pytest.raises(Underflow):
            pool.apply_swap(TOKEN_A, 1, 11)

    def test_withdraw(self, pool):
        pool.deposit(TOKEN_A, 1000, 4000)
        pool.withdraw(250, 1000)
        assert (pool.reserve0, pool.reserve1) == (750, 3000)

    def test_mint_and_burn(self, pool):
        pool.mint(ALICE, 100)
        pool.mint(BOB, 50)
        pool.mint(ALICE, 10)
        assert pool.total_liquidity == 160
        assert pool.share_of(ALICE) == 110
        pool.burn(ALICE, 60)
        assert pool.share_of(ALICE) == 50
        assert pool.total_liquidity == 100

    def test_burn_to_zero_drops_provider(self, pool):
        pool.mint(ALICE, 100)
        pool.burn(ALICE, 100)
        assert ALICE not in pool.liquidity_of
        assert pool.share_of(ALICE) == 0

    def test_burn_more_than_held(self, pool):
        pool.mint(ALICE, 5)
        with pytest.raises(Underflow):
            pool.burn(ALICE, 6)


class TestSnapshot:
    def test_restore_undoes_changes(self, pool):
        pool.deposit(TOKEN_A, 1000, 4000)
        pool.mint(ALICE, 2000)
        snapshot = pool.snapshot()

        pool.apply_swap(TOKEN_A, 100, 360)
        pool.mint(BOB, 10)
        pool.restore(snapshot)

        assert (pool.reserve0, pool.reserve1) == (1000, 4000)
        assert pool.liquidity_of == {ALICE: 2000}
        assert pool.total_liquidity == 2000

    def test_snapshot_is_independent_copy(self, pool):
        pool.mint(ALICE, 1)
        snapshot = pool.snapshot()
        pool.mint(BOB, 1)
        assert snapshot.liquidity_of == {ALICE: 1}


class TestInvariants:
    def test_error_is_domain_error(self):
        assert issubclass(PoolInvariantError, AMMError)
        assert not issubclass(PoolInvariantError, AssertionError)
        assert PoolInvariantError().code == "POOL_INVARIANT"

    def test_consistent_pool_passes(self, pool):
        pool.check_invariants()
        pool.deposit(TOKEN_A, 1, 1)
        pool.mint(ALICE, 1)
        pool.check_invariants()

    def test_share_sum_mismatch(self, pool):
        pool.total_liquidity = 5
        with pytest.raises(PoolInvariantError, match="sum of shares"):
            pool.check_invariants()

    def test_empty_pool_with_reserves(self, pool):
        pool.deposit(TOKEN_A, 1, 0)
        with pytest.raises(PoolInvariantError, match="Empty pool"):
            pool.check_invariants()

    def test_funded_pool_with_zero_reserve(self, pool):
        pool.deposit(TOKEN_A, 1, 0)
        pool.mint(ALICE, 1)
        with pytest.raises(PoolInvariantError, match="zero reserve"):
            pool.check_invariants()
