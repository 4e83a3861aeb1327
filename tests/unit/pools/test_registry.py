"""Tests for PoolRegistry."""

import pytest

from amm.errors import IdenticalAssets, ZeroAddress
from amm.pools import PoolRegistry, pair_key
from tests.helpers import ALICE, TOKEN_A, TOKEN_B, TOKEN_C, ZERO


@pytest.fixture
def registry() -> PoolRegistry:
    return PoolRegistry()


class TestResolve:
    def test_creates_empty_pool(self, registry):
        pool = registry.resolve(TOKEN_A, TOKEN_B)
        assert pool.is_empty
        assert pool.key == pair_key(TOKEN_A, TOKEN_B)
        assert len(registry) == 1

    def test_same_pool_either_order(self, registry):
        assert registry.resolve(TOKEN_A, TOKEN_B) is registry.resolve(TOKEN_B, TOKEN_A)
        assert registry.pool_count == 1

    def test_same_pool_any_case(self, registry):
        upper = "0x" + TOKEN_B[2:].upper()
        assert registry.resolve(TOKEN_A, TOKEN_B) is registry.resolve(upper, TOKEN_A)

    def test_distinct_pairs(self, registry):
        ab = registry.resolve(TOKEN_A, TOKEN_B)
        ac = registry.resolve(TOKEN_A, TOKEN_C)
        assert ab is not ac
        assert registry.pools() == [ab, ac]
        assert list(registry) == [ab, ac]

    def test_identical_assets_rejected(self, registry):
        with pytest.raises(IdenticalAssets):
            registry.resolve(TOKEN_A, TOKEN_A)
        assert len(registry) == 0

    def test_zero_address_rejected(self, registry):
        with pytest.raises(ZeroAddress):
            registry.resolve(TOKEN_A, ZERO)


class TestGet:
    def test_missing_pair(self, registry):
        assert registry.get(TOKEN_A, TOKEN_B) is None
        assert len(registry) == 0

    def test_existing_pair(self, registry):
        pool = registry.resolve(TOKEN_A, TOKEN_B)
        assert registry.get(TOKEN_B, TOKEN_A) is pool

    def test_contains_by_key(self, registry):
        registry.resolve(TOKEN_A, TOKEN_B)
        assert pair_key(TOKEN_A, TOKEN_B) in registry
        assert pair_key(TOKEN_A, TOKEN_C) not in registry


class TestDiscard:
    def test_discard_empty_pool(self, registry):
        pool = registry.resolve(TOKEN_A, TOKEN_B)
        registry.discard(pool)
        assert registry.get(TOKEN_A, TOKEN_B) is None

    def test_discard_funded_pool_refused(self, registry):
        pool = registry.resolve(TOKEN_A, TOKEN_B)
        pool.deposit(TOKEN_A, 1, 1)
        pool.mint(ALICE, 1)
        with pytest.raises(ValueError, match="holds liquidity"):
            registry.discard(pool)
        assert registry.get(TOKEN_A, TOKEN_B) is pool
