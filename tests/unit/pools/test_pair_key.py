"""Tests for canonical pair ordering and pair keys."""

import pytest
from eth_utils import keccak

from amm.constants import ZERO_ADDRESS
from amm.errors import IdenticalAssets, ZeroAddress
from amm.pools.pair_key import pair_key, sort_assets
from tests.helpers import TOKEN_A, TOKEN_B, USDC, WETH


class TestSortAssets:
    def test_already_sorted(self):
        assert sort_assets(TOKEN_A, TOKEN_B) == (TOKEN_A, TOKEN_B)

    def test_reversed(self):
        assert sort_assets(TOKEN_B, TOKEN_A) == (TOKEN_A, TOKEN_B)

    def test_real_addresses(self):
        """USDC (0xa0b8...) sorts before WETH (0xc02a...)."""
        assert sort_assets(WETH, USDC) == (USDC.lower(), WETH.lower())

    def test_normalizes_case(self):
        token0, token1 = sort_assets(WETH.upper().replace("0X", "0x"), USDC)
        assert token0 == USDC.lower()
        assert token1 == WETH.lower()

    def test_identical_rejected(self):
        with pytest.raises(IdenticalAssets) as exc_info:
            sort_assets(TOKEN_A, TOKEN_A)
        assert exc_info.value.code == "IDENTICAL_ADDRESSES"

    def test_identical_rejected_across_case(self):
        with pytest.raises(IdenticalAssets):
            sort_assets(WETH, WETH.lower())

    def test_zero_address_rejected(self):
        with pytest.raises(ZeroAddress):
            sort_assets(ZERO_ADDRESS, TOKEN_A)

    def test_malformed_rejected(self):
        with pytest.raises(ZeroAddress):
            sort_assets("0x1234", TOKEN_A)


class TestPairKey:
    def test_order_independent(self):
        assert pair_key(TOKEN_A, TOKEN_B) == pair_key(TOKEN_B, TOKEN_A)

    def test_is_keccak_of_packed_sorted_pair(self):
        token0, token1 = sort_assets(WETH, USDC)
        expected = keccak(bytes.fromhex(token0[2:]) + bytes.fromhex(token1[2:]))
        assert pair_key(WETH, USDC) == expected

    def test_is_32_bytes(self):
        assert len(pair_key(TOKEN_A, TOKEN_B)) == 32

    def test_distinct_pairs_distinct_keys(self):
        assert pair_key(TOKEN_A, TOKEN_B) != pair_key(TOKEN_A, WETH)
