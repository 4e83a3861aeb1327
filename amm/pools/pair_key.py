"""Canonical keys for unordered asset pairs.

Pools are stored under the keccak256 hash of the packed, sorted pair, so the
key is the same whichever order the caller passes the assets in.
"""

from __future__ import annotations

from eth_abi.packed import encode_packed
from eth_utils import keccak

from amm.constants import ZERO_ADDRESS
from amm.errors import IdenticalAssets, ZeroAddress
from amm.models.types import address_bytes, is_valid_address, normalize_address


def sort_assets(asset_a: str, asset_b: str) -> tuple[str, str]:
    """Return the pair in canonical order (token0, token1).

    Ordering compares the 20-byte big-endian representation of each address,
    which is the same as comparing normalized lowercase hex.

    Raises:
        IdenticalAssets: If both assets are the same
        ZeroAddress: If either asset is malformed or the zero address
    """
    a = normalize_address(asset_a)
    b = normalize_address(asset_b)
    if a == b:
        raise IdenticalAssets(f"Pair assets must be different: {a}")
    for asset in (a, b):
        if not is_valid_address(asset) or asset == ZERO_ADDRESS:
            raise ZeroAddress(f"Invalid asset address: {asset}")
    if address_bytes(a) < address_bytes(b):
        return a, b
    return b, a


def pair_key(asset_a: str, asset_b: str) -> bytes:
    """Compute the 32-byte key for a pair, independent of argument order."""
    token0, token1 = sort_assets(asset_a, asset_b)
    return keccak(encode_packed(["address", "address"], [token0, token1]))


__all__ = ["sort_assets", "pair_key"]
