"""
Pool identity and reserve state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import ValidationError
from .balances import Amount, AssetId
from .canonical import canonical_hex_allow_0x, domain_sep_bytes, sha256_hex


ASSET_ID_BYTES = 32


def normalize_asset_id(value: object, *, name: str = "asset_id") -> AssetId:
    """
    Canonicalize an asset identity to a 0x-prefixed 32-byte lowercase hex string.

    Integers are accepted and encoded as their hex value, so `1`, `"0x1"` and
    `"0x00...01"` all name the same asset.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValidationError(f"{name} must be non-negative: {value}")
        value = hex(value)
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a hex string, got {type(value).__name__}")
    try:
        return canonical_hex_allow_0x(value, nbytes=ASSET_ID_BYTES, name=name)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def asset_sort_key(asset: AssetId) -> int:
    """Total order over asset identities: their numeric value."""
    return int(asset, 16)


def order_assets(asset_a: object, asset_b: object) -> Tuple[AssetId, AssetId]:
    """
    Return the canonical (low, high) ordering of two asset identities.

    Raises:
        ValidationError: If either id is malformed or both name the same asset
    """
    a = normalize_asset_id(asset_a, name="asset_a")
    b = normalize_asset_id(asset_b, name="asset_b")
    if a == b:
        raise ValidationError(f"identical assets: {a}")
    if asset_sort_key(a) < asset_sort_key(b):
        return a, b
    return b, a


def compute_pool_id(asset_a: object, asset_b: object) -> str:
    """
    Deterministically compute the pool id for an unordered asset pair.

        pool_id = H(domain_sep("PairSwapPool") || asset_low || asset_high)

    The id doubles as the pool's account address and its share token id.
    """
    asset_low, asset_high = order_assets(asset_a, asset_b)
    pool_id_data = (
        domain_sep_bytes("PairSwapPool")
        + bytes.fromhex(asset_low[2:])
        + bytes.fromhex(asset_high[2:])
    )
    return sha256_hex(pool_id_data)


@dataclass
class PoolState:
    """
    Identity and cached reserves of a two-asset pool.

    Attributes:
        pool_id: 32-byte pool identifier (hex string)
        asset0: Low asset identifier (numerically smaller)
        asset1: High asset identifier
        reserve0: Cached reserve of asset0
        reserve1: Cached reserve of asset1
    """
    pool_id: str
    asset0: AssetId
    asset1: AssetId
    reserve0: Amount = 0
    reserve1: Amount = 0

    def __post_init__(self):
        """Validate pool state invariants."""
        if asset_sort_key(self.asset0) >= asset_sort_key(self.asset1):
            raise ValidationError(
                f"Assets must be in canonical order: {self.asset0} < {self.asset1}"
            )
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValidationError(
                f"Reserves must be non-negative: ({self.reserve0}, {self.reserve1})"
            )

    @property
    def reserves(self) -> Tuple[Amount, Amount]:
        return self.reserve0, self.reserve1

    def has_asset(self, asset: AssetId) -> bool:
        return asset == self.asset0 or asset == self.asset1

    def oriented_reserves(self, asset_in: AssetId) -> Tuple[Amount, Amount]:
        """Reserves ordered as (reserve_in, reserve_out) for a trade selling `asset_in`."""
        if asset_in == self.asset0:
            return self.reserve0, self.reserve1
        if asset_in == self.asset1:
            return self.reserve1, self.reserve0
        raise ValidationError(f"Asset {asset_in} not in pool {self.pool_id}")

    def __repr__(self) -> str:
        return (
            f"PoolState(pool_id={self.pool_id[:16]}..., "
            f"assets=({self.asset0[:10]}..., {self.asset1[:10]}...), "
            f"reserves=({self.reserve0}, {self.reserve1}))"
        )
