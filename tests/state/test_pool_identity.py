# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap import AssetRegistry, Pool, Token
from pairswap.errors import ValidationError
from pairswap.state import PoolState, compute_pool_id, normalize_asset_id, order_assets


A = "0x" + "11" * 32
B = "0x" + "22" * 32


def test_normalize_asset_id_is_numeric_identity() -> None:
    padded = "0x" + "00" * 31 + "01"
    assert normalize_asset_id(1) == padded
    assert normalize_asset_id("0x1") == padded
    assert normalize_asset_id("0X" + "00" * 31 + "01") == padded


@pytest.mark.parametrize("bad", ["", "0x", "0xzz", "0x" + "ff" * 33, -1, None, 1.5])
def test_normalize_asset_id_rejects_malformed(bad: object) -> None:
    with pytest.raises(ValidationError):
        normalize_asset_id(bad)


def test_order_assets_is_argument_order_independent() -> None:
    assert order_assets(A, B) == (A, B)
    assert order_assets(B, A) == (A, B)
    # Numeric, not lexicographic on the raw input.
    assert order_assets("0x10", "0x9")[0].endswith("09")


def test_order_assets_rejects_identical() -> None:
    with pytest.raises(ValidationError, match="identical"):
        order_assets(A, A[2:])


def test_pool_id_is_symmetric_and_pair_specific() -> None:
    assert compute_pool_id(A, B) == compute_pool_id(B, A)
    assert compute_pool_id(A, B) != compute_pool_id(A, "0x" + "33" * 32)
    assert compute_pool_id(A, B).startswith("0x") and len(compute_pool_id(A, B)) == 66


def test_pool_state_requires_canonical_order() -> None:
    with pytest.raises(ValidationError, match="canonical order"):
        PoolState(pool_id="0x00", asset0=B, asset1=A)


def test_registry_resolves_only_deployed_assets() -> None:
    registry = AssetRegistry()
    token = Token(A)
    registry.deploy(token)
    assert registry.resolve(A) is token
    assert A in registry
    assert B not in registry
    with pytest.raises(ValidationError, match="not deployed"):
        registry.resolve(B)
    with pytest.raises(ValidationError, match="already deployed"):
        registry.deploy(Token(A))


def test_pool_construction_orders_assets_either_way() -> None:
    for args in ((A, B), (B, A)):
        registry = AssetRegistry()
        registry.deploy(Token(A))
        registry.deploy(Token(B))
        pool = Pool(registry, *args)
        assert (pool.get_token_a(), pool.get_token_b()) == (A, B)
        assert pool.get_reserves() == (0, 0)
        assert pool.total_supply() == 0
        assert not pool.guard.held


def test_pool_construction_rejects_bad_pairs() -> None:
    registry = AssetRegistry()
    registry.deploy(Token(A))
    with pytest.raises(ValidationError):
        Pool(registry, A, A)
    with pytest.raises(ValidationError, match="not deployed"):
        Pool(registry, A, B)


def test_one_pool_per_unordered_pair() -> None:
    registry = AssetRegistry()
    registry.deploy(Token(A))
    registry.deploy(Token(B))
    pool = Pool(registry, A, B)
    assert registry.resolve(pool.pool_id) is pool.shares
    with pytest.raises(ValidationError, match="pool already deployed"):
        Pool(registry, B, A)
