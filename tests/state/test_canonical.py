# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.state.canonical import (
    canonical_hex_allow_0x,
    canonical_json_bytes,
    domain_sep_bytes,
    sha256_hex,
)


def test_canonical_json_is_key_order_independent() -> None:
    assert canonical_json_bytes({"b": 1, "a": [2, "x"]}) == b'{"a":[2,"x"],"b":1}'
    assert canonical_json_bytes({"a": 1, "b": 2}) == canonical_json_bytes({"b": 2, "a": 1})


@pytest.mark.parametrize("value", [1.5, {"k": 0.0}, ["\ud800"], {1: "non-str key"}])
def test_canonical_json_rejects_ambiguous_values(value: object) -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes(value)


def test_domain_separation_prefix() -> None:
    assert domain_sep_bytes("PairSwapPool") == b"pairswap:PairSwapPool:v1\x00"
    assert domain_sep_bytes("PairSwapPool", version=2) != domain_sep_bytes("PairSwapPool")
    with pytest.raises(TypeError):
        domain_sep_bytes("")
    with pytest.raises(ValueError):
        domain_sep_bytes("a\x00b")
    with pytest.raises(ValueError):
        domain_sep_bytes("Ω")


def test_sha256_hex_shape() -> None:
    digest = sha256_hex(b"")
    assert digest == "0xe3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_canonical_hex_pads_to_width() -> None:
    assert canonical_hex_allow_0x("0xAB", nbytes=2, name="x") == "0x00ab"
    assert canonical_hex_allow_0x("00ab", nbytes=2, name="x") == "0x00ab"
    with pytest.raises(ValueError, match="fit in 2 bytes"):
        canonical_hex_allow_0x("0x10000", nbytes=2, name="x")
    with pytest.raises(ValueError, match="valid hex"):
        canonical_hex_allow_0x("0x", nbytes=2, name="x")
    with pytest.raises(TypeError):
        canonical_hex_allow_0x(7, nbytes=2, name="x")  # type: ignore[arg-type]
