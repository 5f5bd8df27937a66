# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.errors import ValidationError
from pairswap.kernels.python.cpmm_swap import get_amount_out, swap_exact_in
from pairswap.kernels.python.uint256 import UINT256_MAX, Uint256Overflow


def test_swap_exact_in_uses_full_input_without_fee() -> None:
    res = swap_exact_in(reserve_in=100, reserve_out=400, amount_in=10)
    # floor(10 * 400 / 110) = 36
    assert res.amount_out == 36
    assert (res.new_reserve_in, res.new_reserve_out) == (110, 364)
    assert res.k_after >= res.k_before


def test_zero_output_is_a_noop_quote() -> None:
    res =swap_exact_in(reserve_in=400, reserve_out=100, amount_in=1)
    assert res.amount_out == 0
    assert res.is_noop
    assert (res.new_reserve_in, res.new_reserve_out) == (400, 100)


def test_empty_reserves_quote_zero() -> None:
    assert get_amount_out(reserve_in=0, reserve_out=0, amount_in=1_000) == 0


def test_rounding_loss_stays_in_pool() -> None:
    res = swap_exact_in(reserve_in=7, reserve_out=13, amount_in=3)
    # floor(3 * 13 / 10) = 3; exact value 3.9 -> 0.9 units stay in the pool.
    assert res.amount_out == 3
    assert res.k_after > res.k_before


@pytest.mark.parametrize("amount_in", [0, -1, True, 2**256])
def test_invalid_amount_in_rejected(amount_in: object) -> None:
    with pytest.raises(ValidationError):
        get_amount_out(reserve_in=100, reserve_out=400, amount_in=amount_in)  # type: ignore[arg-type]


def test_product_overflow_fails_closed() -> None:
    with pytest.raises(Uint256Overflow):
        get_amount_out(reserve_in=1, reserve_out=UINT256_MAX, amount_in=2)
