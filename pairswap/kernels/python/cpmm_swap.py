"""
CPMM swap kernel (fee-free exact-in).

Semantics:
- No fee: the full input amount is priced.
- amount_out = floor(amount_in * reserve_out / (reserve_in + amount_in))
- Post-state reserves are the arithmetic result of the trade:
      new_reserve_in  = reserve_in + amount_in
      new_reserve_out = reserve_out - amount_out

Floor rounding means any rounding loss stays in the pool, so
new_reserve_in * new_reserve_out >= reserve_in * reserve_out.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import LiquidityError, ValidationError
from . import uint256 as u


def _require_amount(name: str, value: int) -> None:
    if not u.is_uint(value):
        raise ValidationError(f"{name} must be a uint256 int, got {value!r}")


@dataclass(frozen=True)
class SwapExactInResult:
    amount_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int

    @property
    def is_noop(self) -> bool:
        return self.amount_out == 0


def get_amount_out(*, reserve_in: int, reserve_out: int, amount_in: int) -> int:
    """
    Quote `floor(amount_in * reserve_out / (reserve_in + amount_in))`.

    A zero quote is returned as-is; callers decide whether that is a no-op.
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
    ):
        _require_amount(name, v)
    if amount_in == 0:
        raise ValidationError("amount_in must be positive")

    numerator = u.mul(amount_in, reserve_out)
    denominator = u.add(reserve_in, amount_in)
    return u.floordiv(numerator, denominator)


def swap_exact_in(*, reserve_in: int, reserve_out: int, amount_in: int) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    Raises LiquidityError if the quote would exceed `reserve_out` (a stale or
    inconsistent reserve view). A zero `amount_out` leaves reserves unchanged.
    """
    amount_out = get_amount_out(reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in)
    k_before = reserve_in * reserve_out

    if amount_out == 0:
        return SwapExactInResult(
            amount_in=amount_in,
            amount_out=0,
            new_reserve_in=reserve_in,
            new_reserve_out=reserve_out,
            k_before=k_before,
            k_after=k_before,
        )

    if amount_out > reserve_out:
        raise LiquidityError(f"amount_out ({amount_out}) exceeds reserve_out ({reserve_out})")

    new_reserve_in = u.add(reserve_in, amount_in)
    new_reserve_out = u.sub(reserve_out, amount_out)

    return SwapExactInResult(
        amount_in=amount_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=new_reserve_in * new_reserve_out,
    )
