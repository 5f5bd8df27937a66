"""
Liquidity math kernel.

Pure functions with explicit rounding rules (floor everywhere):
- `quote`: the amount of one asset matching another at the reserve ratio.
- `optimal_liquidity`: ratio-preserving deposit amounts (excess is never used).
- `mint_liquidity`: shares issued for a deposit (geometric mean when the
  supply is zero, otherwise the smaller pro-rata share).
- `burn_liquidity`: pro-rata redemption of shares against balances.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import InvariantViolation, LiquidityError, ValidationError
from . import uint256 as u


def _require_amount(name: str, value: int) -> None:
    if not u.is_uint(value):
        raise ValidationError(f"{name} must be a uint256 int, got {value!r}")


@dataclass(frozen=True)
class OptimalLiquidityResult:
    amount0_used: int
    amount1_used: int
    amount0_unused: int
    amount1_unused: int


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount0_out: int
    amount1_out: int


def quote(*, amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """
    Compute `floor(amount_a * reserve_b / reserve_a)`.

    No rounding-up correction is applied.
    """
    for name, v in (("amount_a", amount_a), ("reserve_a", reserve_a), ("reserve_b", reserve_b)):
        _require_amount(name, v)
    if amount_a == 0:
        raise ValidationError("insufficient amount: amount_a must be positive")
    if reserve_a == 0 or reserve_b == 0:
        raise ValidationError("insufficient liquidity: reserves must be positive")
    return u.mul_div(amount_a, reserve_b, reserve_a)


def optimal_liquidity(
    *,
    reserve0: int,
    reserve1: int,
    amount0_desired: int,
    amount1_desired: int,
    reject_zero_quote: bool = True,
) -> OptimalLiquidityResult:
    """
    Compute the amounts a deposit actually commits.

    For an empty pool (both reserves zero) everything is used and the
    depositor sets the price. Otherwise the full amount of one side is used
    and the other side is quoted from the reserve ratio.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("amount0_desired", amount0_desired),
        ("amount1_desired", amount1_desired),
    ):
        _require_amount(name, v)

    if reserve0 == 0 and reserve1 == 0:
        return OptimalLiquidityResult(
            amount0_used=amount0_desired,
            amount1_used=amount1_desired,
            amount0_unused=0,
            amount1_unused=0,
        )

    amount1_optimal = quote(amount_a=amount0_desired, reserve_a=reserve0, reserve_b=reserve1)
    if amount1_optimal <= amount1_desired:
        if reject_zero_quote and amount1_optimal == 0:
            raise LiquidityError("insufficient amount: quoted amount1 is zero")
        amount0_used = amount0_desired
        amount1_used = amount1_optimal
    else:
        amount0_optimal = quote(amount_a=amount1_desired, reserve_a=reserve1, reserve_b=reserve0)
        if amount0_optimal > amount0_desired:
            raise InvariantViolation(
                f"amount0_optimal ({amount0_optimal}) exceeds amount0_desired ({amount0_desired})"
            )
        if reject_zero_quote and amount0_optimal == 0:
            raise LiquidityError("insufficient amount: quoted amount0 is zero")
        amount0_used = amount0_optimal
        amount1_used = amount1_desired

    return OptimalLiquidityResult(
        amount0_used=amount0_used,
        amount1_used=amount1_used,
        amount0_unused=amount0_desired - amount0_used,
        amount1_unused=amount1_desired - amount1_used,
    )


def mint_liquidity(*, reserve0: int, reserve1: int, total_supply: int, amount0: int, amount1: int) -> int:
    """
    Shares issued for a deposit of (amount0, amount1).

    total_supply == 0:  floor(sqrt(amount0 * amount1))
    otherwise:          min(floor(amount0 * total_supply / reserve0),
                            floor(amount1 * total_supply / reserve1))

    Raises LiquidityError when the result is zero.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
        ("amount0", amount0),
        ("amount1", amount1),
    ):
        _require_amount(name, v)

    if total_supply == 0:
        liquidity = u.isqrt(u.mul(amount0, amount1))
    else:
        liquidity0 = u.mul_div(amount0, total_supply, reserve0)
        liquidity1 = u.mul_div(amount1, total_supply, reserve1)
        liquidity = min(liquidity0, liquidity1)

    if liquidity == 0:
        raise LiquidityError("insufficient liquidity minted")
    return liquidity


def burn_liquidity(*, liquidity: int, balance0: int, balance1: int, total_supply: int) -> BurnLiquidityResult:
    """
    Redeem `liquidity` shares pro rata against balances (floor rounding).

    Raises LiquidityError if either output rounds to zero.
    """
    for name, v in (
        ("liquidity", liquidity),
        ("balance0", balance0),
        ("balance1", balance1),
        ("total_supply", total_supply),
    ):
        _require_amount(name, v)
    if total_supply == 0:
        raise LiquidityError("insufficient liquidity burned: no shares outstanding")
    if liquidity > total_supply:
        raise InvariantViolation(f"liquidity ({liquidity}) exceeds total_supply ({total_supply})")

    amount0_out = u.mul_div(liquidity, balance0, total_supply)
    amount1_out = u.mul_div(liquidity, balance1, total_supply)
    if amount0_out == 0 or amount1_out == 0:
        raise LiquidityError("insufficient liquidity burned")
    return BurnLiquidityResult(amount0_out=amount0_out, amount1_out=amount1_out)
