"""
Checked unsigned 256-bit arithmetic.

Every quantity the pool handles (reserves, balances, share supply) is an
unsigned 256-bit integer. Python ints never wrap, so the bound is enforced
explicitly: results outside [0, UINT256_MAX] raise instead of being returned.
All division is floor division.
"""

from __future__ import annotations

import math


UINT256_MAX = 2**256 - 1


class Uint256Error(ArithmeticError):
    """Base class for checked arithmetic errors."""


class Uint256Overflow(Uint256Error):
    """Result exceeds UINT256_MAX."""


class Underflow(Uint256Error):
    """Subtraction would produce a negative result."""


class DivisionByZero(Uint256Error):
    """Division by zero."""


def is_uint(value: object) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return 0 <= value <= UINT256_MAX


def _bounded(result: int, op: str) -> int:
    if result > UINT256_MAX:
        raise Uint256Overflow(f"uint256 overflow in {op}")
    return result


def add(a: int, b: int) -> int:
    return _bounded(a + b, f"{a} + {b}")


def sub(a: int, b: int) -> int:
    result = a - b
    if result < 0:
        raise Underflow(f"Underflow: {a} - {b} = {result}")
    return result


def mul(a: int, b: int) -> int:
    return _bounded(a * b, "mul")


def floordiv(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} // 0")
    return a // b


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator), with the product checked against uint256."""
    return floordiv(mul(a, b), denominator)


def isqrt(n: int) -> int:
    # Integer square root; float sqrt loses precision above 2**53.
    if n < 0:
        raise Underflow(f"isqrt of negative value: {n}")
    return math.isqrt(n)
