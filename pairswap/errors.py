"""Exception types shared by the pool, its kernels, and the in-process ledgers.

The pool raises; it never returns error values. Callers that need a
classification can catch the `PoolError` subclasses below.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base class for errors surfaced to pool callers."""


class ValidationError(PoolError, ValueError):
    """Raised for malformed arguments: unknown or identical assets, zero amounts, bad ids."""


class LiquidityError(PoolError):
    """Raised when the pool cannot satisfy a trade, a mint, or a withdrawal."""


class ReentrancyError(PoolError):
    """Raised when a guarded entry point is invoked while the guard is held."""


class TransferError(PoolError):
    """Raised when a token ledger reports a failed transfer."""

    def __init__(self, asset_id: str, sender: str, to: str, amount: int) -> None:
        self.asset_id = asset_id
        self.sender = sender
        self.to = to
        self.amount = amount
        super().__init__(f"transfer of {amount} {asset_id} from {sender} to {to} failed")


class LedgerError(ValueError):
    """Raised by a token ledger for insufficient balance or allowance."""


class InvariantViolation(AssertionError):
    """Raised when pricing math breaks one of its own post-conditions.

    This is a defect, not a caller error; it aborts the operation.
    """
