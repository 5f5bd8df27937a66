"""
pairswap: a two-asset constant-product liquidity pool with its own share token.
"""

from .core import Pool, PoolConfig, configure_logging
from .errors import (
    InvariantViolation,
    LedgerError,
    LiquidityError,
    PoolError,
    ReentrancyError,
    TransferError,
    ValidationError,
)
from .state import AssetRegistry, Token, TokenLedger

__version__ = "0.1.0"

__all__ = [
    "AssetRegistry",
    "InvariantViolation",
    "LedgerError",
    "LiquidityError",
    "Pool",
    "PoolConfig",
    "PoolError",
    "ReentrancyError",
    "Token",
    "TokenLedger",
    "TransferError",
    "ValidationError",
    "configure_logging",
]
