"""
State management for pairswap pools
"""

from .allowances import AllowanceTable
from .balances import BalanceTable
from .pools import PoolState, compute_pool_id, normalize_asset_id, order_assets
from .registry import AssetRegistry
from .tokens import Token, TokenLedger

__all__ = [
    "AllowanceTable",
    "AssetRegistry",
    "BalanceTable",
    "PoolState",
    "Token",
    "TokenLedger",
    "compute_pool_id",
    "normalize_asset_id",
    "order_assets",
]
