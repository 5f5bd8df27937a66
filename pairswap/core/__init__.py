"""
Pool engine: the stateful pool, its guard, configuration and audit records.
"""

from .config import PoolConfig
from .events import DepositRecord, EventLog, SyncRecord, TradeRecord, WithdrawalRecord
from .guard import ExclusiveGuard
from .logs import configure_logging
from .pool import Pool

__all__ = [
    "DepositRecord",
    "EventLog",
    "ExclusiveGuard",
    "Pool",
    "PoolConfig",
    "SyncRecord",
    "TradeRecord",
    "WithdrawalRecord",
    "configure_logging",
]
