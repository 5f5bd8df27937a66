from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import pytest

from pairswap import AssetRegistry, Pool, PoolConfig, Token
from pairswap.kernels.python.uint256 import UINT256_MAX


LOW_ID = "0x" + "01" * 32
HIGH_ID = "0x" + "02" * 32
TRADERS = ("alice", "bob")
STARTING_BALANCE = 1_000_000


@dataclass
class Market:
    registry: AssetRegistry
    low: Token
    high: Token
    pool: Pool

    def balances(self, holder: str) -> Tuple[int, int]:
        return self.low.balance_of(holder), self.high.balance_of(holder)

    def pool_balances(self) -> Tuple[int, int]:
        return self.balances(self.pool.address)

    def fund(self, holder: str, amount: int = STARTING_BALANCE) -> None:
        for token in (self.low, self.high):
            token.mint(holder, amount)
            token.approve(holder, self.pool.address, UINT256_MAX)


def build_market(config: Optional[PoolConfig] = None) -> Market:
    registry = AssetRegistry()
    low = Token(LOW_ID, symbol="LOW")
    high = Token(HIGH_ID, symbol="HIGH")
    registry.deploy(low)
    registry.deploy(high)
    # Reversed on purpose: the pool must order the pair itself.
    pool = Pool(registry, HIGH_ID, LOW_ID, config=config)
    market = Market(registry=registry, low=low, high=high, pool=pool)
    for trader in TRADERS:
        market.fund(trader)
    return market


@pytest.fixture
def market() -> Market:
    return build_market()


@pytest.fixture
def seeded_market() -> Market:
    """Reserves (100, 400) and 200 shares held by alice."""
    m = build_market()
    m.pool.add_liquidity("alice", 100, 400)
    return m


@pytest.fixture
def make_market() -> Callable[..., Market]:
    return build_market
