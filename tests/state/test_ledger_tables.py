# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.errors import LedgerError
from pairswap.kernels.python.uint256 import UINT256_MAX, Uint256Overflow
from pairswap.state import AllowanceTable, AssetRegistry, BalanceTable, Token


def test_balance_table_is_sparse_and_non_negative() -> None:
    table = BalanceTable()
    table.set("alice", 10)
    table.add("bob", 5)
    table.subtract("alice", 10)

    assert table.get("alice") == 0
    assert table.get_all_balances() == {"bob": 5}
    assert table.total() == 5
    with pytest.raises(LedgerError, match="Insufficient balance"):
        table.subtract("bob", 6)
    with pytest.raises(LedgerError):
        table.subtract("bob", -1)
    with pytest.raises(Uint256Overflow):
        table.set("bob", UINT256_MAX + 1)


def test_balance_table_load_replaces_contents() -> None:
    table = BalanceTable()
    table.set("alice", 1)
    table.load({"bob": 3, "carol": 0})
    assert table.get_all_balances() == {"bob": 3}


def test_allowance_table_spend() -> None:
    table = AllowanceTable()
    table.set("alice", "pool", 10)
    table.spend("alice", "pool", 4)
    assert table.get("alice", "pool") == 6
    table.spend("alice", "pool", 6)
    assert table.get_all_allowances() == {}
    with pytest.raises(LedgerError, match="Insufficient allowance"):
        table.spend("alice", "pool", 1)
    with pytest.raises(LedgerError):
        table.set("alice", "pool", -1)


def test_registry_snapshot_restores_every_ledger() -> None:
    registry = AssetRegistry()
    a = registry.deploy(Token(1, symbol="A"))
    b = registry.deploy(Token(2, symbol="B"))
    a.mint("alice", 100)
    snap = registry.snapshot()

    a.transfer("alice", "bob", 40)
    b.mint("bob", 7)
    registry.restore(snap)

    assert (a.balance_of("alice"), a.balance_of("bob")) == (100, 0)
    assert b.total_supply() == 0
    assert [t.symbol for t in registry] == ["A", "B"]
    assert len(registry) == 2
    assert registry.asset_ids() == [a.asset_id, b.asset_id]
    assert not registry.is_deployed("not-hex")
