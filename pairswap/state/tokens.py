"""
Fungible token ledgers.

`TokenLedger` is the interface the pool consumes for both underlying assets
and its own share token. `Token` is the in-process implementation: balances,
allowances, total supply, issuer mint/burn hooks, and transfer callbacks
through which external code can run (and re-enter a pool) mid-operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Protocol, Tuple

from ..errors import LedgerError, ValidationError
from ..kernels.python import uint256 as u
from .allowances import AllowanceTable
from .balances import Address, Amount, AssetId, BalanceTable
from .pools import normalize_asset_id


class TokenLedger(Protocol):
    @property
    def asset_id(self) -> AssetId: ...

    def total_supply(self) -> Amount: ...

    def balance_of(self, holder: Address) -> Amount: ...

    def allowance(self, owner: Address, spender: Address) -> Amount: ...

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool: ...

    def transfer_from(self, spender: Address, owner: Address, to: Address, amount: Amount) -> bool: ...

    def approve(self, owner: Address, spender: Address, amount: Amount) -> bool: ...

    def snapshot(self) -> object: ...

    def restore(self, snapshot: object) -> None: ...


TransferHook = Callable[["Token", Address, Address, Amount], None]


@dataclass(frozen=True)
class TokenSnapshot:
    balances: Dict[Address, Amount]
    allowances: Dict[Tuple[Address, Address], Amount]
    total_supply: Amount


def _require_address(name: str, value: object) -> None:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{name} must be a non-empty address string")


def _require_amount(value: object) -> None:
    if not u.is_uint(value):
        raise ValidationError(f"amount must be a uint256 int, got {value!r}")


class Token:
    """
    Standard fungible token ledger.

    - Transfers never wrap: insufficient balance or allowance raises LedgerError.
    - An allowance of UINT256_MAX is unlimited and is never decremented.
    - Transfer hooks run after each balance move, with the move already applied.
    """

    def __init__(self, asset_id: object, *, symbol: str = "", decimals: int = 18) -> None:
        self._asset_id = normalize_asset_id(asset_id)
        self.symbol = symbol
        self.decimals = decimals
        self._balances = BalanceTable()
        self._allowances = AllowanceTable()
        self._total_supply: Amount = 0
        self._hooks: List[TransferHook] = []

    @property
    def asset_id(self) -> AssetId:
        return self._asset_id

    def add_transfer_hook(self, hook: TransferHook) -> None:
        self._hooks.append(hook)

    def remove_transfer_hook(self, hook: TransferHook) -> None:
        self._hooks.remove(hook)

    def total_supply(self) -> Amount:
        return self._total_supply

    def balance_of(self, holder: Address) -> Amount:
        return self._balances.get(holder)

    def allowance(self, owner: Address, spender: Address) -> Amount:
        return self._allowances.get(owner, spender)

    def approve(self, owner: Address, spender: Address, amount: Amount) -> bool:
        _require_address("owner", owner)
        _require_address("spender", spender)
        _require_amount(amount)
        self._allowances.set(owner, spender, amount)
        return True

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: Address, owner: Address, to: Address, amount: Amount) -> bool:
        _require_address("spender", spender)
        _require_amount(amount)
        self._require_balance(owner, amount)
        if self.allowance(owner, spender) != u.UINT256_MAX:
            self._allowances.spend(owner, spender, amount)
        self._move(owner, to, amount)
        return True

    def mint(self, to: Address, amount: Amount) -> None:
        """Issuer hook: create `amount` new units held by `to`."""
        _require_address("to", to)
        _require_amount(amount)
        self._total_supply = u.add(self._total_supply, amount)
        self._balances.add(to, amount)

    def burn(self, holder: Address, amount: Amount) -> None:
        """Issuer hook: destroy `amount` units held by `holder`."""
        _require_address("holder", holder)
        _require_amount(amount)
        self._balances.subtract(holder, amount)
        self._total_supply = u.sub(self._total_supply, amount)

    def _move(self, sender: Address, to: Address, amount: Amount) -> None:
        _require_address("sender", sender)
        _require_address("to", to)
        _require_amount(amount)
        self._require_balance(sender, amount)
        self._balances.subtract(sender, amount)
        self._balances.add(to, amount)
        for hook in list(self._hooks):
            hook(self, sender, to, amount)

    def _require_balance(self, holder: Address, amount: Amount) -> None:
        balance = self.balance_of(holder)
        if balance < amount:
            raise LedgerError(
                f"Insufficient {self.symbol or self._asset_id} balance for {holder}: {balance} < {amount}"
            )

    def snapshot(self) -> TokenSnapshot:
        return TokenSnapshot(
            balances=self._balances.get_all_balances(),
            allowances=self._allowances.get_all_allowances(),
            total_supply=self._total_supply,
        )

    def restore(self, snapshot: TokenSnapshot) -> None:
        self._balances.load(snapshot.balances)
        self._allowances.load(snapshot.allowances)
        self._total_supply = snapshot.total_supply

    def __repr__(self) -> str:
        label = self.symbol or self._asset_id[:10] + "..."
        return f"Token({label}, supply={self._total_supply})"
