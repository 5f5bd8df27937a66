"""
Allowance tracking for transfer-on-behalf.

Allowances are scoped per token and keyed by (owner, spender).
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..errors import LedgerError
from .balances import Address, Amount


class AllowanceTable:
    """
    Allowance table mapping (owner, spender) -> amount.

    Notes:
    - Allowances are always non-negative.
    - Zero allowances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._allowances: Dict[Tuple[Address, Address], Amount] = {}

    def get(self, owner: Address, spender: Address) -> Amount:
        """Get allowance for (owner, spender). Returns 0 if not found."""
        return self._allowances.get((owner, spender), 0)

    def set(self, owner: Address, spender: Address, amount: Amount) -> None:
        """Set allowance for (owner, spender)."""
        if amount < 0:
            raise LedgerError(f"Allowance cannot be negative: {amount}")
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount

    def spend(self, owner: Address, spender: Address, amount: Amount) -> None:
        """Consume `amount` of an allowance."""
        current = self.get(owner, spender)
        if amount > current:
            raise LedgerError(
                f"Insufficient allowance: {spender} may spend {current} of {owner}, requested {amount}"
            )
        self.set(owner, spender, current - amount)

    def get_all_allowances(self) -> Dict[Tuple[Address, Address], Amount]:
        """Return all allowances."""
        return dict(self._allowances)

    def load(self, allowances: Dict[Tuple[Address, Address], Amount]) -> None:
        self._allowances = {key: amount for key, amount in allowances.items() if amount != 0}

    def __repr__(self) -> str:
        return f"AllowanceTable({len(self._allowances)} entries)"
