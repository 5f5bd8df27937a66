"""
Per-token balance tracking.

Implements BalanceTable[Address] -> Amount for a single fungible asset.
"""

from typing import Dict

from ..errors import LedgerError
from ..kernels.python.uint256 import UINT256_MAX, Uint256Overflow


# Type aliases
Address = str  # account or pool address
AssetId = str  # 32-byte hex string (0x...)
Amount = int  # Non-negative integer bounded by UINT256_MAX


class BalanceTable:
    """
    Sparse balance table mapping holder -> amount.

    Note: this class stores balances in a plain dict. Callers that hash or
    serialize balances must sort holders explicitly.
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Address, Amount] = {}

    def get(self, holder: Address) -> Amount:
        """Get balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def set(self, holder: Address, amount: Amount) -> None:
        """
        Set balance for holder.

        Raises:
            LedgerError: If amount is negative
            Uint256Overflow: If amount exceeds UINT256_MAX
        """
        if amount < 0:
            raise LedgerError(f"Balance cannot be negative: {amount}")
        if amount > UINT256_MAX:
            raise Uint256Overflow(f"Balance exceeds uint256: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def add(self, holder: Address, delta: int) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            LedgerError: If resulting balance would be negative
        """
        current = self.get(holder)
        new_balance = current + delta
        if new_balance < 0:
            raise LedgerError(
                f"Insufficient balance for {holder}: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, new_balance)

    def subtract(self, holder: Address, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise LedgerError(f"Delta must be non-negative: {delta}")
        self.add(holder, -delta)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def get_all_balances(self) -> Dict[Address, Amount]:
        """Return a copy of all non-zero balances."""
        return dict(self._balances)

    def load(self, balances: Dict[Address, Amount]) -> None:
        """Replace the table contents (used when restoring a snapshot)."""
        self._balances = {holder: amount for holder, amount in balances.items() if amount != 0}

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
