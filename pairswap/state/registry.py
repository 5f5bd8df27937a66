"""
Registry of deployed token ledgers.

The registry answers "does this identity resolve to a deployed asset?" and
captures/restores the state of every ledger it knows, which is what makes a
pool operation all-or-nothing across external ledgers.
"""

from __future__ import annotations

from typing import Dict, Iterator, List

from ..errors import ValidationError
from .balances import AssetId
from .pools import normalize_asset_id
from .tokens import TokenLedger


class AssetRegistry:
    """Deployed ledgers keyed by canonical asset id."""

    def __init__(self) -> None:
        self._ledgers: Dict[AssetId, TokenLedger] = {}

    def deploy(self, ledger: TokenLedger) -> TokenLedger:
        asset_id = normalize_asset_id(ledger.asset_id)
        if asset_id in self._ledgers:
            raise ValidationError(f"asset already deployed: {asset_id}")
        self._ledgers[asset_id] = ledger
        return ledger

    def is_deployed(self, asset_id: object) -> bool:
        try:
            return normalize_asset_id(asset_id) in self._ledgers
        except ValidationError:
            return False

    def resolve(self, asset_id: object) -> TokenLedger:
        """
        Return the ledger deployed under `asset_id`.

        Raises:
            ValidationError: If the id is malformed or nothing is deployed there
        """
        key = normalize_asset_id(asset_id)
        ledger = self._ledgers.get(key)
        if ledger is None:
            raise ValidationError(f"asset not deployed: {key}")
        return ledger

    def asset_ids(self) -> List[AssetId]:
        return sorted(self._ledgers)

    def snapshot(self) -> Dict[AssetId, object]:
        return {asset_id: ledger.snapshot() for asset_id, ledger in self._ledgers.items()}

    def restore(self, snapshot: Dict[AssetId, object]) -> None:
        for asset_id, ledger_snapshot in snapshot.items():
            self._ledgers[asset_id].restore(ledger_snapshot)

    def __contains__(self, asset_id: object) -> bool:
        return self.is_deployed(asset_id)

    def __iter__(self) -> Iterator[TokenLedger]:
        return iter([self._ledgers[k] for k in sorted(self._ledgers)])

    def __len__(self) -> int:
        return len(self._ledgers)

    def __repr__(self) -> str:
        return f"AssetRegistry({len(self._ledgers)} ledgers)"
