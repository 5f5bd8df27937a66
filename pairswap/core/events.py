"""
Audit records emitted by pool operations.

Records are buffered in an `EventLog`. A failed operation truncates the
buffer back to where it started, and subscribers only receive records once
the outermost operation that produced them has committed. The log is an
in-memory buffer; long-lived pools bound it with `retain` or `prune()`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

import structlog

from ..state.canonical import canonical_json_bytes, sha256_hex

logger = structlog.get_logger()


class _Record:
    kind: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"kind": self.kind}
        out.update(asdict(self))
        return out

    def digest(self) -> str:
        return sha256_hex(canonical_json_bytes(self.to_dict()))


@dataclass(frozen=True)
class TradeRecord(_Record):
    kind: ClassVar[str] = "trade"

    sender: str
    asset_in: str
    asset_out: str
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class DepositRecord(_Record):
    kind: ClassVar[str] = "deposit"

    sender: str
    to: str
    amount0: int
    amount1: int
    liquidity: int


@dataclass(frozen=True)
class WithdrawalRecord(_Record):
    kind: ClassVar[str] = "withdrawal"

    sender: str
    to: str
    amount0: int
    amount1: int
    liquidity: int


@dataclass(frozen=True)
class SyncRecord(_Record):
    kind: ClassVar[str] = "sync"

    reserve0: int
    reserve1: int


PoolRecord = Union[TradeRecord, DepositRecord, WithdrawalRecord, SyncRecord]
Subscriber = Callable[[PoolRecord], None]


class EventLog:
    """
    Record buffer for one pool.

    `mark()` positions are absolute sequence numbers, so they stay valid
    after published records are pruned. With `retain > 0` only the newest
    `retain` published records are kept after each publish; `retain == 0`
    keeps everything.
    """

    def __init__(self, retain: int = 0) -> None:
        if isinstance(retain, bool) or not isinstance(retain, int) or retain < 0:
            raise ValueError(f"retain must be a non-negative int: {retain!r}")
        self._retain = retain
        self._records: List[PoolRecord] = []
        self._subscribers: List[Subscriber] = []
        self._dropped = 0
        self._published = 0

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def append(self, record: PoolRecord) -> None:
        self._records.append(record)

    def mark(self) -> int:
        return self._dropped + len(self._records)

    def truncate(self, mark: int) -> None:
        # Records before `mark` belong to an enclosing operation and stay.
        del self._records[max(mark, self._published) - self._dropped:]

    def publish(self) -> None:
        """
        Deliver every committed record not yet seen by subscribers.

        The records are already committed: a subscriber that raises is
        logged and skipped, and the remaining subscribers still run.
        """
        pending = self._records[self._published - self._dropped:]
        self._published = self.mark()
        for record in pending:
            for callback in list(self._subscribers):
                try:
                    callback(record)
                except Exception:
                    logger.exception("pool_subscriber_failed", kind=record.kind, subscriber=repr(callback))
        self.prune()

    def prune(self, keep: Optional[int] = None) -> int:
        """
        Drop published records older than the newest `keep`.

        `keep` defaults to `retain`; with neither set nothing is dropped.
        Unpublished records are never dropped. Returns the number removed.
        """
        if keep is None:
            if not self._retain:
                return 0
            keep = self._retain
        excess = max(0, self._published - self._dropped - keep)
        del self._records[:excess]
        self._dropped += excess
        return excess

    @property
    def records(self) -> List[PoolRecord]:
        return list(self._records)

    def of_kind(self, kind: str) -> List[PoolRecord]:
        return [r for r in self._records if r.kind == kind]

    def __len__(self) -> int:
        return len(self._records)
