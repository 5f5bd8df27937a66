"""Exclusive execution guard (reentrancy barrier)."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import structlog

from ..errors import ReentrancyError

logger = structlog.get_logger()


class ExclusiveGuard:
    """
    A single open/held flag.

    `hold()` fails immediately with ReentrancyError when the flag is already
    held (no waiting, no queueing) and always reopens the flag on exit,
    whether the body returns or raises.
    """

    def __init__(self, name: str = "pool") -> None:
        self._name = name
        self._holder: Optional[str] = None

    @property
    def held(self) -> bool:
        return self._holder is not None

    @property
    def holder(self) -> Optional[str]:
        return self._holder

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        if self._holder is not None:
            logger.warning(
                "pool_reentrancy_blocked",
                guard=self._name,
                operation=operation,
                held_by=self._holder,
            )
            raise ReentrancyError(f"{operation}: guard held by {self._holder}")
        self._holder = operation
        try:
            yield
        finally:
            self._holder = None

    def __repr__(self) -> str:
        state = f"held by {self._holder}" if self._holder else "open"
        return f"ExclusiveGuard({self._name}, {state})"
