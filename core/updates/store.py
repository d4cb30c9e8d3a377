"""Process-wide store for the most recent update list.

Write-once-per-check, read-many (module list decoration, HTTP API).
`replace` swaps in a new immutable tuple, so readers always see either the
previous or the new complete list.
"""
from __future__ import annotations

from time import time
from typing import Iterable, Optional, Tuple

from .records import UpdateRecord


class UpdateStore:
    def __init__(self) -> None:
        self._records: Tuple[UpdateRecord, ...] = ()
        self._checked_at: Optional[float] = None

    def latest(self) -> Tuple[UpdateRecord, ...]:
        return self._records

    @property
    def checked_at(self) -> Optional[float]:
        return self._checked_at

    def replace(self, records: Iterable[UpdateRecord]) -> None:
        self._records = tuple(records)
        self._checked_at = time()

    def get(self, module_id: str) -> Optional[UpdateRecord]:
        for rec in self._records:
            if rec.id == module_id:
                return rec
        return None

    def reset_for_tests(self) -> None:  # pragma: no cover
        self._records = ()
        self._checked_at = None


store = UpdateStore()

__all__ = ["store", "UpdateStore"]
