"""Update record type."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class UpdateRecord:
    id: str
    title: str
    current: str  # normalized installed version
    latest: str  # normalized registry version
    compatible_core: Optional[str] = None
    release_notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["UpdateRecord"]
