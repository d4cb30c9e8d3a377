"""Session users and coordinator election."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True, slots=True)
class SessionUser:
    id: str
    name: str = ""
    is_admin: bool = False  # GM role in the host
    active: bool = True


def admin_ids(users: Iterable[SessionUser]) -> List[str]:
    """Ids of all administrators, connected or not (whisper targets)."""
    return [u.id for u in users if u.is_admin]


def elect_coordinator(users: Iterable[SessionUser]) -> Optional[SessionUser]:
    """Active administrator with the lexicographically smallest id."""
    candidates = sorted(
        (u for u in users if u.active and u.is_admin), key=lambda u: u.id
    )
    return candidates[0] if candidates else None


__all__ = ["SessionUser", "admin_ids", "elect_coordinator"]
