"""Module list decoration.

Given the rendered rows of the host's module management list, mark each
module that has a pending update: badge class, chevron icon and a tooltip
line with the latest version (plus a release notes link when known).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Dict, Iterable, List, Sequence

from core.updates.records import UpdateRecord
from .messages import RELEASE_NOTES_LABEL

UPDATE_CLASS = "update-available"
UPDATE_ICON = "fa-solid fa-fw fa-chevrons-up"


@dataclass(slots=True)
class ModuleRow:
    module_id: str
    classes: List[str] = field(default_factory=list)
    icon: str = ""
    tooltip_html: str = ""
    locked: bool = False

    def to_dict(self) -> dict:
        return {
            "module_id": self.module_id,
            "classes": list(self.classes),
            "icon": self.icon,
            "tooltip_html": self.tooltip_html,
            "locked": self.locked,
        }


def update_tooltip(record: UpdateRecord) -> str:
    text = f"Update available: v{escape(record.latest)}"
    if record.release_notes:
        text += (
            f'<br><a href="{escape(record.release_notes, quote=True)}" '
            f'target="_blank">{RELEASE_NOTES_LABEL}</a>'
        )
    return text


def decorate_module_rows(
    rows: Sequence[ModuleRow], records: Iterable[UpdateRecord]
) -> int:
    """Annotate rows in place; returns how many rows were decorated."""
    by_id: Dict[str, ModuleRow] = {row.module_id: row for row in rows}
    decorated = 0
    for record in records:
        row = by_id.get(record.id)
        if row is None:
            continue
        if UPDATE_CLASS not in row.classes:
            row.classes.append(UPDATE_CLASS)
        row.icon = UPDATE_ICON
        row.tooltip_html = f"{row.tooltip_html}<br>{update_tooltip(record)}"
        if record.release_notes:
            row.locked = True
        decorated += 1
    return decorated


__all__ = ["ModuleRow", "decorate_module_rows", "update_tooltip", "UPDATE_CLASS", "UPDATE_ICON"]
