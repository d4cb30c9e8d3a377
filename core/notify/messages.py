"""Structured message payloads.

Builders are pure: they map update records to data, rendering is left to
whoever displays the message (chat card, web UI, console).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.updates.records import UpdateRecord

MODULE_NAME = "Module Outdated Notifier"

UPDATES_TITLE = "Module Updates Available"
RELEASE_NOTES_LABEL = "Release Notes"
API_KEY_REQUIRED_TEXT = (
    "A Foundry VTT API key is required to check for module updates. "
    "Follow the setup instructions to add one."
)
ALL_UP_TO_DATE_TEXT = "All modules are up to date."


@dataclass(frozen=True, slots=True)
class MessageItem:
    title: str
    current: str
    latest: str
    notes_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Message:
    kind: str  # updates-available|api-key-required|all-up-to-date
    title: str
    channel: str = "chat"  # chat|toast
    body: Optional[str] = None
    link: Optional[str] = None
    items: List[MessageItem] = field(default_factory=list)
    release_notes_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_updates_message(records: Iterable[UpdateRecord]) -> Message:
    return Message(
        kind="updates-available",
        title=UPDATES_TITLE,
        items=[
            MessageItem(
                title=r.title,
                current=r.current,
                latest=r.latest,
                notes_url=r.release_notes,
            )
            for r in records
        ],
        release_notes_label=RELEASE_NOTES_LABEL,
    )


def build_api_key_required_message(readme_url: str | None = None) -> Message:
    return Message(
        kind="api-key-required",
        title=MODULE_NAME,
        body=API_KEY_REQUIRED_TEXT,
        link=readme_url,
    )


def build_all_up_to_date_message() -> Message:
    return Message(
        kind="all-up-to-date",
        title=MODULE_NAME,
        channel="toast",
        body=ALL_UP_TO_DATE_TEXT,
    )


def render_text(message: Message) -> str:
    lines = [message.title]
    if message.body:
        lines.append(message.body)
    if message.link:
        lines.append(message.link)
    for item in message.items:
        line = f"- {item.title}: {item.current} -> {item.latest}"
        if item.notes_url:
            label = message.release_notes_label or RELEASE_NOTES_LABEL
            line += f" ({label}: {item.notes_url})"
        lines.append(line)
    return "\n".join(lines)


__all__ = [
    "MODULE_NAME",
    "Message",
    "MessageItem",
    "build_updates_message",
    "build_api_key_required_message",
    "build_all_up_to_date_message",
    "render_text",
]
