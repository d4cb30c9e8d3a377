"""Notification payloads, sinks and module-list decoration."""
from __future__ import annotations

from .messages import (  # noqa: F401
    MODULE_NAME,
    Message,
    MessageItem,
    build_updates_message,
    build_api_key_required_message,
    build_all_up_to_date_message,
    render_text,
)
from .sinks import (  # noqa: F401
    NotificationSink,
    MemorySink,
    EventBusSink,
    LoggingSink,
    FanOutSink,
)
from .decorate import ModuleRow, decorate_module_rows  # noqa: F401

__all__ = [
    "MODULE_NAME",
    "Message",
    "MessageItem",
    "build_updates_message",
    "build_api_key_required_message",
    "build_all_up_to_date_message",
    "render_text",
    "NotificationSink",
    "MemorySink",
    "EventBusSink",
    "LoggingSink",
    "FanOutSink",
    "ModuleRow",
    "decorate_module_rows",
]
