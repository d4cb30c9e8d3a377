"""Event dataclasses + any-subscriber bridge.

Per-event subscriptions go through `core.eventbus`; `on(handler)` here
registers a handler(name, payload) that receives every event (used by the
metrics collector and by tests).
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from time import time
from typing import Any, Callable, Dict, List, Protocol

from core import metrics as _metrics
from core.eventbus import emit as _emit_bus

EventHandler = Callable[[str, Dict[str, Any]], None]


class SupportsEvent(Protocol):  # pragma: no cover
    def to_event(self) -> Dict[str, Any]:  # noqa: D401
        ...


@dataclass(slots=True)
class BaseEvent:
    def to_event(self) -> Dict[str, Any]:  # noqa: D401
        data = asdict(self)
        data["ts"] = data.get("ts") or time()
        return data


@dataclass(slots=True)
class UpdateCheckStarted(BaseEvent):
    check_id: str
    host_version: str
    package_type: str


@dataclass(slots=True)
class UpdateCheckCompleted(BaseEvent):
    check_id: str
    updates: int
    modules_scanned: int
    remote_packages: int
    latency_ms: int


@dataclass(slots=True)
class UpdateCheckFailed(BaseEvent):
    check_id: str
    error_type: str  # auth-missing|network-error|protocol-error|internal
    message: str | None = None
    latency_ms: int | None = None


@dataclass(slots=True)
class ApiKeyChanged(BaseEvent):
    """API credential replaced (value never included)."""
    module_id: str
    is_set: bool


@dataclass(slots=True)
class ChatMessagePosted(BaseEvent):
    """Message delivered to the notification sink.

    kind: updates-available|api-key-required|all-up-to-date
    whisper: recipient user ids (empty → broadcast / UI toast)
    """
    kind: str
    title: str
    content: dict
    whisper: list[str]
    speaker: str


_ANY_SUBS: List[EventHandler] = []


def _metrics_collector(
    name: str, payload: Dict[str, Any]
) -> None:  # noqa: D401
    if name == "UpdateCheckCompleted":
        _metrics.inc_update_check("ok")
        _metrics.inc_updates_found(payload.get("updates", 0))
        _metrics.observe(
            "update_check_latency_ms", payload.get("latency_ms", 0)
        )
    elif name == "UpdateCheckFailed":
        _metrics.inc_update_check("failed")
        _metrics.inc_update_check_error(payload.get("error_type", "internal"))
    elif name == "ChatMessagePosted":
        _metrics.inc(
            "notifications_posted_total",
            {"kind": payload.get("kind", "unknown")},
        )
    elif name == "ApiKeyChanged":
        _metrics.inc("api_key_changes_total")


_ANY_SUBS.append(_metrics_collector)


def emit(ev: BaseEvent | SupportsEvent) -> None:
    name = ev.__class__.__name__
    payload = ev.to_event()
    _emit_bus(name, payload)
    for h in list(_ANY_SUBS):  # copy for isolation
        try:
            h(name, dict(payload))
        except Exception:  # noqa: BLE001
            _metrics.inc("handler_exceptions_total", {"event": name})


def on(handler: EventHandler) -> None:
    _ANY_SUBS.append(handler)


def subscribe(handler: EventHandler):
    on(handler)

    def _unsub() -> None:  # noqa: D401
        try:
            _ANY_SUBS.remove(handler)
        except ValueError:
            pass
    return _unsub


def reset_listeners_for_tests() -> None:  # pragma: no cover
    _ANY_SUBS.clear()
    _ANY_SUBS.append(_metrics_collector)


__all__ = [
    "emit",
    "on",
    "subscribe",
    "BaseEvent",
    "UpdateCheckStarted",
    "UpdateCheckCompleted",
    "UpdateCheckFailed",
    "ApiKeyChanged",
    "ChatMessagePosted",
    "reset_listeners_for_tests",
]
