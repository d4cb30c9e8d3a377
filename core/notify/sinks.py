"""Notification sinks.

A sink receives a Message plus the user ids it is whispered to. An empty
recipient list means a local toast for the current user.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from time import time
from typing import Deque, List, Protocol, Sequence

from core.events import ChatMessagePosted, emit
from .messages import MODULE_NAME, Message, render_text

logger = logging.getLogger(__name__)

MAX_MESSAGES = 100


class NotificationSink(Protocol):
    def post(self, message: Message, whisper: Sequence[str] = ()) -> None:  # noqa: D401
        ...


@dataclass(slots=True)
class PostedMessage:
    message: Message
    whisper: List[str]
    ts: float

    def visible_to(self, user_id: str) -> bool:
        return not self.whisper or user_id in self.whisper


class MemorySink:
    """Keeps the last MAX_MESSAGES messages (read by the HTTP API)."""

    def __init__(self, maxlen: int = MAX_MESSAGES) -> None:
        self._messages: Deque[PostedMessage] = deque(maxlen=maxlen)

    def post(self, message: Message, whisper: Sequence[str] = ()) -> None:
        self._messages.append(
            PostedMessage(message=message, whisper=list(whisper), ts=time())
        )

    def messages(self, user_id: str | None = None) -> List[PostedMessage]:
        if user_id is None:
            return list(self._messages)
        return [m for m in self._messages if m.visible_to(user_id)]

    def clear(self) -> None:
        self._messages.clear()


class EventBusSink:
    """Publishes `ChatMessagePosted`; the host chat layer subscribes to it."""

    def post(self, message: Message, whisper: Sequence[str] = ()) -> None:
        emit(
            ChatMessagePosted(
                kind=message.kind,
                title=message.title,
                content=message.to_dict(),
                whisper=list(whisper),
                speaker=MODULE_NAME,
            )
        )


class LoggingSink:
    def post(self, message: Message, whisper: Sequence[str] = ()) -> None:
        logger.info("%s", render_text(message))


class FanOutSink:
    """Delivers to several sinks; one failing sink does not stop the rest."""

    def __init__(self, *sinks: NotificationSink) -> None:
        self._sinks = list(sinks)

    def post(self, message: Message, whisper: Sequence[str] = ()) -> None:
        for sink in self._sinks:
            try:
                sink.post(message, whisper)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "Notification sink %s failed", type(sink).__name__
                )


__all__ = [
    "NotificationSink",
    "PostedMessage",
    "MemorySink",
    "EventBusSink",
    "LoggingSink",
    "FanOutSink",
]
