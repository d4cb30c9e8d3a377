"""Per-session scheduling of the initial update check.

Exactly one client runs the check: the coordinator, i.e. the active
administrator with the smallest user id. The check starts after a fixed
delay so the session can settle. There is no recurring re-check.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from core.session import SessionUser, elect_coordinator
from .notifier import UpdateNotifier

logger = logging.getLogger(__name__)

INITIAL_CHECK_DELAY_S = 7.5


def is_coordinator(users: Sequence[SessionUser], user_id: str) -> bool:
    coordinator = elect_coordinator(users)
    return coordinator is not None and coordinator.id == user_id


async def _delayed_check(notifier: UpdateNotifier, delay_s: float) -> None:
    await asyncio.sleep(delay_s)
    await notifier.check_and_notify()


def schedule_initial_check(
    notifier: UpdateNotifier,
    users: Sequence[SessionUser],
    current_user_id: str,
    delay_s: float = INITIAL_CHECK_DELAY_S,
) -> Optional["asyncio.Task[None]"]:
    """Schedule the session's single check; None when this user is not elected.

    Must be called from a running event loop.
    """
    current = next((u for u in users if u.id == current_user_id), None)
    if current is None or not current.is_admin:
        return None
    if not is_coordinator(users, current_user_id):
        logger.debug(
            "User %s is not the update check coordinator", current_user_id
        )
        return None
    logger.info("Scheduling update check in %.1fs", delay_s)
    return asyncio.get_running_loop().create_task(
        _delayed_check(notifier, delay_s), name="initial-update-check"
    )


__all__ = ["schedule_initial_check", "is_coordinator", "INITIAL_CHECK_DELAY_S"]
