"""Check-and-notify orchestration.

Outcomes of one `check_and_notify()`:
  - failed, no API key  -> "API key required" message to the current user
  - failed, other cause -> nothing posted (already logged by the checker)
  - N > 0 updates       -> store replaced, "updates available" whispered
                           to every administrator
  - 0 updates           -> store replaced, "all up to date" toast
The store is only replaced after a successful check.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from core.notify.messages import (
    build_all_up_to_date_message,
    build_api_key_required_message,
    build_updates_message,
)
from core.notify.sinks import NotificationSink
from core.session import SessionUser, admin_ids
from .checker import UpdateChecker
from .exceptions import AuthError
from .records import UpdateRecord
from .store import UpdateStore

logger = logging.getLogger(__name__)


class UpdateNotifier:
    def __init__(
        self,
        checker: UpdateChecker,
        sink: NotificationSink,
        update_store: UpdateStore,
        users: Callable[[], Sequence[SessionUser]],
        current_user_id: str,
        readme_url: str | None = None,
    ) -> None:
        self.checker = checker
        self._sink = sink
        self._store = update_store
        self._users = users
        self.current_user_id = current_user_id
        self.readme_url = readme_url

    async def check_and_notify(self) -> Optional[List[UpdateRecord]]:
        updates = await self.checker.check()

        if updates is None:
            if isinstance(self.checker.last_error, AuthError):
                self._sink.post(
                    build_api_key_required_message(self.readme_url),
                    [self.current_user_id],
                )
            return None

        self._store.replace(updates)
        if updates:
            recipients = admin_ids(self._users())
            logger.info(
                "%d module update(s) available, notifying %d administrator(s)",
                len(updates),
                len(recipients),
            )
            self._sink.post(build_updates_message(updates), recipients)
        else:
            self._sink.post(build_all_up_to_date_message(), [])
        return updates


__all__ = ["UpdateNotifier"]
