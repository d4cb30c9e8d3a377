"""Runtime wiring: builds the checker stack from config.

One Runtime per app instance. Tests pass their own pieces (module provider,
HTTP transport, users) through `build_runtime`.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

import httpx

from core.config import AggregatedConfig, get_config
from core.logging_setup import configure_logging
from core.modules import ModuleProvider, provider_from_config
from core.notify.sinks import EventBusSink, FanOutSink, LoggingSink, MemorySink
from core.registry.client import RegistryClient
from core.session import SessionUser
from core.settings import API_KEY, SettingsStore, settings_from_config
from core.updates import UpdateChecker, UpdateRecord, UpdateStore, store
from core.updates.notifier import UpdateNotifier

logger = logging.getLogger(__name__)

LOCAL_ADMIN = SessionUser(id="local-admin", name="Gamemaster", is_admin=True)


@dataclass
class Runtime:
    config: AggregatedConfig
    settings: SettingsStore
    modules: ModuleProvider
    checker: UpdateChecker
    notifier: UpdateNotifier
    store: UpdateStore
    messages: MemorySink
    users: List[SessionUser] = field(default_factory=lambda: [LOCAL_ADMIN])
    pending: Optional["asyncio.Task[Optional[List[UpdateRecord]]]"] = None
    # strong refs: the loop only keeps weak references to tasks
    tasks: Set["asyncio.Task[Optional[List[UpdateRecord]]]"] = field(
        default_factory=set
    )

    def _on_api_key_changed(self, _value: str) -> None:
        # changing the key re-runs the check (same as the host setting hook)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.info("API key changed outside event loop; check not scheduled")
            return
        task = loop.create_task(
            self.notifier.check_and_notify(), name="api-key-update-check"
        )
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        self.pending = task


def build_runtime(
    config: AggregatedConfig | None = None,
    modules: ModuleProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    users: Sequence[SessionUser] | None = None,
    settings: SettingsStore | None = None,
    update_store: UpdateStore | None = None,
) -> Runtime:
    cfg = config or get_config()
    configure_logging(cfg.logging)
    settings = settings or settings_from_config(cfg.settings)
    modules = modules or provider_from_config(cfg.modules)
    client = RegistryClient.from_config(cfg.notifier, transport=transport)
    checker = UpdateChecker(
        api_key=settings.get_api_key,
        modules=modules,
        fetcher=client,
        chunk_size=cfg.notifier.chunk_size,
    )
    memory = MemorySink()
    sink = FanOutSink(memory, EventBusSink(), LoggingSink())
    user_list = list(users) if users is not None else [LOCAL_ADMIN]
    update_store = update_store or store
    notifier = UpdateNotifier(
        checker=checker,
        sink=sink,
        update_store=update_store,
        users=lambda: user_list,
        current_user_id=user_list[0].id if user_list else LOCAL_ADMIN.id,
        readme_url=cfg.notifier.readme_url,
    )
    runtime = Runtime(
        config=cfg,
        settings=settings,
        modules=modules,
        checker=checker,
        notifier=notifier,
        store=update_store,
        messages=memory,
        users=user_list,
    )
    settings.on_change(API_KEY, runtime._on_api_key_changed)
    return runtime


__all__ = ["Runtime", "build_runtime", "LOCAL_ADMIN"]
