"""Pytest configuration ensuring project root is importable.

Adds repository root and src/ to sys.path explicitly to avoid
interpreter/path quirks.
"""
from __future__ import annotations

import sys
from pathlib import Path
import os
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolate_config_env():  # noqa: D401
    """Ensure global config/env side effects do not leak between tests.

    - Clear aggregated config cache between tests
    - Restore MON_CONFIG_DIR to original value
    - Reset the process-wide update store
    """
    from core.config import clear_config_cache  # local import
    from core.updates import store

    prev = os.environ.get("MON_CONFIG_DIR")
    clear_config_cache()
    store.reset_for_tests()
    try:
        yield
    finally:
        clear_config_cache()
        store.reset_for_tests()
        if prev is None:
            os.environ.pop("MON_CONFIG_DIR", None)
        else:
            os.environ["MON_CONFIG_DIR"] = prev


def registry_response(*packages, status="success"):
    """Build a registry `packages/get` body from (name, version, notes) tuples."""
    out = []
    for pkg in packages:
        name, version, *rest = pkg
        notes = rest[0] if rest else None
        entry = {
            "name": name,
            "version": {
                "version": version,
                "compatible_core_version": "13",
            },
        }
        if notes:
            entry["version"]["notes"] = notes
        out.append(entry)
    return {"status": status, "packages": out}


@pytest.fixture
def make_registry_response():
    return registry_response


class RegistryStub:
    """Mock registry endpoint (httpx.MockTransport handler)."""

    def __init__(self, body=None, status_code=200):
        self.body = body if body is not None else registry_response()
        self.status_code = status_code
        self.requests = []

    def __call__(self, request):
        import httpx

        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def registry():
    return RegistryStub(
        registry_response(
            ("foo", "1.3.0", "https://example.test/foo/notes"),
            ("bar", "0.9.0"),
        )
    )


@pytest.fixture
def make_app(registry):
    """Factory: (app, runtime) wired to the registry stub, no config files."""
    import httpx

    from core.config import AggregatedConfig
    from core.modules import InstalledModule, StaticModuleProvider
    from core.session import SessionUser
    from core.settings import SettingsStore
    from core.updates import UpdateStore
    from outdated_notifier.api.app import create_app
    from outdated_notifier.api.runtime import build_runtime

    def _make(api_key="", users=None, modules=None):
        settings = SettingsStore()
        if api_key:
            settings.set_api_key(api_key)
        if modules is None:
            modules = [
                InstalledModule("foo", "Foo", "v1.2.0"),
                InstalledModule("bar", "Bar", "1.0.0"),
                InstalledModule("baz", "Baz", "0.1.0", active=False),
            ]
        rt = build_runtime(
            config=AggregatedConfig(),
            modules=StaticModuleProvider(modules),
            transport=httpx.MockTransport(registry),
            users=users or [SessionUser("gm", "GM", is_admin=True)],
            settings=settings,
            update_store=UpdateStore(),
        )
        return create_app(rt), rt

    return _make
