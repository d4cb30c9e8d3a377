"""Settings store for the module's single world-scoped setting (API key).

Values live under the module id namespace, mirroring the host's
`<module-id>.<key>` convention. When a path is given the namespace is
persisted as YAML after every change.
"""
from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, List

import yaml

from core.config.schemas.host import SettingsStoreConfig
from core.events import ApiKeyChanged, emit

logger = logging.getLogger(__name__)

MODULE_ID = "module-outdated-notifier"
API_KEY = "apiKey"

_DEFAULTS: Dict[str, Any] = {API_KEY: ""}

ChangeCallback = Callable[[Any], None]


class SettingsStore:
    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._values: Dict[str, Any] = dict(_DEFAULTS)
        self._callbacks: Dict[str, List[ChangeCallback]] = {}
        self._lock = RLock()
        if self._path is not None:
            self._load()

    # --- persistence -------------------------------------------------------
    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load settings from %s: %s", self._path, e)
            return
        ns = data.get(MODULE_ID) if isinstance(data, dict) else None
        if not isinstance(ns, dict):
            return
        for key in _DEFAULTS:
            if key in ns:
                self._values[key] = "" if ns[key] is None else str(ns[key])
        logger.info("Loaded settings from %s", self._path)

    def _save(self, values: Dict[str, Any]) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {MODULE_ID: dict(values)}
        self._path.write_text(
            yaml.safe_dump(payload, sort_keys=True), encoding="utf-8"
        )
        logger.info("Saved settings to %s", self._path)

    # --- access ------------------------------------------------------------
    def get(self, key: str) -> Any:
        if key not in _DEFAULTS:
            raise KeyError(f"Setting '{MODULE_ID}.{key}' is not registered")
        with self._lock:
            return self._values[key]

    def set(self, key: str, value: Any) -> bool:
        """Store `value`; returns True (and fires callbacks) only on change."""
        if key not in _DEFAULTS:
            raise KeyError(f"Setting '{MODULE_ID}.{key}' is not registered")
        value = "" if value is None else str(value).strip()
        with self._lock:
            if self._values[key] == value:
                return False
            updated = dict(self._values)
            updated[key] = value
            # persist first: a failed write leaves the old value in place
            self._save(updated)
            self._values = updated
            callbacks = list(self._callbacks.get(key, ()))
        if key == API_KEY:
            emit(ApiKeyChanged(module_id=MODULE_ID, is_set=bool(value)))
        for cb in callbacks:
            try:
                cb(value)
            except Exception:  # noqa: BLE001
                logger.exception("Settings change handler failed for %s", key)
        return True

    def on_change(self, key: str, callback: ChangeCallback) -> None:
        with self._lock:
            self._callbacks.setdefault(key, []).append(callback)

    # --- convenience -------------------------------------------------------
    def get_api_key(self) -> str:
        return self.get(API_KEY)

    def set_api_key(self, value: str) -> bool:
        return self.set(API_KEY, value)


def settings_from_config(cfg: SettingsStoreConfig) -> SettingsStore:
    return SettingsStore(cfg.path)


__all__ = ["MODULE_ID", "API_KEY", "SettingsStore", "settings_from_config"]
