"""Configuration loading & validation.

- Per-section schemas live in `core.config.schemas.*`.
- `schema_version` (missing → assume 1, logged).
- AggregatedConfig holds the validated sections.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV (MON__*).

Unknown keys are rejected at every level.
"""
from __future__ import annotations

import logging
import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict, Type

import yaml
from core import metrics
from core.errors import validate_error_type
from pydantic import BaseModel, ConfigDict

from .schemas.notifier import NotifierConfig
from .schemas.host import InstalledModulesConfig, SettingsStoreConfig
from .schemas.observability import LoggingConfig

logger = logging.getLogger(__name__)


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    notifier: NotifierConfig = NotifierConfig()
    settings: SettingsStoreConfig = SettingsStoreConfig()
    modules: InstalledModulesConfig = InstalledModulesConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
ENV_PREFIX = "MON__"

SUB_SCHEMA_CLASSES: Dict[str, Type[BaseModel]] = {
    "notifier": NotifierConfig,
    "settings": SettingsStoreConfig,
    "modules": InstalledModulesConfig,
    "logging": LoggingConfig,
}


class ConfigError(Exception):
    pass


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path.name} must be a mapping")
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        leaf = path_parts[-1]
        # host_version stays a string even when it looks numeric ("13.345")
        if leaf in {"host_version", "package_type", "endpoint", "path"}:
            target[leaf] = value
        elif leaf == "active":
            target[leaf] = [p.strip() for p in value.split(",") if p.strip()]
        else:
            target[leaf] = _cast_env_value(value)
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        logger.info(
            "config-env-override path=%s value=*** source=env", dotted_path
        )


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv("MON_CONFIG_DIR", DEFAULT_CONFIG_DIR))


def _migrate_legacy(data: Dict[str, Any]) -> Dict[str, Any]:
    if "schema_version" not in data:
        logger.info("config-migration schema_version missing -> assuming 1")
        data["schema_version"] = 1
    return data


def _validate_sub_schemas(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Validate each known section via its schema class."""
    validated: Dict[str, Any] = {}
    for name, cls in SUB_SCHEMA_CLASSES.items():
        if name in raw:
            try:
                validated[name] = cls.model_validate(raw[name] or {})
            except Exception as e:  # noqa: BLE001
                metrics.inc(
                    "config_validation_errors_total",
                    {"path": name, "code": "config-invalid"},
                )
                raise ConfigError(
                    f"Validation failed for section '{name}': {e}"
                ) from e
    return validated


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Apply cross-field normalizations and bounds validation.

    Normalizations:
      - notifier.initial_check_delay_s: negative -> 0 (clip).
    Validations (error → raise):
      - notifier.chunk_size >= 1
      - notifier.request_timeout_s > 0
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    notifier = raw.get("notifier")
    if not isinstance(notifier, dict):
        return

    delay = notifier.get("initial_check_delay_s")
    if isinstance(delay, (int, float)) and delay < 0:
        notifier["initial_check_delay_s"] = 0

    chunk = notifier.get("chunk_size")
    if isinstance(chunk, int) and chunk < 1:
        errors.append(
            ("notifier.chunk_size", "config-out-of-range", ">=1 required")
        )

    timeout = notifier.get("request_timeout_s")
    if isinstance(timeout, (int, float)) and timeout <= 0:
        errors.append(
            (
                "notifier.request_timeout_s",
                "config-out-of-range",
                ">0 required",
            )
        )

    if errors:
        for path, code, _ in errors:
            validate_error_type(code)
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        migrated = _migrate_legacy(merged)
        _normalize_and_validate(migrated)
        validated_sub = _validate_sub_schemas(migrated)
        unknown = set(migrated) - set(SUB_SCHEMA_CLASSES) - {"schema_version"}
        if unknown:
            raise ConfigError(
                f"Unknown config section(s): {', '.join(sorted(unknown))}"
            )
        try:
            return AggregatedConfig(
                schema_version=migrated["schema_version"], **validated_sub
            )
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()
