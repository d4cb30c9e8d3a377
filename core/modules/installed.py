"""Installed module model and providers.

Manifest layout follows the host application: one directory per module,
each holding a `module.json` with at least `id` (legacy: `name`), `title`
and `version`. Active state is not part of the manifest; the host keeps it
in world configuration, passed here as `active_ids`.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Protocol, Sequence

from core.config.schemas.host import InstalledModulesConfig

logger = logging.getLogger(__name__)

MANIFEST_NAME = "module.json"


@dataclass(frozen=True, slots=True)
class InstalledModule:
    id: str
    title: str
    version: str
    active: bool = True


class ModuleProvider(Protocol):
    def list_modules(self) -> Sequence[InstalledModule]:  # noqa: D401
        ...


class StaticModuleProvider:
    def __init__(self, modules: Iterable[InstalledModule] = ()) -> None:
        self._modules: List[InstalledModule] = list(modules)

    def list_modules(self) -> Sequence[InstalledModule]:
        return list(self._modules)


def _iter_manifest_files(modules_dir: Path):
    for path in sorted(modules_dir.glob(f"*/{MANIFEST_NAME}")):
        if path.is_file():
            yield path


def _load_manifest(path: Path, active_ids: set[str]) -> InstalledModule | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Invalid module manifest %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Invalid module manifest %s: not an object", path)
        return None
    module_id = data.get("id") or data.get("name")
    version = data.get("version")
    if not isinstance(module_id, str) or not module_id:
        logger.warning("Module manifest %s has no id", path)
        return None
    if version is None:
        logger.warning("Module manifest %s has no version", path)
        return None
    title = data.get("title")
    return InstalledModule(
        id=module_id,
        title=title if isinstance(title, str) and title else module_id,
        version=str(version),
        active=module_id in active_ids,
    )


def load_installed_modules(
    modules_dir: str | Path,
    active_ids: Iterable[str] = (),
) -> List[InstalledModule]:
    """Read every `<modules_dir>/*/module.json` (sorted by directory name)."""
    root = Path(modules_dir)
    if not root.is_dir():
        logger.warning("Modules directory not found: %s", root)
        return []
    active = set(active_ids)
    modules: List[InstalledModule] = []
    for mf in _iter_manifest_files(root):
        mod = _load_manifest(mf, active)
        if mod is not None:
            modules.append(mod)
    return modules


class DirectoryModuleProvider:
    """Re-reads the modules directory on every call."""

    def __init__(
        self, modules_dir: str | Path, active_ids: Iterable[str] = ()
    ) -> None:
        self.modules_dir = Path(modules_dir)
        self.active_ids = list(active_ids)

    def list_modules(self) -> Sequence[InstalledModule]:
        return load_installed_modules(self.modules_dir, self.active_ids)


def provider_from_config(cfg: InstalledModulesConfig) -> ModuleProvider:
    if cfg.dir:
        return DirectoryModuleProvider(cfg.dir, cfg.active)
    return StaticModuleProvider()


__all__ = [
    "InstalledModule",
    "ModuleProvider",
    "StaticModuleProvider",
    "DirectoryModuleProvider",
    "load_installed_modules",
    "provider_from_config",
]
