"""Installed modules package.

Exposes the read-only view of locally installed add-ons:
 - InstalledModule dataclass
 - ModuleProvider protocol (anything with `list_modules()`)
 - StaticModuleProvider: fixed list (tests, embedding hosts)
 - DirectoryModuleProvider: scans `<dir>/*/module.json`
"""
from __future__ import annotations

from .installed import (  # noqa: F401
    InstalledModule,
    ModuleProvider,
    StaticModuleProvider,
    DirectoryModuleProvider,
    load_installed_modules,
    provider_from_config,
)

__all__ = [
    "InstalledModule",
    "ModuleProvider",
    "StaticModuleProvider",
    "DirectoryModuleProvider",
    "load_installed_modules",
    "provider_from_config",
]
