"""Module settings: API credential store + license file key extraction."""
from __future__ import annotations

from .store import MODULE_ID, API_KEY, SettingsStore, settings_from_config  # noqa: F401
from .license import LicenseFileError, extract_api_key, LICENSE_FILE_NAME  # noqa: F401

__all__ = [
    "MODULE_ID",
    "API_KEY",
    "SettingsStore",
    "settings_from_config",
    "LicenseFileError",
    "extract_api_key",
    "LICENSE_FILE_NAME",
]
