"""Host environment schemas: settings file and installed modules."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SettingsStoreConfig(BaseModel):
    # None keeps the API key in memory only
    path: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class InstalledModulesConfig(BaseModel):
    dir: Optional[str] = None
    active: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
