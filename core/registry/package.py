"""Registry package schema."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class RemoteVersion(BaseModel):
    version: str
    compatible_core_version: Optional[str] = None
    notes: Optional[str] = None

    # registry adds fields over time (manifest, download, ...)
    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("version", "compatible_core_version", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> Any:  # noqa: D401
        # a few packages register bare numbers (e.g. 13)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes(cls, v: Any) -> Any:  # noqa: D401
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RemotePackage(BaseModel):
    name: str
    version: RemoteVersion

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v


class PackageListResponse(BaseModel):
    """Top-level response envelope.

    `packages` stays raw: entries are validated one by one while indexing so
    a single malformed package cannot fail the whole check.
    """
    status: str
    packages: List[Any]

    model_config = ConfigDict(extra="ignore")

    @property
    def ok(self) -> bool:
        return self.status == "success"
