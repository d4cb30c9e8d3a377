"""Remote package index (identifier -> package)."""
from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from pydantic import ValidationError

from core.registry.package import RemotePackage
from .chunking import DEFAULT_CHUNK_SIZE, process_in_chunks

logger = logging.getLogger(__name__)


async def build_remote_package_map(
    packages: Sequence[Any],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Dict[str, RemotePackage]:
    """Index registry entries by package name in one chunked pass.

    Entries without `name` or `version` are skipped, as are entries whose
    version record does not validate. Duplicate names: last entry wins.
    """
    remote_map: Dict[str, RemotePackage] = {}
    skipped = 0

    def _add(pkg: Any) -> None:
        nonlocal skipped
        if not isinstance(pkg, dict) or not pkg.get("name") or not pkg.get("version"):
            skipped += 1
            return
        try:
            remote_map[pkg["name"]] = RemotePackage.model_validate(pkg)
        except ValidationError as e:
            skipped += 1
            logger.debug("Skipping malformed package %r: %s", pkg.get("name"), e)

    await process_in_chunks(packages, _add, chunk_size)
    if skipped:
        logger.debug("Skipped %d registry entries without name/version", skipped)
    return remote_map


__all__ = ["build_remote_package_map"]
