"""Update checking.

Exports the checking core (checker, records, store, predicate, chunked
iteration, errors). Orchestration lives in `core.updates.notifier` and
`core.updates.scheduler`; import those modules directly.
"""
from __future__ import annotations

from .exceptions import AuthError, NetworkError, ProtocolError, UpdateCheckError  # noqa: F401
from .records import UpdateRecord  # noqa: F401
from .chunking import process_in_chunks, DEFAULT_CHUNK_SIZE  # noqa: F401
from .version import is_newer_version, normalize_version  # noqa: F401
from .index import build_remote_package_map  # noqa: F401
from .store import UpdateStore, store  # noqa: F401
from .checker import CheckerState, UpdateChecker, get_module_update  # noqa: F401

__all__ = [
    "AuthError",
    "NetworkError",
    "ProtocolError",
    "UpdateCheckError",
    "UpdateRecord",
    "process_in_chunks",
    "DEFAULT_CHUNK_SIZE",
    "is_newer_version",
    "normalize_version",
    "build_remote_package_map",
    "UpdateStore",
    "store",
    "CheckerState",
    "UpdateChecker",
    "get_module_update",
]
