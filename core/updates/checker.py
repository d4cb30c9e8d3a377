"""Update checker: registry fetch, index, compare.

Flow per `check()`:
  1. fetch package list (one POST, key from the settings accessor)
  2. validate envelope (`status == "success"`, `packages` is a list)
  3. index packages by name (chunked)
  4. compare every active installed module against its entry (chunked)

AuthError / NetworkError / ProtocolError are logged, published as
`UpdateCheckFailed` and turned into the `None` result. The checker never
touches the update store or notification sinks; see `UpdateNotifier`.
"""
from __future__ import annotations

import enum
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, List, Optional, Protocol

from pydantic import ValidationError

from core.errors import map_exception, validate_error_type
from core.events import UpdateCheckCompleted, UpdateCheckFailed, UpdateCheckStarted, emit
from core.modules.installed import InstalledModule, ModuleProvider
from core.registry.package import PackageListResponse, RemotePackage
from .chunking import DEFAULT_CHUNK_SIZE, process_in_chunks
from .exceptions import AuthError, ProtocolError, UpdateCheckError
from .index import build_remote_package_map
from .records import UpdateRecord
from .version import NewerPredicate, is_newer_version, normalize_version

logger = logging.getLogger(__name__)


class PackageFetcher(Protocol):
    package_type: str
    host_version: str

    def fetch_package_list(
        self, api_key: str | None
    ) -> Awaitable[Any]:  # noqa: D401
        ...


class CheckerState(str, enum.Enum):
    IDLE = "idle"
    CHECKING = "checking"


def get_module_update(
    module: InstalledModule,
    remote: Optional[RemotePackage],
    is_newer: NewerPredicate = is_newer_version,
) -> Optional[UpdateRecord]:
    """Return an UpdateRecord if `remote` is strictly newer than `module`."""
    if remote is None or remote.version is None:
        return None

    # a few maintainers register versions as "v1.2.3"
    current = normalize_version(module.version)
    latest = normalize_version(remote.version.version)

    if not is_newer(latest, current):
        return None

    return UpdateRecord(
        id=module.id,
        title=module.title,
        current=current,
        latest=latest,
        compatible_core=remote.version.compatible_core_version,
        release_notes=remote.version.notes or None,
    )


def parse_package_list(data: Any) -> PackageListResponse:
    if not isinstance(data, dict):
        raise ProtocolError("Invalid response from package repository")
    try:
        response = PackageListResponse.model_validate(data)
    except ValidationError as e:
        raise ProtocolError(
            f"Invalid response from package repository: {e}"
        ) from e
    if not response.ok:
        raise ProtocolError(
            "Invalid response from package repository "
            f"(status={response.status!r})"
        )
    return response


class UpdateChecker:
    def __init__(
        self,
        api_key: Callable[[], str | None],
        modules: ModuleProvider,
        fetcher: PackageFetcher,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        is_newer: NewerPredicate = is_newer_version,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1 (got {chunk_size})")
        self._api_key = api_key
        self._modules = modules
        self._fetcher = fetcher
        self.chunk_size = chunk_size
        self._is_newer = is_newer
        self._state = CheckerState.IDLE
        self.last_error: UpdateCheckError | None = None

    @property
    def state(self) -> CheckerState:
        return self._state

    async def check(self) -> Optional[List[UpdateRecord]]:
        """Run one check; list of updates (possibly empty) or None on failure."""
        check_id = uuid.uuid4().hex[:12]
        t0 = time.time()
        self._state = CheckerState.CHECKING
        self.last_error = None
        emit(
            UpdateCheckStarted(
                check_id=check_id,
                host_version=getattr(self._fetcher, "host_version", ""),
                package_type=getattr(self._fetcher, "package_type", ""),
            )
        )
        try:
            api_key = self._api_key()
            if not api_key:
                raise AuthError("Registry API key is not configured")
            data = await self._fetcher.fetch_package_list(api_key)
            response = parse_package_list(data)
            remote_map = await build_remote_package_map(
                response.packages, self.chunk_size
            )
            installed = [m for m in self._modules.list_modules() if m.active]
            updates = await self._compare(installed, remote_map)
        except UpdateCheckError as e:
            self._fail(check_id, e, t0)
            return None
        except Exception as e:  # noqa: BLE001
            # unexpected provider/predicate bug: still a failed check
            logger.exception("Failed to check for updates")
            wrapped = UpdateCheckError(str(e))
            wrapped.error_type = map_exception(e, "update.check")
            self._fail(check_id, wrapped, t0, log=False)
            return None
        finally:
            self._state = CheckerState.IDLE

        latency_ms = int((time.time() - t0) * 1000)
        logger.info(
            "Update check %s finished: %d update(s) across %d active module(s)",
            check_id,
            len(updates),
            len(installed),
        )
        emit(
            UpdateCheckCompleted(
                check_id=check_id,
                updates=len(updates),
                modules_scanned=len(installed),
                remote_packages=len(remote_map),
                latency_ms=latency_ms,
            )
        )
        return updates

    async def _compare(
        self,
        installed: List[InstalledModule],
        remote_map: dict[str, RemotePackage],
    ) -> List[UpdateRecord]:
        updates: List[UpdateRecord] = []

        def _visit(module: InstalledModule) -> None:
            update = get_module_update(
                module, remote_map.get(module.id), self._is_newer
            )
            if update is not None:
                updates.append(update)

        await process_in_chunks(installed, _visit, self.chunk_size)
        return updates

    def _fail(
        self,
        check_id: str,
        error: UpdateCheckError,
        t0: float,
        log: bool = True,
    ) -> None:
        self.last_error = error
        code = validate_error_type(error.error_type)
        if log:
            if code == "auth-missing":
                logger.warning("Update check skipped: %s", error)
            else:
                logger.error("Failed to check for updates: %s", error)
        emit(
            UpdateCheckFailed(
                check_id=check_id,
                error_type=code,
                message=str(error),
                latency_ms=int((time.time() - t0) * 1000),
            )
        )


__all__ = [
    "UpdateChecker",
    "CheckerState",
    "PackageFetcher",
    "get_module_update",
    "parse_package_list",
]
