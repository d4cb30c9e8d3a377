"""Async registry client: one authenticated POST per check."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

import httpx

from core import metrics
from core.config.schemas.notifier import DEFAULT_ENDPOINT, NotifierConfig
from core.updates.exceptions import AuthError, NetworkError, ProtocolError

logger = logging.getLogger(__name__)


def build_request_payload(package_type: str, host_version: str) -> Dict[str, str]:
    return {"type": package_type, "version": host_version}


class RegistryClient:
    """POSTs `{type, version}` to the registry and returns the decoded body.

    `transport` lets tests plug an `httpx.MockTransport`; production uses the
    default network transport. A fresh `AsyncClient` is opened per call since
    checks happen at most a few times per session.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        package_type: str = "module",
        host_version: str = "",
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.package_type = package_type
        self.host_version = host_version
        self.timeout_s = timeout_s
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        cfg: NotifierConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "RegistryClient":
        return cls(
            endpoint=cfg.endpoint,
            package_type=cfg.package_type,
            host_version=cfg.host_version,
            timeout_s=cfg.request_timeout_s,
            transport=transport,
        )

    async def fetch_package_list(self, api_key: str | None) -> Any:
        if not api_key:
            raise AuthError("Registry API key is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"APIKey:{api_key}",
        }
        body = build_request_payload(self.package_type, self.host_version)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint, json=body, headers=headers
                )
        except httpx.HTTPError as e:
            metrics.inc("registry_requests_total", {"status": "error"})
            raise NetworkError(f"Failed to fetch package list: {e}") from e

        metrics.inc(
            "registry_requests_total", {"status": response.status_code}
        )
        if not response.is_success:
            raise NetworkError(
                "Failed to fetch package list: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(
                f"Registry response is not valid JSON: {e}"
            ) from e
        logger.debug(
            "Fetched package list (%d bytes) for %s/%s",
            len(response.content),
            self.package_type,
            self.host_version,
        )
        return data


__all__ = ["RegistryClient", "build_request_payload"]
