"""Update check exception hierarchy.

Each class carries the taxonomy code (see `core.errors`) reported in
`UpdateCheckFailed` events and metrics.
"""
from __future__ import annotations


class UpdateCheckError(Exception):
    """Base update check failure."""

    error_type = "internal"


class AuthError(UpdateCheckError):
    """No registry API key configured; the request is never attempted."""

    error_type = "auth-missing"


class NetworkError(UpdateCheckError):
    """Transport failure or non-success HTTP status from the registry."""

    error_type = "network-error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(UpdateCheckError):
    """Registry answered with an unexpected payload shape."""

    error_type = "protocol-error"
