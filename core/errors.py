"""Central Error Taxonomy enforcement."""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # update.check
    "auth-missing",
    "network-error",
    "protocol-error",
    # settings
    "license-wrong-name",
    "license-key-not-found",
    # config
    "config-invalid",
    "config-out-of-range",
    # infra
    "event-handler-error",
    "internal",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


def map_exception(e: Exception, phase: str) -> str:
    code = getattr(e, "error_type", None)
    if isinstance(code, str) and code in _ALLOWED_ERROR_TYPES:
        return code
    name = e.__class__.__name__.lower()
    msg = str(e).lower()
    if phase == "update.check":
        if "timeout" in name or "connect" in name or "http" in name:
            return "network-error"
        if "json" in name or "decode" in msg:
            return "protocol-error"
        return "internal"
    if phase == "config":
        return "config-invalid"
    return "internal"


__all__ = ["validate_error_type", "map_exception"]
