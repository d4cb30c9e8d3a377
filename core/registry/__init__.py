"""Package registry access.

Responsibilities:
- Wire models for the registry `packages/get` response (`package`)
- Async POST client authenticated with the user's API key (`client`)

The registry is expected to return one entry per package; indexing and
comparison live in `core.updates`.
"""
from .client import RegistryClient, build_request_payload  # noqa: F401
from .package import RemotePackage, RemoteVersion, PackageListResponse  # noqa: F401

__all__ = [
    "RegistryClient",
    "build_request_payload",
    "RemotePackage",
    "RemoteVersion",
    "PackageListResponse",
]
