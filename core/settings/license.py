"""API key extraction from the host's `license.mjs` file.

The host stores the user's registry key in its license file as
`static LICENSE_API_KEY="...";`. Users drop that file on the settings form
instead of copying the key by hand.
"""
from __future__ import annotations

import re
from pathlib import PurePath

LICENSE_FILE_NAME = "license.mjs"

_KEY_RE = re.compile(r'static LICENSE_API_KEY="([^"]*)";')


class LicenseFileError(ValueError):
    """Dropped file cannot provide an API key.

    error_type: license-wrong-name | license-key-not-found
    """

    def __init__(self, error_type: str, message: str):
        super().__init__(message)
        self.error_type = error_type


def extract_api_key(filename: str, contents: str) -> str:
    if PurePath(filename).name != LICENSE_FILE_NAME:
        raise LicenseFileError(
            "license-wrong-name",
            f"Expected a file named {LICENSE_FILE_NAME}, got {filename!r}",
        )
    match = _KEY_RE.search(contents)
    if not match or not match.group(1):
        raise LicenseFileError(
            "license-key-not-found",
            f"No LICENSE_API_KEY found in {LICENSE_FILE_NAME}",
        )
    return match.group(1)


__all__ = ["LicenseFileError", "extract_api_key", "LICENSE_FILE_NAME"]
