"""Version helpers: leading "v" normalization and the newer-than predicate.

`is_newer_version` prefers PEP 440 ordering (`packaging.version`) and falls
back to a dotted-segment comparison for strings packaging rejects
(e.g. "1.2.3-hotfix_2", "2023.10.x"):
  - numeric segments compare numerically ("12" > "5")
  - other segments compare lexically
  - when all shared segments are equal the longer version wins
"""
from __future__ import annotations

from itertools import zip_longest
from typing import Callable

from packaging.version import InvalidVersion, Version

NewerPredicate = Callable[[str, str], bool]


def normalize_version(version: str) -> str:
    """Strip exactly one leading literal "v" ("v1.2" -> "1.2", "vv1" -> "v1")."""
    if version.startswith("v"):
        return version[1:]
    return version


def is_newer_version(candidate: str, current: str) -> bool:
    """True if `candidate` is strictly newer than `current`.

    Build metadata ("+build5") never affects precedence, as in semver.
    """
    candidate = _strip_build(candidate)
    current = _strip_build(current)
    try:
        return Version(candidate) > Version(current)
    except InvalidVersion:
        return _compare_segments(candidate, current) > 0


def _strip_build(version: str) -> str:
    return version.split("+", 1)[0]


def _compare_segments(candidate: str, current: str) -> int:
    cand_parts = candidate.split(".")
    cur_parts = current.split(".")
    for cand, cur in zip_longest(cand_parts, cur_parts):
        if cur is None:
            return 1
        if cand is None:
            return -1
        # isdecimal: int() rejects other Unicode digits ("²")
        if cand.isdecimal() and cur.isdecimal():
            if int(cand) != int(cur):
                return 1 if int(cand) > int(cur) else -1
            continue
        if cand != cur:
            return 1 if cand > cur else -1
    return 0


__all__ = ["normalize_version", "is_newer_version", "NewerPredicate"]
