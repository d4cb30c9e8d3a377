"""Cooperative chunked iteration.

Large registry catalogs (tens of thousands of packages) are scanned in
bounded slices; between slices control returns to the event loop so other
tasks (HTTP handlers, UI pushes) keep running.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_CHUNK_SIZE = 500


async def process_in_chunks(
    items: Sequence[T],
    callback: Callable[[T], None],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Call `callback` for every item, yielding to the loop after each slice.

    Returns the number of slices processed, ceil(len(items) / chunk_size);
    the loop yields once per slice. An empty sequence never yields.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1 (got {chunk_size})")
    total = len(items)
    slices = 0
    index = 0
    while index < total:
        end = min(index + chunk_size, total)
        for i in range(index, end):
            callback(items[i])
        index = end
        slices += 1
        await asyncio.sleep(0)
    return slices


__all__ = ["process_in_chunks", "DEFAULT_CHUNK_SIZE"]
