"""Chunked data-parallel map over the leading axis of an array.

Every chunk is a disjoint, contiguous slice, so workers never share an
output region and no locking is needed. The heavy numpy / scipy kernels
release the GIL, which makes a thread pool sufficient.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

import numpy as np

T = TypeVar("T")


def split_rows(length: int, parts: int) -> list[tuple[int, int]]:
    """Split ``range(length)`` into at most *parts* contiguous ``(start, stop)`` pairs."""
    parts = max(1, int(parts))
    if length <= 0:
        return []
    step = (length + parts - 1) // parts
    return [(i, min(i + step, length)) for i in range(0, length, step)]


def map_chunks(
    func: Callable[[np.ndarray], T],
    array: np.ndarray,
    workers: int = 1,
) -> list[T]:
    """Apply *func* to disjoint row chunks of *array* and gather the results.

    Args:
        func: Called once per chunk with a view ``array[start:stop]``.
        array: Any array; chunks are taken along axis 0.
        workers: Thread count. ``<= 1`` runs inline on a single chunk.

    Returns:
        Per-chunk results in row order.
    """
    if workers <= 1 or len(array) < 2:
        return [func(array)]

    chunks = split_rows(len(array), workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(func, array[s:e]) for s, e in chunks]
        return [f.result() for f in futures]
