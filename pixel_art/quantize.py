"""Nearest-palette colour reduction with squared Euclidean RGB distance."""

from __future__ import annotations

import logging
import time

import numpy as np
from scipy.spatial.distance import cdist

from pixel_art.parallel import map_chunks

logger = logging.getLogger(__name__)


def squared_distance(first, second) -> int:
    """``dr² + dg² + db²`` between two RGB colours.

    This is the reference metric for quantisation: the vectorised
    ``nearest_indices`` must pick the same entry as a scan with this
    function would.

    Channels are widened to signed ints, so uint8 input cannot wrap.
    """
    dr = int(first[0]) - int(second[0])
    dg = int(first[1]) - int(second[1])
    db = int(first[2]) - int(second[2])
    return dr * dr + dg * dg + db * db


def nearest_indices(
    pixels: np.ndarray,
    palette: np.ndarray,
    chunk_size: int = 16_384,
) -> np.ndarray:
    """Index of the closest palette entry for each pixel.

    Args:
        pixels: (N, 3) RGB.
        palette: (K, 3) RGB, ``K >= 1``.
        chunk_size: Pixels per distance block (controls peak RAM).

    Returns:
        (N,) int array, the argmin of ``squared_distance`` per pixel.
        On a tie the earliest palette entry wins.
    """
    # float64 holds every 8-bit squared distance exactly
    p = np.asarray(palette, dtype=np.float64)
    x = np.asarray(pixels, dtype=np.float64)

    n = len(x)
    out = np.empty(n, dtype=np.intp)
    for i in range(0, n, chunk_size):
        j = min(i + chunk_size, n)
        out[i:j] = np.argmin(cdist(x[i:j], p, metric="sqeuclidean"), axis=1)
    return out


def reduce_colors(
    image: np.ndarray,
    palette: np.ndarray,
    workers: int = 1,
) -> np.ndarray:
    """Replace every pixel's RGB with its nearest palette colour.

    Each row chunk is handled independently on a thread pool and written
    to its own slice of the output.

    Args:
        image: (H, W, 4) uint8 RGBA.
        palette: (K, 3) uint8. An empty palette turns every pixel black.
        workers: Thread count.

    Returns:
        (H, W, 4) uint8 - a new array; alpha is copied from *image*.
    """
    palette = np.asarray(palette, dtype=np.uint8).reshape(-1, 3)
    result = np.array(image, dtype=np.uint8, copy=True)

    if len(palette) == 0:
        result[..., :3] = 0
        return result

    t0 = time.perf_counter()

    def _recolor(rows: np.ndarray) -> None:
        flat = rows.reshape(-1, 4)
        idx = nearest_indices(flat[:, :3], palette)
        rows[..., :3] = palette[idx].reshape(rows.shape[:-1] + (3,))

    map_chunks(_recolor, result, workers)
    logger.debug(
        "Quantised %d pixels against %d colours (%.2f s)",
        result.shape[0] * result.shape[1], len(palette), time.perf_counter() - t0,
    )
    return result
