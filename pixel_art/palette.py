"""Palette extraction: k-means in normalised RGB, then 5-bit channel reduction."""

from __future__ import annotations

import logging
import time

import numpy as np
from sklearn.cluster import KMeans

logger = logging.getLogger(__name__)

# 5 bits per channel = 15-bit colour
DEFAULT_BITS = 5


def empty_palette() -> np.ndarray:
    palette = np.empty((0, 3), dtype=np.uint8)
    palette.flags.writeable = False
    return palette


def reduce_bit_depth(colors: np.ndarray, bits: int = DEFAULT_BITS) -> np.ndarray:
    """Zero the low ``8 - bits`` bits of every channel.

    ``bits=5`` maps each channel to a multiple of 8 (``(c >> 3) << 3``).
    Applying it twice changes nothing.
    """
    if not 1 <= bits <= 8:
        msg = f"bits must be in 1..8, got {bits}"
        raise ValueError(msg)
    shift = 8 - bits
    colors = np.asarray(colors, dtype=np.uint8)
    return (colors >> shift) << shift


def centroids_to_rgb(centroids: np.ndarray) -> np.ndarray:
    """Convert (K, 3) float RGB in [0, 1] to uint8 via ``round(c * 255)``."""
    return np.clip(np.rint(centroids * 255.0), 0, 255).astype(np.uint8)


def _relative_tolerance(samples: np.ndarray, tolerance: float) -> float:
    """Translate an absolute threshold into scikit-learn's ``tol``.

    scikit-learn stops once the summed squared centre shift drops below
    ``tol * mean(var(X))``. *tolerance* is that same shift measured in
    8-bit RGB units.
    """
    mean_var = float(np.mean(np.var(samples, axis=0)))
    if mean_var == 0.0:
        return 0.0
    return (tolerance / 255.0**2) / mean_var


def extract_palette(
    samples: np.ndarray,
    k: int,
    seed: int = 0,
    max_iter: int = 1,
    tolerance: float = 5.0,
) -> np.ndarray:
    """Find up to *k* representative colours of *samples*.

    A single seeded k-means++ run is performed, so the same samples and
    seed always yield the same palette. The cluster count is capped at the
    number of distinct samples; with no samples or ``k == 0`` the palette
    is empty.

    Args:
        samples: (N, 3) float RGB in [0, 1].
        k: Requested palette size.
        seed: Clustering seed.
        max_iter: Iteration cap.
        tolerance: Convergence threshold on the summed squared centroid
            shift, in 8-bit RGB units.

    Returns:
        (K, 3) uint8 read-only palette, ``K <= k``, 5 bits per channel.
        Duplicates are kept.
    """
    samples = np.asarray(samples, dtype=np.float64).reshape(-1, 3)
    if k <= 0 or len(samples) == 0:
        logger.info("No samples or colours requested - palette is empty")
        return empty_palette()

    n_distinct = len(np.unique(samples, axis=0))
    n_clusters = min(k, n_distinct)
    if n_clusters < k:
        logger.info(
            "Only %d distinct colours available, reducing palette from %d",
            n_distinct, k,
        )

    t0 = time.perf_counter()
    model = KMeans(
        n_clusters=n_clusters,
        init="k-means++",
        n_init=1,
        max_iter=max_iter,
        tol=_relative_tolerance(samples, tolerance),
        random_state=seed,
    ).fit(samples)
    logger.info(
        "k-means: %d clusters over %d samples, %d iterations (%.2f s)",
        n_clusters, len(samples), model.n_iter_, time.perf_counter() - t0,
    )

    palette = reduce_bit_depth(centroids_to_rgb(model.cluster_centers_))
    palette.flags.writeable = False
    return palette


def palette_to_hex(palette: np.ndarray) -> list[str]:
    """Format palette entries as ``#RRGGBB`` strings."""
    return [
        f"#{int(r):02X}{int(g):02X}{int(b):02X}"
        for r, g, b in np.asarray(palette, dtype=np.uint8)
    ]
