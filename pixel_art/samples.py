"""Turn an RGBA image into normalised RGB samples for clustering."""

from __future__ import annotations

import logging

import numpy as np
from skimage.util import img_as_float

from pixel_art.parallel import map_chunks

logger = logging.getLogger(__name__)


def is_opaque(alpha: np.ndarray) -> np.ndarray:
    """Boolean mask of fully opaque alpha values.

    Integer channels are opaque at the dtype maximum (255 for uint8,
    65535 for uint16); float channels at 1.0.
    """
    alpha = np.asarray(alpha)
    if np.issubdtype(alpha.dtype, np.integer):
        return alpha == np.iinfo(alpha.dtype).max
    return alpha >= 1.0


def _rows_to_samples(rows: np.ndarray, include_transparent: bool) -> np.ndarray:
    pixels = rows.reshape(-1, rows.shape[-1])
    if not include_transparent:
        pixels = pixels[is_opaque(pixels[:, 3])]
    return img_as_float(pixels[:, :3])


def extract_samples(
    image: np.ndarray,
    include_transparent: bool = False,
    workers: int = 1,
) -> np.ndarray:
    """Collect clustering samples from *image*.

    Args:
        image: (H, W, 4) RGBA array.
        include_transparent: Keep pixels that are not fully opaque.
        workers: Threads for the per-row filter / convert map.

    Returns:
        (N, 3) float64 RGB in [0, 1], alpha dropped. ``N`` is 0 when
        no pixel qualifies.
    """
    parts = map_chunks(
        lambda rows: _rows_to_samples(rows, include_transparent),
        image,
        workers,
    )
    samples = np.concatenate(parts, axis=0) if parts else np.empty((0, 3))
    logger.debug(
        "Sampled %d of %d pixels (include_transparent=%s)",
        len(samples), image.shape[0] * image.shape[1], include_transparent,
    )
    return samples
