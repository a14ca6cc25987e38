"""Nearest-neighbour pixelation: shrink by a factor, then blow back up."""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class SizeError(ValueError):
    """Raised when a pixelation factor or target size yields an empty image."""


def compute_output_size(
    original_width: int,
    original_height: int,
    width: int | None = None,
    height: int | None = None,
) -> tuple[int, int]:
    """Resolve the final (w, h) of the pixelated image.

    If only one side is given the other is scaled proportionally
    (rounded to the nearest integer). With neither, the original size
    is kept.

    Raises:
        SizeError: If a requested or derived side is smaller than 1.
    """
    if width is not None and height is not None:
        w, h = width, height
    elif width is not None:
        w = width
        h = round(original_height * width / original_width)
    elif height is not None:
        h = height
        w = round(original_width * height / original_height)
    else:
        w, h = original_width, original_height

    if w < 1 or h < 1:
        msg = f"Output size {w}x{h} is empty (requested width={width}, height={height})"
        raise SizeError(msg)
    return w, h


def intermediate_size(
    original_width: int,
    original_height: int,
    factor: int,
) -> tuple[int, int]:
    """Size of the down-sampled image, using truncating division.

    Raises:
        SizeError: If *factor* is below 1 or either side truncates to 0.
    """
    if factor < 1:
        msg = f"Pixelation factor must be >= 1, got {factor}"
        raise SizeError(msg)
    w, h = original_width // factor, original_height // factor
    if w == 0 or h == 0:
        msg = (
            f"Pixelation factor {factor} is too large for a "
            f"{original_width}x{original_height} image"
        )
        raise SizeError(msg)
    return w, h


def _resize_nearest(image: np.ndarray, size: tuple[int, int]) -> np.ndarray:
    img = Image.fromarray(image)
    return np.array(img.resize(size, Image.NEAREST), dtype=np.uint8)


def pixelate(
    image: np.ndarray,
    factor: int,
    target_width: int | None = None,
    target_height: int | None = None,
) -> np.ndarray:
    """Return a pixelated copy of *image*.

    The image is point-sampled down to ``(W // factor, H // factor)`` and
    then point-sampled up to the output size, which turns every source
    sample into a hard-edged block. No averaging takes place.

    Args:
        image: (H, W, 4) uint8 RGBA.
        factor: Downscale ratio; 1 leaves the image untouched.
        target_width: Optional output width.
        target_height: Optional output height.

    Returns:
        (H', W', 4) uint8 - a new array, *image* is not modified.

    Raises:
        SizeError: On an invalid factor or target size. Raised before any
            resampling happens.
    """
    h, w = image.shape[:2]
    small_size = intermediate_size(w, h, factor)
    final_size = compute_output_size(w, h, target_width, target_height)

    logger.debug(
        "Pixelating %dx%d -> %dx%d -> %dx%d",
        w, h, *small_size, *final_size,
    )
    rgba = np.ascontiguousarray(image, dtype=np.uint8)
    small = _resize_nearest(rgba, small_size)
    return _resize_nearest(small, final_size)
