"""Pixelate -> extract palette -> reduce colours."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from pixel_art.config import PixelArtConfig
from pixel_art.image_io import load_rgba, save_rgba
from pixel_art.palette import extract_palette
from pixel_art.quantize import reduce_colors
from pixel_art.resample import pixelate
from pixel_art.samples import extract_samples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelArtResult:
    """Output of one run, with the intermediate stages kept for previews.

    Attributes:
        pixelated: (H, W, 4) uint8 - after resampling, before recolouring.
        palette:   (K, 3) uint8 - the extracted palette.
        image:     (H, W, 4) uint8 - the final pixel-art image.
    """

    pixelated: np.ndarray
    palette: np.ndarray
    image: np.ndarray


def transform(
    image: np.ndarray,
    config: PixelArtConfig | None = None,
) -> PixelArtResult:
    """Run the full pipeline on a decoded (H, W, 4) uint8 RGBA image.

    Raises:
        SizeError: If the pixelation factor or output size is invalid.
            Nothing is computed in that case.
    """
    cfg = config or PixelArtConfig()

    t0 = time.perf_counter()
    pixelated = pixelate(image, cfg.pixelation_factor, cfg.width, cfg.height)
    h, w = pixelated.shape[:2]
    logger.info(
        "Pixelated %dx%d -> %dx%d (factor %d)  (%.2f s)",
        image.shape[1], image.shape[0], w, h, cfg.pixelation_factor,
        time.perf_counter() - t0,
    )

    t0 = time.perf_counter()
    samples = extract_samples(pixelated, cfg.transparent, workers=cfg.workers)
    palette = extract_palette(
        samples,
        cfg.num_colors,
        seed=cfg.seed,
        max_iter=cfg.max_iter,
        tolerance=cfg.tolerance,
    )
    logger.info(
        "Palette ready: %d of %d colours  (%.2f s)",
        len(palette), cfg.num_colors, time.perf_counter() - t0,
    )

    t0 = time.perf_counter()
    result = reduce_colors(pixelated, palette, workers=cfg.workers)
    logger.info("Colours reduced  (%.2f s)", time.perf_counter() - t0)

    return PixelArtResult(pixelated=pixelated, palette=palette, image=result)


def convert_file(
    input_path: str | Path,
    output_path: str | Path,
    config: PixelArtConfig | None = None,
) -> PixelArtResult:
    """Load *input_path*, transform it and save the result to *output_path*."""
    logger.info("Loading image from %s", input_path)
    image = load_rgba(input_path)
    result = transform(image, config)
    logger.info("Saving image to %s", output_path)
    save_rgba(result.image, output_path)
    return result
