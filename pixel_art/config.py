"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class PixelArtConfig:
    """All tuneable parameters for a pixel-art run.

    Attributes:
        pixelation_factor: Downscale ratio before upscaling back (>= 1).
        num_colors:      Requested palette size.
        transparent:     Also sample non-opaque pixels when building the palette.
        width:           Explicit output width (None = derived / original).
        height:          Explicit output height (None = derived / original).
        seed:            k-means seed; identical input + seed = identical palette.
        max_iter:        k-means iteration cap (one refinement pass by default).
        tolerance:       k-means convergence threshold, in 8-bit RGB units.
        workers:         Threads used by the data-parallel stages.
        output_format:   Image format for batch results.
        save_palette:    Persist a swatch of the extracted palette (batch).
        save_comparison: Generate a side-by-side comparison grid (batch).
        preview_upscale: Block size of one palette colour in swatches.
        input_dir:       Folder to scan for source images.
        output_dir:      Folder for results.
    """

    # Pixelation
    pixelation_factor: int = 4
    width: int | None = None
    height: int | None = None

    # Palette
    num_colors: int = 56
    transparent: bool = False
    seed: int = 0
    max_iter: int = 1
    tolerance: float = 5.0

    # Execution
    workers: int = 1

    # Output
    output_format: str = "png"
    save_palette: bool = True
    save_comparison: bool = True
    preview_upscale: int = 8

    # Paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif"}
    )
