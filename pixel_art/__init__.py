"""
Pixel Art
=========

Turn a full-colour image into low-colour pixel art:

- **Pixelation** by nearest-neighbour down / up-sampling
- **Palette extraction** with seeded k-means, reduced to 15-bit colour
- **Colour reduction** to the nearest palette entry, alpha preserved
"""

__version__ = "0.3.0"

from pixel_art.config import PixelArtConfig
from pixel_art.image_io import (
    load_rgba,
    make_comparison_grid,
    save_palette_swatch,
    save_rgba,
)
from pixel_art.palette import extract_palette, reduce_bit_depth
from pixel_art.pipeline import PixelArtResult, convert_file, transform
from pixel_art.quantize import reduce_colors, squared_distance
from pixel_art.resample import SizeError, compute_output_size, pixelate
from pixel_art.samples import extract_samples

__all__ = [
    "PixelArtConfig",
    "PixelArtResult",
    "SizeError",
    "compute_output_size",
    "convert_file",
    "extract_palette",
    "extract_samples",
    "load_rgba",
    "make_comparison_grid",
    "pixelate",
    "reduce_bit_depth",
    "reduce_colors",
    "save_palette_swatch",
    "save_rgba",
    "squared_distance",
    "transform",
]
