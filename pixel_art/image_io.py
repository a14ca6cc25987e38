"""Image loading, saving, palette swatches and comparison grids."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont


def load_rgba(path: str | Path) -> np.ndarray:
    """Load any image as (H, W, 4) uint8 RGBA.

    Multi-frame files contribute their first frame only.
    """
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


def save_rgba(array: np.ndarray, path: str | Path) -> None:
    """Write an (H, W, 4) uint8 array, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8))
    if path.suffix.lower() in {".jpg", ".jpeg", ".jfif", ".bmp"}:
        # no alpha support in these formats
        img = img.convert("RGB")
    img.save(path)


def palette_swatch(palette: np.ndarray, block: int = 8) -> Image.Image:
    """One *block* x *block* square per palette colour, in palette order."""
    colors = np.asarray(palette, dtype=np.uint8).reshape(-1, 3)
    if len(colors) == 0:
        colors = np.zeros((1, 3), dtype=np.uint8)
    strip = Image.fromarray(colors.reshape(1, -1, 3))
    return strip.resize((len(colors) * block, block), Image.NEAREST)


def save_palette_swatch(
    palette: np.ndarray,
    path: str | Path,
    block: int = 8,
) -> None:
    palette_swatch(palette, block).save(path)


def make_comparison_grid(
    original: np.ndarray,
    pixelated: np.ndarray,
    result: np.ndarray,
    palette: np.ndarray,
    output_path: str | Path,
) -> None:
    """Create a 4-panel comparison: Original | Pixelated | Palette | Result.

    Every panel is fitted to the result's pixel dimensions; the pixel
    panels use nearest-neighbour scaling so blocks stay crisp.
    """
    panel_h, panel_w = result.shape[:2]

    def _panel(array: np.ndarray) -> Image.Image:
        img = Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8)).convert("RGB")
        return img.resize((panel_w, panel_h), Image.NEAREST)

    swatch = palette_swatch(palette, block=max(1, panel_w // max(1, len(palette))))
    captioned = [
        (_panel(original), "Original"),
        (_panel(pixelated), "Pixelated"),
        (swatch.resize((panel_w, panel_h), Image.NEAREST), f"Palette ({len(palette)})"),
        (_panel(result), "Result"),
    ]

    gap = 8
    caption_h = 28
    canvas = Image.new(
        "RGB",
        (len(captioned) * (panel_w + gap) - gap, panel_h + caption_h),
        (24, 24, 28),
    )
    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default(size=14)

    # captions sit in a strip under the panels, centred on each one
    for i, (panel, caption) in enumerate(captioned):
        left = i * (panel_w + gap)
        canvas.paste(panel, (left, 0))
        centre = left + (panel_w - draw.textlength(caption, font=font)) / 2
        draw.text((centre, panel_h + 7), caption, fill=(210, 210, 210), font=font)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    canvas.save(output_path)
