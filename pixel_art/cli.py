"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pixel_art.config import PixelArtConfig
from pixel_art.image_io import load_rgba, make_comparison_grid, save_palette_swatch, save_rgba
from pixel_art.palette import palette_to_hex
from pixel_art.pipeline import convert_file, transform
from pixel_art.resample import SizeError

app = typer.Typer(
    name="pixel-art",
    help="Turn any image into low-colour pixel art.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    """Supported image files directly inside *folder*, sorted by name."""
    if not folder.is_dir():
        return []
    return [
        p for p in sorted(folder.glob("*"))
        if p.suffix.lower() in extensions and p.is_file()
    ]


# Defaults come from PixelArtConfig - single source of truth
_DEFAULTS = PixelArtConfig()


# -- convert command ---------------------------------------------------

@app.command()
def convert(
    input_path: Path = typer.Argument(..., help="Path to the image to be processed"),
    output: Path = typer.Option(Path("output.png"), "--output", "-o", help="Output image"),
    pixelation_factor: int = typer.Option(
        _DEFAULTS.pixelation_factor, "--pixelation-factor", "-p", min=1,
        help="Larger values result in more pixelation",
    ),
    num_colors: int = typer.Option(
        _DEFAULTS.num_colors, "--num-colors", "-n", min=1, help="Number of colours to use",
    ),
    transparent: bool = typer.Option(
        _DEFAULTS.transparent, "--transparent", "-t",
        help="Include transparent pixels in the colour palette",
    ),
    width: int | None = typer.Option(
        None, "--width", "-W", min=1,
        help="Output width; height follows the aspect ratio if omitted",
    ),
    height: int | None = typer.Option(
        None, "--height", "-H", min=1,
        help="Output height; width follows the aspect ratio if omitted",
    ),
    seed: int = typer.Option(_DEFAULTS.seed, "--seed", "-s", help="k-means seed"),
    workers: int = typer.Option(_DEFAULTS.workers, "--workers", "-j", min=1, help="Threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Process a single image."""
    _setup_logging(verbose)

    cfg = PixelArtConfig(
        pixelation_factor=pixelation_factor,
        num_colors=num_colors,
        transparent=transparent,
        width=width,
        height=height,
        seed=seed,
        workers=workers,
    )

    t0 = time.perf_counter()
    try:
        result = convert_file(input_path, output, cfg)
    except SizeError as exc:
        console.print(f"[red]Invalid size:[/red] {exc}")
        raise typer.Exit(1) from exc
    except OSError as exc:
        console.print(f"[red]Could not process {input_path}:[/red] {exc}")
        raise typer.Exit(1) from exc

    h, w = result.image.shape[:2]
    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]{w}x{h}  colours={len(result.palette)}"
        f"  time={time.perf_counter() - t0:.1f}s[/dim]"
    )


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    input_dir: Path = typer.Option(
        _DEFAULTS.input_dir, "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    pixelation_factor: int = typer.Option(
        _DEFAULTS.pixelation_factor, "--pixelation-factor", "-p", min=1,
    ),
    num_colors: int = typer.Option(_DEFAULTS.num_colors, "--num-colors", "-n", min=1),
    transparent: bool = typer.Option(_DEFAULTS.transparent, "--transparent", "-t"),
    width: int | None = typer.Option(None, "--width", "-W", min=1),
    height: int | None = typer.Option(None, "--height", "-H", min=1),
    seed: int = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    workers: int = typer.Option(_DEFAULTS.workers, "--workers", "-j", min=1),
    save_palette: bool = typer.Option(
        _DEFAULTS.save_palette, "--palette/--no-palette", help="Save palette swatches",
    ),
    save_comparison: bool = typer.Option(
        _DEFAULTS.save_comparison, "--comparison/--no-comparison",
        help="Save comparison grids",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Process all images in INPUT_DIR and write results to OUTPUT_DIR."""
    _setup_logging(verbose)
    logger = logging.getLogger("pixel_art")

    cfg = PixelArtConfig(
        pixelation_factor=pixelation_factor,
        num_colors=num_colors,
        transparent=transparent,
        width=width,
        height=height,
        seed=seed,
        workers=workers,
        save_palette=save_palette,
        save_comparison=save_comparison,
        input_dir=input_dir,
        output_dir=output_dir,
    )

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        console.print("Place .jpg / .png / ... files there and re-run.\n")
        raise typer.Exit(0)

    output_dir.mkdir(parents=True, exist_ok=True)

    console.print(Panel.fit(
        f"[bold]PIXEL ART[/bold]\n"
        f"Factor: {cfg.pixelation_factor}  |  Colours: {cfg.num_colors}\n"
        f"Transparent: {cfg.transparent}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    failed = 0
    for idx, img_path in enumerate(images, 1):
        stem = img_path.stem
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        t_total = time.perf_counter()

        try:
            original = load_rgba(img_path)
            result = transform(original, cfg)
        except (SizeError, OSError) as exc:
            logger.error("Skipping %s: %s", img_path.name, exc)
            failed += 1
            continue

        out_path = output_dir / f"{stem}_pixel.{cfg.output_format}"
        save_rgba(result.image, out_path)

        if cfg.save_palette:
            save_palette_swatch(
                result.palette,
                output_dir / f"{stem}_palette.{cfg.output_format}",
                cfg.preview_upscale,
            )
            logger.debug("Palette: %s", ", ".join(palette_to_hex(result.palette)))

        if cfg.save_comparison:
            make_comparison_grid(
                original, result.pixelated, result.image, result.palette,
                output_dir / f"{stem}_comparison.{cfg.output_format}",
            )

        h, w = result.image.shape[:2]
        console.print(
            f"  [green]✓[/green] {out_path.name}  "
            f"[dim]{w}x{h}  colours={len(result.palette)}"
            f"  time={time.perf_counter() - t_total:.1f}s[/dim]"
        )

    style = "green" if failed == 0 else "yellow"
    console.print(Panel.fit(
        f"[bold {style}]ALL DONE[/bold {style}] - results in [bold]{output_dir}/[/bold]"
        + (f"\n{failed} image(s) skipped" if failed else ""),
        border_style=style,
    ))


if __name__ == "__main__":
    app()
