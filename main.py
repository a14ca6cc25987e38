#!/usr/bin/env python3
"""
main.py - Quick-start entry point.

Drop images into ``images/`` and run:

    python main.py batch

Or convert a single file:

    python -m pixel_art.cli convert photo.png -o photo_pixel.png -p 6 -n 32
"""

from pixel_art.cli import app

if __name__ == "__main__":
    app()
