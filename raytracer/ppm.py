"""Writing images in the plain-text PPM (P3) format."""

from __future__ import annotations

import os
from typing import Iterable

from raytracer.color import Color

__all__ = ["MAX_COLOR_VALUE", "format_ppm", "write_ppm"]

MAX_COLOR_VALUE = 255


def format_ppm(pixels: Iterable[Color], width: int, height: int) -> str:
    """Return the P3 text of an image given row by row, top row first.

    Raises ValueError for a negative size or too few pixels.
    """
    if width < 0 or height < 0:
        raise ValueError(f"invalid image size {width}x{height}")
    pixels = list(pixels)
    if len(pixels) < width * height:
        raise ValueError(
            f"{len(pixels)} pixels given for a {width}x{height} image"
        )
    lines = [f"P3\n{width} {height}\n{MAX_COLOR_VALUE}\n"]
    for start in range(0, width * height, width or 1):
        row = pixels[start:start + width]
        lines.append("".join(f"{c.r} {c.g} {c.b} " for c in row) + "\n")
    if width == 0:
        lines = lines[:1] + ["\n"] * height
    return "".join(lines)


def write_ppm(
    filename: str | os.PathLike[str], pixels: Iterable[Color], width: int, height: int
) -> None:
    """Write the image to ``filename`` as P3 text.

    Raises ValueError as format_ppm does and OSError if the file cannot be written.
    """
    text = format_ppm(pixels, width, height)
    with open(filename, "w", encoding="ascii", newline="") as file:
        file.write(text)