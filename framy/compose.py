"""Place the fitted image on a square canvas filled with the border color."""

from __future__ import annotations

from typing import Tuple

from PIL import Image

from framy.config import FrameConfig
from framy.errors import CompositionError


def placement(width: int, height: int, size: int, padding: int) -> Tuple[int, int]:
    """Top-left offset of the image on the canvas.

    The long axis gets exactly ``padding``; the short axis is centered, with
    the odd pixel going to the right/bottom margin.
    """
    if width > height:
        return padding, (size - height) // 2
    return (size - width) // 2, padding


def border_fill(color: Tuple[int, int, int], mode: str) -> Tuple[int, ...]:
    return color + (255,) if mode == "RGBA" else color


def compose(image: Image.Image, config: FrameConfig) -> Image.Image:
    """Return a new ``size`` x ``size`` canvas with ``image`` pasted at its placement.

    The canvas is allocated already filled with the opaque border color, so
    every pixel outside the pasted rectangle is border. Pasting without a mask
    copies source pixels verbatim, alpha included.
    """
    mode = "RGBA" if image.mode == "RGBA" else "RGB"
    if image.mode != mode:
        image = image.convert(mode)
    try:
        canvas = Image.new(mode, (config.size, config.size), border_fill(config.border_color, mode))
    except MemoryError as exc:
        raise CompositionError(f"cannot allocate a {config.size}x{config.size} {mode} canvas") from exc
    canvas.paste(image, placement(image.width, image.height, config.size, config.padding))
    return canvas
