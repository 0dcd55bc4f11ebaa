"""Aspect-preserving resize so the long side fits inside the frame."""

from __future__ import annotations

from typing import Tuple

from PIL import Image

from framy.errors import InvalidConfiguration

RESAMPLE_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "nearest": Image.Resampling.NEAREST,
}


def fit_dimensions(width: int, height: int, max_size: int) -> Tuple[int, int]:
    """Scale (width, height) so the longer side equals max_size."""
    if max_size <= 0:
        raise InvalidConfiguration(f"target size {max_size} is not positive; reduce padding or increase size")
    if width >= height:
        return max_size, max(1, round(height * max_size / width))
    return max(1, round(width * max_size / height)), max_size


def resize_to_fit(image: Image.Image, max_size: int, resample: str = "lanczos") -> Image.Image:
    target = fit_dimensions(image.width, image.height, max_size)
    if target == image.size:
        return image.copy()
    return image.resize(target, RESAMPLE_FILTERS[resample])
