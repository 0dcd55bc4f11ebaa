"""Undo camera rotation recorded in the EXIF Orientation tag.

Only the pure rotations (3, 6, 8) are corrected by default. The mirrored
orientations (2, 4, 5, 7) are left untouched unless ``fix_mirrored`` is set,
so existing batches keep producing the same output.
"""

from __future__ import annotations

from typing import Optional

from PIL import Image

# Image.Transpose.ROTATE_* turn counter-clockwise
ROTATIONS = {
    3: Image.Transpose.ROTATE_180,
    6: Image.Transpose.ROTATE_270,  # 90 degrees clockwise
    8: Image.Transpose.ROTATE_90,  # 270 degrees clockwise
}

MIRRORS = {
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    7: Image.Transpose.TRANSVERSE,
}


def normalize(image: Image.Image, tag: Optional[int], fix_mirrored: bool = False) -> Image.Image:
    """Return ``image`` turned so that its pixel "up" matches the visual "up"."""
    method = ROTATIONS.get(tag)
    if method is None and fix_mirrored:
        method = MIRRORS.get(tag)
    if method is None:
        return image
    return image.transpose(method)
