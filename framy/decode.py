"""Read pixels and the orientation tag from an image file."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Optional

from PIL import ExifTags, Image, UnidentifiedImageError

from framy.errors import DecodeError


def has_transparency(image: Image.Image) -> bool:
    if "A" in image.getbands():
        return True
    # palette entry or a tRNS colour key on L/RGB images
    return "transparency" in image.info


def decode_image(path: str | Path) -> Image.Image:
    """Load the first frame of ``path`` as RGB, or RGBA when it carries transparency."""
    try:
        with Image.open(path) as img:
            img.load()
            mode = "RGBA" if has_transparency(img) else "RGB"
            return img if img.mode == mode else img.convert(mode)
    except FileNotFoundError as exc:
        raise DecodeError(f"{path}: No such file or directory") from exc
    except UnidentifiedImageError as exc:
        raise DecodeError(f"{path}: not a recognized image format") from exc
    except (OSError, EOFError, SyntaxError, ValueError, struct.error, Image.DecompressionBombError) as exc:
        raise DecodeError(f"{path}: {exc}") from exc


def read_orientation(path: str | Path) -> Optional[int]:
    """Orientation from the primary image directory (IFD0), or None when absent."""
    try:
        with Image.open(path) as img:
            exif = img.getexif()
    except FileNotFoundError as exc:
        raise DecodeError(f"{path}: No such file or directory") from exc
    except UnidentifiedImageError as exc:
        raise DecodeError(f"{path}: not a recognized image format") from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"{path}: {exc}") from exc
    except (OSError, SyntaxError, ValueError, struct.error) as exc:
        raise DecodeError(f"{path}: unreadable metadata ({exc})") from exc

    value = exif.get(ExifTags.Base.Orientation)
    if isinstance(value, int):
        return value
    return None
