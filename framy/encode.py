"""Write the framed canvas next to its siblings in the output directory."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from framy.config import FrameConfig
from framy.errors import EncodeError

JPEG_QUALITY = 95


def output_path(input_path: str | Path, config: FrameConfig) -> Path:
    """``<outdir>/<name without last extension>_framed.<ext>``"""
    stem = Path(input_path).stem
    return config.output_directory / f"{stem}_framed.{config.output_format.extension}"


def flatten(canvas: Image.Image, config: FrameConfig) -> Image.Image:
    """Composite an RGBA canvas onto the border color, dropping alpha."""
    background = Image.new("RGB", canvas.size, config.border_color)
    background.paste(canvas, mask=canvas.getchannel("A"))
    return background


def encode(canvas: Image.Image, input_path: str | Path, config: FrameConfig) -> Path:
    fmt = config.output_format
    dest = output_path(input_path, config)

    if canvas.mode == "RGBA" and not fmt.supports_alpha:
        if config.alpha_policy == "strict":
            raise EncodeError(f"{input_path}: {fmt.pil_name} cannot store an alpha channel")
        canvas = flatten(canvas, config)

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EncodeError(f"{dest.parent}: cannot create output directory ({exc.strerror or exc})") from exc

    options = {"quality": JPEG_QUALITY} if fmt.pil_name == "JPEG" else {}
    try:
        canvas.save(dest, format=fmt.pil_name, **options)
    except (KeyError, ValueError) as exc:
        raise EncodeError(f"{dest}: cannot encode {canvas.mode} image as {fmt.pil_name} ({exc})") from exc
    except OSError as exc:
        raise EncodeError(f"{dest}: {exc.strerror or exc}") from exc
    return dest
