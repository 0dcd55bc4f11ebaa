"""Shared fixtures: small images written into tmp_path."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Tuple

import pytest
from PIL import ExifTags, Image

from framy.config import FrameConfig, OutputFormat


def write_image(
    path: Path,
    size: Tuple[int, int],
    color=(200, 30, 30),
    mode: str = "RGB",
    orientation: Optional[int] = None,
    fmt: Optional[str] = None,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new(mode, size, color)
    options = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[ExifTags.Base.Orientation] = orientation
        options["exif"] = exif.tobytes()
    img.save(path, format=fmt, **options)
    return path


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str, size: Tuple[int, int], **kwargs) -> Path:
        return write_image(tmp_path / "in" / name, size, **kwargs)

    return _make


@pytest.fixture
def png_config(tmp_path: Path) -> FrameConfig:
    return FrameConfig(padding=10, size=200, output_format=OutputFormat.PNG, output_directory=tmp_path / "out")
