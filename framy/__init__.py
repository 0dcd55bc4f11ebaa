"""Add a uniform square frame around photos, honoring EXIF orientation."""

from __future__ import annotations

from framy.config import FrameConfig, OutputFormat, build_config
from framy.errors import CompositionError, DecodeError, EncodeError, FramyError, InvalidConfiguration
from framy.pipeline import process_image, run

__version__ = "0.1.0"

__all__ = [
    "CompositionError",
    "DecodeError",
    "EncodeError",
    "FrameConfig",
    "FramyError",
    "InvalidConfiguration",
    "OutputFormat",
    "build_config",
    "process_image",
    "run",
]
