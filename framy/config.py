"""Frame settings: parse raw options, then validate them into a FrameConfig.

Options arrive from argparse and, optionally, a YAML file. Parsing is kept
separate from validation: ``merge_options`` only layers the sources, while
``build_config`` is the single place that checks values, substitutes defaults
for cosmetic fields (format, color) and collects the warnings to show.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from jsonschema import Draft7Validator

from framy.errors import InvalidConfiguration
from framy.resize import RESAMPLE_FILTERS

WHITE: Tuple[int, int, int] = (255, 255, 255)
ALPHA_POLICIES = ("flatten", "strict")

DEFAULTS: Dict[str, Any] = {
    "padding": 32,
    "size": 1920,
    "outdir": ".",
    "format": "jpeg",
    "color": None,
    "filter": "lanczos",
    "alpha": "flatten",
    "fix_mirrored": False,
    "keep_going": False,
    "verbose": False,
}

CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "framy config",
    "type": "object",
    "properties": {
        "padding": {"type": "integer", "minimum": 0},
        "size": {"type": "integer", "minimum": 1},
        "outdir": {"type": "string", "minLength": 1},
        "format": {"type": "string"},
        "color": {"type": ["string", "null"]},
        "filter": {"type": "string", "enum": sorted(RESAMPLE_FILTERS)},
        "alpha": {"type": "string", "enum": list(ALPHA_POLICIES)},
        "fix_mirrored": {"type": "boolean"},
        "keep_going": {"type": "boolean"},
        "verbose": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


class OutputFormat(Enum):
    """Encodable formats: Pillow format name, file extension, alpha support."""

    PNG = ("PNG", "png", True)
    JPEG = ("JPEG", "jpg", False)
    GIF = ("GIF", "gif", False)  # one fully transparent palette entry at most
    WEBP = ("WEBP", "webp", True)
    TIFF = ("TIFF", "tiff", True)

    def __init__(self, pil_name: str, extension: str, supports_alpha: bool):
        self.pil_name = pil_name
        self.extension = extension
        self.supports_alpha = supports_alpha


# "jpg" is kept for backward compatibility with older invocations
FORMAT_NAMES: Dict[str, OutputFormat] = {
    "png": OutputFormat.PNG,
    "jpg": OutputFormat.JPEG,
    "jpeg": OutputFormat.JPEG,
    "gif": OutputFormat.GIF,
    "webp": OutputFormat.WEBP,
    "tiff": OutputFormat.TIFF,
}


@dataclass(frozen=True)
class FrameConfig:
    """Validated, immutable settings for one batch run."""

    padding: int = 32
    size: int = 1920
    output_format: OutputFormat = OutputFormat.JPEG
    border_color: Tuple[int, int, int] = WHITE
    output_directory: Path = field(default_factory=lambda: Path("."))
    resample: str = "lanczos"
    alpha_policy: str = "flatten"
    fix_mirrored: bool = False

    @property
    def max_size(self) -> int:
        """Length of the fitted image's long side."""
        return self.size - 2 * self.padding


def parse_format(value: Optional[str]) -> Tuple[OutputFormat, Optional[str]]:
    name = (value or "").strip().lower()
    if name in FORMAT_NAMES:
        return FORMAT_NAMES[name], None
    return OutputFormat.PNG, f"Unknown format {value}. Use png instead."


def parse_color(value: Optional[str]) -> Tuple[Tuple[int, int, int], Optional[str]]:
    """Parse ``RRGGBB`` (optionally ``#RRGGBB``); malformed input falls back to white."""
    if value is None:
        return WHITE, None
    match = _HEX_COLOR.match(value.strip())
    if not match:
        return WHITE, f"Invalid color {value!r}. Use ffffff instead."
    digits = match.group(1)
    rgb = tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return rgb, None  # type: ignore[return-value]


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Read a YAML mapping of option defaults and check it against CONFIG_SCHEMA."""
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfiguration(f"{config_path}: {exc.strerror or exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        problem = getattr(exc, "problem", None) or "malformed YAML"
        raise InvalidConfiguration(f"{config_path}: {problem}") from exc
    if data is None:
        return {}

    errors = sorted(Draft7Validator(CONFIG_SCHEMA).iter_errors(data), key=lambda e: list(e.path))
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.path) or "<root>"
        raise InvalidConfiguration(f"{config_path}: {where}: {first.message}")
    return dict(data)


def merge_options(cli: Mapping[str, Any], file_values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Layer built-in defaults < config file < flags given on the command line."""
    merged = dict(DEFAULTS)
    merged.update(file_values or {})
    merged.update({key: value for key, value in cli.items() if value is not None and key in DEFAULTS})
    return merged


def build_config(options: Mapping[str, Any]) -> Tuple[FrameConfig, List[str]]:
    """Validate merged options.

    Returns the config plus warnings for cosmetic fields that were replaced by
    a default. Structural problems raise InvalidConfiguration.
    """
    values = dict(DEFAULTS)
    values.update(options)
    warnings: List[str] = []

    padding, size = values["padding"], values["size"]
    if not isinstance(padding, int) or padding < 0:
        raise InvalidConfiguration(f"padding must be a non-negative integer, got {padding!r}")
    if not isinstance(size, int) or size <= 0:
        raise InvalidConfiguration(f"size must be a positive integer, got {size!r}")
    if size <= 2 * padding:
        raise InvalidConfiguration(
            f"size {size} leaves no room for the image with padding {padding} (need size > {2 * padding})"
        )

    if values["filter"] not in RESAMPLE_FILTERS:
        raise InvalidConfiguration(
            f"unknown filter {values['filter']!r} (choose from {', '.join(sorted(RESAMPLE_FILTERS))})"
        )
    if values["alpha"] not in ALPHA_POLICIES:
        raise InvalidConfiguration(f"unknown alpha policy {values['alpha']!r} (choose from flatten, strict)")

    output_format, warning = parse_format(values["format"])
    if warning:
        warnings.append(warning)
    border_color, warning = parse_color(values["color"])
    if warning:
        warnings.append(warning)

    config = FrameConfig(
        padding=padding,
        size=size,
        output_format=output_format,
        border_color=border_color,
        output_directory=Path(values["outdir"]),
        resample=values["filter"],
        alpha_policy=values["alpha"],
        fix_mirrored=bool(values["fix_mirrored"]),
    )
    return config, warnings
