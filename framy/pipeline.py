"""Per-image pipeline and the sequential batch loop around it."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from framy.compose import compose, placement
from framy.config import FrameConfig
from framy.decode import decode_image, read_orientation
from framy.encode import encode
from framy.errors import FramyError
from framy.orientation import normalize
from framy.resize import resize_to_fit

STDIN_SENTINEL = "-"


def process_image(img_path: str | Path, config: FrameConfig, verbose: bool = False) -> Path:
    """decode -> orient -> resize -> compose -> encode; returns the written path."""

    def info(message: str) -> None:
        if verbose:
            print(f"[info] {img_path}: {message}", file=sys.stderr)

    img = decode_image(img_path)
    info(f"decoded {img.width}x{img.height} {img.mode}")
    tag = read_orientation(img_path)
    img = normalize(img, tag, fix_mirrored=config.fix_mirrored)
    info(f"orientation={tag} -> {img.width}x{img.height}")
    img = resize_to_fit(img, config.max_size, config.resample)
    info(f"fitted {img.width}x{img.height} ({config.resample})")
    canvas = compose(img, config)
    x, y = placement(img.width, img.height, config.size, config.padding)
    info(f"placed at ({x},{y}) on {config.size}x{config.size} {canvas.mode} canvas")
    dest = encode(canvas, img_path, config)
    info(f"wrote {dest}")

    print(f"{img_path} done")
    return dest


def resolve_inputs(paths: Iterable[str], stdin: Optional[TextIO] = None) -> List[str]:
    """Expand the ``-`` sentinel into whitespace-separated paths read from stdin.

    Standard input is read once, in full, before any image is processed.
    """
    resolved: List[str] = []
    for path in paths:
        if path != STDIN_SENTINEL:
            resolved.append(path)
            continue
        stream = stdin if stdin is not None else sys.stdin
        for item in stream.read().split():
            if item == STDIN_SENTINEL:
                print("[warn] ignoring '-' read from standard input", file=sys.stderr)
                continue
            resolved.append(item)
    return resolved


def run(
    img_paths: Iterable[str],
    config: FrameConfig,
    keep_going: bool = False,
    stdin: Optional[TextIO] = None,
    verbose: bool = False,
) -> int:
    """Frame every input in order and return the number of failures.

    Without ``keep_going`` the first failure is re-raised and the rest of the
    batch is skipped.
    """
    failures = 0
    for img_path in resolve_inputs(img_paths, stdin):
        try:
            process_image(img_path, config, verbose=verbose)
        except FramyError as exc:
            if not keep_going:
                raise
            print(f"[warn] {exc}; continuing", file=sys.stderr)
            failures += 1
    return failures
