"""Command line entry point: ``framy [options] FILE...``"""

from __future__ import annotations

import argparse
import sys
from typing import Iterable

from framy import __version__
from framy.config import ALPHA_POLICIES, DEFAULTS, build_config, load_config_file, merge_options
from framy.errors import FramyError
from framy.pipeline import STDIN_SENTINEL, run
from framy.resize import RESAMPLE_FILTERS


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or greater")
    return number


def build_parser() -> argparse.ArgumentParser:
    # Option defaults are None so that values from --config can fill the gaps.
    ap = argparse.ArgumentParser(prog="framy", description="Add a square frame (padding) around images.")
    ap.add_argument(
        "files",
        nargs="*",
        default=[STDIN_SENTINEL],
        metavar="FILE",
        help="input file(s); '-' reads whitespace-separated paths from stdin (default)",
    )
    ap.add_argument("-p", "--padding", type=_non_negative_int, help=f"padding pixels (default {DEFAULTS['padding']})")
    ap.add_argument("-s", "--size", type=_non_negative_int, help=f"output size (default {DEFAULTS['size']})")
    ap.add_argument("-o", "--outdir", help="output directory (default: current directory)")
    ap.add_argument("-f", "--format", help="output format: jpeg, png, gif, webp, tiff (default jpeg)")
    ap.add_argument("-c", "--color", help="border color as RRGGBB hex (default ffffff)")
    ap.add_argument("--filter", choices=sorted(RESAMPLE_FILTERS), help="resampling filter (default lanczos)")
    ap.add_argument(
        "--alpha",
        choices=ALPHA_POLICIES,
        help="alpha into a format without alpha: flatten onto the border color, or fail (default flatten)",
    )
    ap.add_argument(
        "--fix-mirrored",
        dest="fix_mirrored",
        action="store_true",
        default=None,
        help="also undo mirrored EXIF orientations (2, 4, 5, 7)",
    )
    ap.add_argument(
        "--continue",
        dest="keep_going",
        action="store_true",
        default=None,
        help="continue on individual image errors",
    )
    ap.add_argument("--config", help="YAML file with default option values")
    ap.add_argument("-v", "--verbose", action="store_true", default=None, help="print per-image geometry")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Iterable[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        file_values = load_config_file(args.config) if args.config else {}
        options = merge_options(vars(args), file_values)
        config, warnings = build_config(options)
        for warning in warnings:
            print(f"[warn] {warning}", file=sys.stderr)
        failures = run(args.files, config, keep_going=options["keep_going"], verbose=options["verbose"])
    except FramyError as exc:
        print(exc, file=sys.stderr)
        return 1

    if failures:
        print(f"[done] {failures} image(s) failed", file=sys.stderr)
        return 1
    return 0


def entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entry()
