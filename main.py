#!/usr/bin/env python3
"""
Color Key Background Removal CLI

Loads an image, makes every pixel close to a target color transparent and
writes the result as PNG: Load → Fit to canvas → Remove color → Export
"""

import argparse
import sys
from pathlib import Path

from colorkey.color import parse_hex_color
from colorkey.config import (
    DEFAULT_EXPORT_FILENAME,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_TARGET_COLOR,
    DEFAULT_TOLERANCE,
    DEFAULT_WORKERS,
    LOG_LEVEL,
    MAX_TOLERANCE,
    OUTPUTS_DIR,
)
from colorkey.exceptions import InvalidInput
from colorkey.log import setup_logging
from colorkey.session import EditorSession


def process_image(
    input_path: str,
    output_path: str | None = None,
    color: str = DEFAULT_TARGET_COLOR,
    tolerance: float = DEFAULT_TOLERANCE,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    workers: int = DEFAULT_WORKERS,
) -> str:
    """
    Remove a background color from an image file.

    Args:
        input_path: Path to the input image
        output_path: Where to write the PNG (default: data/outputs/background-removed.png)
        color: Hex color to make transparent
        tolerance: RGB distance below which pixels become transparent
        max_dimension: Canvas fit limit (0 keeps full resolution)
        workers: Thread count for the color pass

    Returns:
        Path to the written PNG
    """
    if output_path is None:
        OUTPUTS_DIR.mkdir(parents=True, exist_ok=True)
        output_path = str(OUTPUTS_DIR / DEFAULT_EXPORT_FILENAME)
    else:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    session = EditorSession(
        target=color,
        tolerance=tolerance,
        max_dimension=max_dimension,
        workers=workers,
    )

    # Step 1: Load and fit the image
    decoded = session.load(input_path)
    print(f"Loaded {input_path} ({decoded.width}x{decoded.height})")

    # Step 2: Remove the target color
    session.remove_background()

    # Step 3: Export
    session.export(output_path)
    print(f"Wrote {output_path}")

    return output_path


def _tolerance(value: str) -> float:
    try:
        tolerance = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not 0 <= tolerance <= MAX_TOLERANCE:
        raise argparse.ArgumentTypeError(f"must be between 0 and {MAX_TOLERANCE:g}")
    return tolerance


def _color(value: str) -> str:
    try:
        parse_hex_color(value)
    except InvalidInput as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    return value


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def _positive_int(value: str) -> int:
    number = _non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must be >= 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Make every pixel close to a color transparent",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", help="Path to the input image")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help=f"Output PNG path (default: data/outputs/{DEFAULT_EXPORT_FILENAME})",
    )
    parser.add_argument(
        "-c", "--color",
        type=_color,
        default=DEFAULT_TARGET_COLOR,
        help="Color to remove, as #rrggbb",
    )
    parser.add_argument(
        "-t", "--tolerance",
        type=_tolerance,
        default=DEFAULT_TOLERANCE,
        help=f"RGB distance tolerance (0-{MAX_TOLERANCE:g}); 0 removes nothing",
    )
    parser.add_argument(
        "--max-dimension",
        type=_non_negative_int,
        default=DEFAULT_MAX_DIMENSION,
        help="Scale the long side down to this size (0 keeps full resolution)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=DEFAULT_WORKERS,
        help="Threads for the color pass",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if not Path(args.input).exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    print(f"Processing: {args.input}")
    try:
        process_image(
            args.input,
            output_path=args.output,
            color=args.color,
            tolerance=args.tolerance,
            max_dimension=args.max_dimension,
            workers=args.workers,
        )
    except InvalidInput as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
