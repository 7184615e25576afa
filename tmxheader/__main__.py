"""
Main entry point for the tmxheader converter.
"""

import argparse
import sys
from multiprocessing import cpu_count
from pathlib import Path

from .constants import DEFAULT_PREVIEW_SCALE
from .converter import MapConverter
from .errors import ConversionError
from .logging_config import setup_logging


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmxheader",
        description="Convert Tiled maps (.tmx, .json, .tmj) to C header files"
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Map files to convert"
    )
    parser.add_argument(
        "--output", "-o",
        required=True,
        help="Output directory for the generated <name>Map.h files"
    )
    parser.add_argument(
        "--template", "-t",
        default=None,
        help="Header template file (default: bundled map.h template)"
    )
    parser.add_argument(
        "--date",
        default=None,
        help="Date written into {{date}} (default: today, as YYYY-M-D)"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Also write a <name>Map.png preview of the tile layers"
    )
    parser.add_argument(
        "--preview-scale",
        type=positive_int,
        default=DEFAULT_PREVIEW_SCALE,
        help=f"Pixels per tile in the preview (default: {DEFAULT_PREVIEW_SCALE})"
    )
    parser.add_argument(
        "--jobs", "-j",
        type=positive_int,
        default=None,
        help="Number of maps converted in parallel (default: CPU count - 1)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress information"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Show debug information (implies verbose)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only report errors"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logger = setup_logging(args.verbose, args.debug, args.quiet)

    output_dir = Path(args.output).resolve()
    logger.info(f"Output directory: {output_dir}")

    try:
        converter = MapConverter(
            output_dir,
            template_path=args.template,
            date=args.date,
            preview=args.preview,
            preview_scale=args.preview_scale
        )
    except ConversionError as e:
        logger.error(f"Cannot load template: {e}")
        return 1

    logger.info(f"Template: {converter.template_path}")

    max_workers = args.jobs if args.jobs else max(1, cpu_count() - 1)
    results = converter.convert_files(args.inputs, max_workers=max_workers)

    failed = [r for r in results if not r.ok]
    if failed:
        logger.warning(f"{len(failed)} of {len(results)} maps failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
