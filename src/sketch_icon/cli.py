"""Command line interface for sketch to icon conversion."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .convert import (
    ConvertOptions,
    convert_file,
    format_convert_report,
    parse_options_file,
)
from .errors import SketchIconError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sketch-to-icon",
        description=(
            'Convert an SVG exported from FreeCAD as a "Flattened SVG" '
            "into a normalized single-path icon."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert with default settings
  %(prog)s -i sketch.svg -o icon.svg

  # Use a custom fill and keep 3 fractional digits
  %(prog)s -i sketch.svg -o icon.svg --fill "#333" --precision 3

  # Load settings from a YAML file, overriding one of them
  %(prog)s -i sketch.svg -o icon.svg --config icon.yaml --fill-rule nonzero
""",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        required=True,
        help='SVG file exported from FreeCAD as a "Flattened SVG"',
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        required=True,
        help="Path to store the normalized icon",
    )
    parser.add_argument(
        "--config", "-c", type=Path, help="YAML file with conversion options"
    )
    parser.add_argument(
        "--exported-padding-factor",
        type=float,
        metavar="FACTOR",
        help="Padding factor used by FreeCAD (default: 0.01)",
    )
    parser.add_argument(
        "--fill", metavar="COLOR", help='Fill color to use (default: "currentColor")'
    )
    parser.add_argument(
        "--fill-rule", metavar="RULE", help='Fill rule to use (default: "evenodd")'
    )
    parser.add_argument(
        "--precision",
        type=int,
        metavar="DIGITS",
        help="Maximum number of fractional digits (default: 5)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log conversion details"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Do not print the report"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O or conversion error
        - 2: Usage or options file error
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    # Resolve options: defaults <- config file <- flags
    options = ConvertOptions()
    if args.config is not None:
        if not args.config.exists():
            print(f"Error: Options file not found: {args.config}", file=sys.stderr)
            return 2
        try:
            options = parse_options_file(args.config)
        except (ValueError, yaml.YAMLError) as e:
            print(f"Error: Failed to parse options file: {e}", file=sys.stderr)
            return 2

    try:
        options = options.merged(
            exported_padding_factor=args.exported_padding_factor,
            fill=args.fill,
            fill_rule=args.fill_rule,
            precision=args.precision,
        )
    except ValueError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not args.input.exists():
        print(f"Error: SVG file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        _, report = convert_file(args.input, args.output, options)
    except SketchIconError as e:
        print(f"Error: Failed to convert SVG: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(format_convert_report(report))

    return 0


if __name__ == "__main__":
    sys.exit(main())
