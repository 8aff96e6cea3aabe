"""Command line interface for jsondiffer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .engine import JsonDiffEngine
from .exceptions import JsonDiffError
from .models import CompareOptions, EngineConfig, LogLevel
from .profile import load_profile
from .render import format_json, format_result
from .utils import max_supported_depth

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 2


def _depth_limit(value: str) -> int:
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}") from None
    limit = max_supported_depth()
    if not 1 <= depth <= limit:
        raise argparse.ArgumentTypeError(f"depth must be between 1 and {limit}, got {depth}")
    return depth


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-diff",
        description="Compare two JSON files and report path-addressed differences",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  json-diff file1.json file2.json
  json-diff file1.json file2.json -o diff.txt
  json-diff file1.json file2.json -p profile.yaml
  json-diff file1.json file2.json -p profile.toml --format json
        """
    )

    parser.add_argument("file1", help="First (source) JSON file")
    parser.add_argument("file2", help="Second (target) JSON file")
    parser.add_argument("-p", "--profile", help="Profile with comparison rules (YAML, JSON or TOML)")
    parser.add_argument("-o", "--output", help="Output file for the diff (stdout if not specified)")
    parser.add_argument("-S", "--symbols", action="store_true",
                        help="Use symbols instead of readable text for diff types")
    parser.add_argument("--format", choices=("text", "json"), default="text",
                        help="Output format (default: text)")
    parser.add_argument("--fail-on-diff", action="store_true",
                        help="Exit with status 1 when differences are found")
    parser.add_argument("--max-depth", type=_depth_limit, default=EngineConfig.max_depth,
                        help="Maximum nesting depth accepted in input documents "
                             f"(at most {max_supported_depth()}, the comparison is recursive)")
    parser.add_argument("--no-lines", action="store_true",
                        help="Do not correlate differences with source line numbers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        log_level = LogLevel.DEBUG
    elif args.quiet:
        log_level = LogLevel.ERROR
    else:
        log_level = LogLevel.WARN

    config = EngineConfig(
        max_depth=args.max_depth,
        resolve_lines=not args.no_lines,
        log_level=log_level,
    )
    logging.basicConfig(
        level=config.log_level.value,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_profile(args.profile) if args.profile else CompareOptions()
        result = JsonDiffEngine(config).compare_files(args.file1, args.file2, options)
    except JsonDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.format == "json":
        output = format_json(result) + "\n"
    else:
        output = format_result(result, readable=not args.symbols)

    if args.output:
        try:
            Path(args.output).write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error: Failed to write diff result to {args.output}: {e}", file=sys.stderr)
            return EXIT_ERROR
        logger.info("Diff written to %s", args.output)
    else:
        sys.stdout.write(output)

    if args.fail_on_diff and not result.is_identical:
        return EXIT_DIFFERENCES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
