"""Main CLI entry point for the markup-filter command-line tool.

Extracts the named elements from XML or HTML files and prints them either as
debug-rendered markup (one match per line) or as JSON.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from selective_markup_filter import __version__
from selective_markup_filter.api import iter_matches
from selective_markup_filter.shared import (
    ConfigError,
    ConfigValidationError,
    ExtractionConfig,
    FilterError,
    configure_logging,
    get_logger,
)
from selective_markup_filter.tokenization import open_cursor
from selective_markup_filter.tree import as_tag_set, render

EXIT_OK = 0
EXIT_FILTER_ERROR = 1
EXIT_USAGE_ERROR = 2


def parse_tag_names(value: str) -> List[str]:
    """Split a comma-separated ``--tags`` value."""
    names = [name.strip() for name in value.split(",") if name.strip()]
    if not names:
        raise argparse.ArgumentTypeError("at least one tag name is required")
    return names


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="markup-filter",
        description="Extract selected elements from XML or HTML documents"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files to read"
    )
    parser.add_argument(
        "--tags", "-t",
        type=parse_tag_names,
        required=True,
        help="Comma-separated tag names to extract, e.g. p,a,sup"
    )
    parser.add_argument(
        "--markup", "-m",
        choices=["xml", "html"],
        default="xml",
        help="Markup flavour of the input (default: xml)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--limit", "-n",
        type=int,
        help="Maximum number of matches per file"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum nesting depth inside a match"
    )
    parser.add_argument(
        "--strict-scope",
        action="store_true",
        help="Ignore everything inside tags that are not extracted"
    )
    parser.add_argument(
        "--self-closing-marker",
        action="store_true",
        help="Render self-closing matches as <name/> in text output"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Verbose logging (repeat for debug output)"
    )
    return parser


def build_config(args: argparse.Namespace) -> ExtractionConfig:
    """Load the configuration file and apply command-line overrides."""
    config = ExtractionConfig.from_file(args.config) if args.config else ExtractionConfig()
    overrides: Dict[str, Any] = {}
    if args.max_depth is not None:
        overrides["filter__max_depth"] = args.max_depth
    if args.strict_scope:
        overrides["filter__descend_into_unmatched"] = False
    return config.override(**overrides) if overrides else config


def process_file(
    path: Path,
    args: argparse.Namespace,
    config: ExtractionConfig,
    out: TextIO
) -> Dict[str, Any]:
    """Extract matches from one file.

    In text mode matches are written to ``out`` as soon as they are built. The
    returned dictionary holds the JSON-ready matches in JSON mode only.
    """
    names = as_tag_set(args.tags)
    if args.markup == "html":
        names = frozenset(name.lower() for name in names)

    result: Dict[str, Any] = {"file": str(path), "success": True, "match_count": 0}
    matches: List[Dict[str, Any]] = []
    try:
        with open_cursor(path, args.markup, config.tokenizer, config.correlation_id) as cursor:
            for element in iter_matches(cursor, names, config, args.limit):
                result["match_count"] += 1
                if args.format == "json":
                    matches.append(element.to_dict())
                else:
                    print(render(element, args.self_closing_marker), file=out)
    except (FilterError, OSError) as e:
        result["success"] = False
        result["error"] = str(e)
        result["error_type"] = type(e).__name__

    if args.format == "json":
        result["matches"] = matches
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger(__name__, None, "cli")

    if args.limit is not None and args.limit < 0:
        print("Error: --limit must be >= 0", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        if isinstance(e, ConfigValidationError):
            for suggestion in e.suggestions:
                print(f"  Suggestion: {suggestion}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    results = []
    try:
        for path in args.paths:
            result = process_file(path, args, config, sys.stdout)
            if not result["success"]:
                print(f"Error: {path}: {result['error']}", file=sys.stderr)
            results.append(result)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    if args.format == "json":
        print(json.dumps(results, indent=2))

    failed = sum(1 for r in results if not r["success"])
    logger.info(
        "Processed files",
        extra={"file_count": len(results), "failed": failed},
    )
    return EXIT_FILTER_ERROR if failed else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
