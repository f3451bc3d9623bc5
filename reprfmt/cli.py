"""
Command line interface.

Usage:
    python -m reprfmt data.json config.toml
    cat data.json | python -m reprfmt - --no-pretty
    python -m reprfmt --help

Files are loaded by extension: `.json` as JSON, `.toml` as TOML, anything else as
a Python literal (see ast.literal_eval). `-` reads JSON from standard input.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import argparse
import ast
import json
import logging
import sys
from pathlib import Path
from typing import IO, Any, Sequence

# Third-party ----------------------------------------------------------------------------------------------------------
import toml

# Local ----------------------------------------------------------------------------------------------------------------
from .config import FormatOptions
from .console import auto_style
from .formatter import format
from .styles import ansi_style, no_style

logger = logging.getLogger(__name__)


# Methods --------------------------------------------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit status: 0 on success, 1 if an input cannot be read or parsed.
        Usage errors exit with status 2 from argparse.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = FormatOptions(
            pretty=args.pretty,
            indent=args.indent,
            limit_depth=args.limit_depth,
            max_complexity=args.max_complexity,
            style=_select_style(args.color, sys.stdout),
        )
    except (TypeError, ValueError) as ex:
        parser.error(str(ex))

    status = 0
    for source in args.files:
        try:
            value = load(source)
        except (OSError, ValueError, SyntaxError, toml.TomlDecodeError) as ex:
            logger.debug("Cannot load %s", source, exc_info=True)
            print(f"reprfmt: {source}: {ex}", file=sys.stderr)
            status = 1
            continue

        if len(args.files) > 1:
            print(f"{source}:")
        print(format(value, options))

    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print structured data in a human-readable form", prog="python -m reprfmt"
    )
    parser.add_argument("files", nargs="+", help="JSON, TOML or Python literal files, or - for JSON on stdin")
    parser.add_argument(
        "--pretty",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Break complex values over multiple lines (default: on)",
    )
    parser.add_argument("--indent", type=_indent, default="  ", help="Spaces per indentation level, or 'tab' (default: 2)")
    parser.add_argument("--limit-depth", type=int, default=None, help="Elide structures nested deeper than this")
    parser.add_argument(
        "--max-complexity", type=int, default=None, help="Complexity at which a structure is broken over lines"
    )
    parser.add_argument(
        "--color", choices=("auto", "always", "never"), default="auto", help="Colorize output (default: auto)"
    )
    return parser


def load(source: str, stdin: IO[str] | None = None) -> Any:
    """
    Load a value from a file, selecting the parser by file extension.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If JSON content is invalid, or a Python literal is malformed.
        SyntaxError: If Python literal content is not valid syntax.
        toml.TomlDecodeError: If TOML content is invalid.
    """
    if source == "-":
        return json.load(stdin if stdin is not None else sys.stdin)

    path = Path(source)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    if suffix == ".json":
        return json.loads(text)
    if suffix == ".toml":
        return toml.loads(text)
    return ast.literal_eval(text)


# Private Methods ------------------------------------------------------------------------------------------------------


def _indent(value: str) -> str:
    if value == "tab":
        return "\t"
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number of spaces or 'tab', got {value!r}") from None
    if width < 0:
        raise argparse.ArgumentTypeError(f"indent must be >= 0, got {width}")
    return " " * width


def _select_style(color: str, stream: IO):
    if color == "always":
        return ansi_style
    if color == "never":
        return no_style
    return auto_style(stream)
