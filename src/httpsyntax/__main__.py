"""
=============================================================================
HTTPSYNTAX CLI ENTRY POINT
=============================================================================

Parses a request-syntax document and prints the result as JSON.

=============================================================================
USAGE
=============================================================================

    # Parse a file
    python -m httpsyntax request.http

    # Parse stdin
    cat request.http | python -m httpsyntax

    # File written on Windows
    python -m httpsyntax --line-ending crlf request.http

    # Show every classifier transition on stderr
    python -m httpsyntax --log-level DEBUG request.http

Exit codes:

    0   Parsed, JSON written to stdout
    1   Document could not be parsed (HTTPParseError)
    2   Bad arguments or unreadable input file

=============================================================================
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from . import __version__
from .config import LINE_ENDINGS, LOG_LEVELS, ParserConfig, line_ending, setup_logging
from .http import HTTPParseError, RequestParser


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpsyntax",
        description="Parse an IDE-style HTTP request file into JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpsyntax request.http                  # Parse a file
  cat request.http | python -m httpsyntax            # Parse stdin
  python -m httpsyntax --line-ending crlf req.http   # Windows line endings
        """
    )

    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Request file to parse (default: - for stdin)"
    )

    parser.add_argument(
        "--line-ending", "-e",
        choices=sorted(LINE_ENDINGS),
        default=None,
        help="Line ending of the document (default: lf, or HTTPSYNTAX_LINE_ENDING)"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: WARNING, or HTTPSYNTAX_LOG_LEVEL)"
    )

    parser.add_argument(
        "--indent", "-i",
        type=int,
        default=2,
        help="JSON indentation (default: 2)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpsyntax {__version__}"
    )

    return parser


def read_document(path: str) -> str:
    """Read the document from path, or stdin for "-"."""
    # Bytes, so "\r\n" survives for --line-ending crlf
    if path == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    with open(path, "r", encoding="utf-8", newline="") as in_file:
        return in_file.read()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    # =========================================================================
    # CREATE CONFIGURATION
    # =========================================================================
    # Environment first, CLI flags on top

    try:
        config = ParserConfig.from_env()
        if args.line_ending:
            config = replace(config, line_delimiter=line_ending(args.line_ending))
        if args.log_level:
            config = replace(config, log_level=args.log_level)
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config)

    # =========================================================================
    # READ AND PARSE
    # =========================================================================

    try:
        document = read_document(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError:
        print(f"Error: {args.file} is not UTF-8", file=sys.stderr)
        return 2

    try:
        request = RequestParser(config).parse(document)
    except HTTPParseError as e:
        logger.debug(f"Parse failed with reason {e.reason.value}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(request.to_dict(), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
