#!/usr/bin/env python3
"""
Main entry point for drupal-check.

Usage:
    drupal-check [check] path [--format table|json|junit] [-d] [-a] [-s] [-v]
    python3 -m drupal_check [check] path
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .checker import CheckCommand
from .models import CheckCategory, InvocationRequest, Verbosity

COMMAND_NAME = "check"

LOG_LEVELS = {
    Verbosity.QUIET: logging.ERROR,
    Verbosity.NORMAL: logging.WARNING,
    Verbosity.VERBOSE: logging.INFO,
    Verbosity.VERY_VERBOSE: logging.INFO,
    Verbosity.DEBUG: logging.DEBUG,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the `check` command parser."""
    parser = argparse.ArgumentParser(
        prog="drupal-check",
        description="Checks a Drupal site for deprecations, analysis and code style problems.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("path", help="The Drupal code path to inspect")
    parser.add_argument(
        "--format", default="table",
        help="Formatter to use: table, json, or junit (default: table)",
    )
    parser.add_argument("-d", "--deprecations", action="store_true", help="Check for deprecations")
    parser.add_argument("-a", "--analysis", action="store_true", help="Check code analysis")
    parser.add_argument("-s", "--style", action="store_true", help="Check code style")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity (-vvv for debug output)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print errors")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse arguments, accepting an optional leading `check` command name."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] == COMMAND_NAME:
        argv = argv[1:]
    return build_parser().parse_args(argv)


def build_request(args: argparse.Namespace) -> InvocationRequest:
    """Turn parsed arguments into an invocation request."""
    flags = {
        CheckCategory.DEPRECATIONS: args.deprecations,
        CheckCategory.ANALYSIS: args.analysis,
        CheckCategory.STYLE: args.style,
    }
    return InvocationRequest(
        path=args.path,
        categories=frozenset(category for category, on in flags.items() if on),
        output_format=args.format,
        verbosity=Verbosity.from_flags(args.verbose, args.quiet),
    )


def configure_logging(verbosity: Verbosity) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[verbosity],
        format="%(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None, command: Optional[CheckCommand] = None) -> int:
    """Main entry point for drupal-check."""
    request = build_request(parse_args(argv))
    configure_logging(request.verbosity)

    command = command or CheckCommand()
    try:
        return int(command.run(request))
    except Exception as e:
        # Debug runs get the full traceback.
        if request.is_debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
