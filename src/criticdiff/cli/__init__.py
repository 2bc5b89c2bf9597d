#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/__init__.py
"""Command-line interface for criticdiff.

Usage::

    criticdiff diff before.md after.md              # CriticMarkup on stdout
    criticdiff diff before.md after.md -f json      # structured report
    criticdiff preprocess review.md                 # typed segments as JSON
    criticdiff accept review.md -o final.md         # apply every change
    criticdiff reject review.md                     # revert every change
"""

import logging
import sys

from criticdiff.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR, create_parser
from criticdiff.cli.commands import dispatch_command

logger = logging.getLogger(__name__)

__all__ = ["main"]


def main(args: list[str] | None = None) -> int:
    """Execute the criticdiff command line.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()

    if not args:
        parser.print_usage(sys.stderr)
        print("Error: a command is required", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if args[0] in ("-h", "--help"):
        parser.print_help()
        return EXIT_SUCCESS

    if args[0] in ("-v", "--version"):
        from criticdiff import __version__

        print(f"criticdiff {__version__}")
        return EXIT_SUCCESS

    result = dispatch_command(args)
    if result is not None:
        return result

    parser.print_usage(sys.stderr)
    print(f"Error: unknown command '{args[0]}'", file=sys.stderr)
    return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
