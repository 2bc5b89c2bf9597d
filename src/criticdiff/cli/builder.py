#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/builder.py
"""Top-level parser and exit codes for the criticdiff command line.

Each subcommand builds its own parser in :mod:`criticdiff.cli.commands`;
the parser here only describes the command set for ``--help``.
"""

from __future__ import annotations

import argparse

from criticdiff.exceptions import (
    DependencyError,
    MalformedTreeError,
    ParsingError,
    ValidationError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6

COMMAND_SUMMARIES = {
    "diff": "Compare two markdown documents and print CriticMarkup",
    "preprocess": "Parse a CriticMarkup file into typed segments (JSON)",
    "accept": "Print a CriticMarkup file with every change accepted",
    "reject": "Print a CriticMarkup file with every change rejected",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level parser used for ``criticdiff --help``.

    Returns
    -------
    argparse.ArgumentParser
        Parser listing the available subcommands

    """
    parser = argparse.ArgumentParser(
        prog="criticdiff",
        description="Structural document diffs rendered as CriticMarkup.",
        epilog="Run 'criticdiff <command> --help' for the options of a command.",
    )
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command", title="commands", metavar="<command>")
    for name, summary in COMMAND_SUMMARIES.items():
        subparsers.add_parser(name, help=summary)

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    # Bad options and malformed input trees are both caller errors
    if isinstance(exception, (ValidationError, MalformedTreeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (OSError, UnicodeDecodeError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    return EXIT_ERROR
