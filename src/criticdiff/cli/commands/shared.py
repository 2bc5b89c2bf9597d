#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/commands/shared.py
"""Shared utilities for criticdiff CLI commands.

Logging flags, reading documents from files or stdin, and writing
command output.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from criticdiff.logging_utils import configure_logging

STDIN_ARGUMENT = "-"


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    """Add ``--log-level``, ``--log-file`` and ``--trace`` to a parser."""
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    group.add_argument("--log-file", help="Also write log messages to this file")
    group.add_argument(
        "--trace",
        action="store_true",
        help="Debug logging with timestamps and logger names",
    )


def setup_logging(parsed_args: argparse.Namespace) -> None:
    """Set up logging from parsed ``add_logging_arguments`` flags."""
    # --trace takes precedence over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def parse_command_args(parser: argparse.ArgumentParser, args: list[str] | None) -> argparse.Namespace | int:
    """Parse ``args``, returning the exit code instead of raising SystemExit."""
    try:
        return parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0


def read_text_input(source: str) -> str:
    """Read a UTF-8 document from a path or from stdin (``-``).

    Raises
    ------
    OSError
        If the file cannot be read
    UnicodeDecodeError
        If the content is not valid UTF-8

    """
    if source == STDIN_ARGUMENT:
        return sys.stdin.buffer.read().decode("utf-8")
    return Path(source).read_text(encoding="utf-8")


def check_input_file(source: str) -> Optional[str]:
    """Return an error message if ``source`` is not a readable file path."""
    if source == STDIN_ARGUMENT:
        return None
    path = Path(source)
    if not path.exists():
        return f"Source file not found: {source}"
    if not path.is_file():
        return f"Source path is not a file: {source}"
    return None


def write_output(text: str, output_path: Optional[str] = None) -> None:
    """Write command output to a file, or to stdout ending with a newline."""
    if output_path:
        Path(output_path).write_text(text, encoding="utf-8")
        print(f"Output written to: {output_path}", file=sys.stderr)
        return

    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()
