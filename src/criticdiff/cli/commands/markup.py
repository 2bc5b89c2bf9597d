#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/commands/markup.py
"""Commands that read CriticMarkup files.

``preprocess`` prints the typed segments of an annotated document as JSON,
``accept`` prints the document with every change applied and ``reject``
prints it with every change reverted.
"""
import argparse
import sys
from typing import Callable

from criticdiff.cli.builder import EXIT_FILE_ERROR, EXIT_SUCCESS
from criticdiff.cli.commands.shared import (
    add_logging_arguments,
    check_input_file,
    parse_command_args,
    read_text_input,
    setup_logging,
    write_output,
)
from criticdiff.criticmarkup.preprocessor import accept_all, preprocess, reject_all


def _create_markup_parser(command: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"criticdiff {command}", description=description, add_help=True)
    parser.add_argument("input", help="CriticMarkup document (use '-' for stdin)")
    parser.add_argument("--output", "-o", help="Write result to file (default: stdout)")
    add_logging_arguments(parser)
    return parser


def _preprocess_to_json(markup: str) -> str:
    from criticdiff.diff.renderers.json import JsonDiffRenderer

    return JsonDiffRenderer().render_segments(preprocess(markup))


def _run_markup_command(
    command: str,
    description: str,
    transform: Callable[[str], str],
    args: list[str] | None,
) -> int:
    """Read one markup document, transform it and write the result."""
    parsed = parse_command_args(_create_markup_parser(command, description), args)
    if isinstance(parsed, int):
        return parsed

    setup_logging(parsed)

    problem = check_input_file(parsed.input)
    if problem:
        print(f"Error: {problem}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        markup = read_text_input(parsed.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        write_output(transform(markup), parsed.output)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


def handle_preprocess_command(args: list[str] | None = None) -> int:
    """Handle preprocess command: print CriticMarkup segments as JSON."""
    return _run_markup_command(
        "preprocess",
        "Parse a CriticMarkup document into unchanged, inserted, deleted and substituted segments",
        _preprocess_to_json,
        args,
    )


def handle_accept_command(args: list[str] | None = None) -> int:
    """Handle accept command: print the document with all changes accepted."""
    return _run_markup_command(
        "accept",
        "Print a CriticMarkup document with every change accepted",
        accept_all,
        args,
    )


def handle_reject_command(args: list[str] | None = None) -> int:
    """Handle reject command: print the document with all changes rejected."""
    return _run_markup_command(
        "reject",
        "Print a CriticMarkup document with every change rejected",
        reject_all,
        args,
    )
