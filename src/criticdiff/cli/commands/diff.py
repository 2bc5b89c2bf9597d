#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/commands/diff.py
"""Structural markdown comparison command.

This module provides the diff command: both documents are parsed into
trees, compared block by block and printed as CriticMarkup, as a JSON
report, or as CriticMarkup with terminal colors. Diff options come from a
configuration file and can be overridden on the command line.
"""
import argparse
import logging
import os
import sys
from typing import Any, Dict, get_args

from criticdiff.cli.builder import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    get_exit_code_for_exception,
)
from criticdiff.cli.commands.shared import (
    STDIN_ARGUMENT,
    add_logging_arguments,
    check_input_file,
    parse_command_args,
    read_text_input,
    setup_logging,
    write_output,
)
from criticdiff.cli.config import CONFIG_ENV_VAR, load_config_with_priority, merge_configs
from criticdiff.constants import DiffOutputFormat
from criticdiff.exceptions import CriticDiffError
from criticdiff.options import DiffOptions

logger = logging.getLogger(__name__)


def _validate_threshold(value: str) -> float:
    """Validate a threshold is a number between 0 and 1.

    Raises
    ------
    argparse.ArgumentTypeError
        If value is not a number in [0, 1]

    """
    try:
        fvalue = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"threshold must be a number, got '{value}'") from e

    if not 0.0 <= fvalue <= 1.0:
        raise argparse.ArgumentTypeError(f"threshold must be between 0 and 1, got {fvalue}")

    return fvalue


def _create_diff_parser() -> argparse.ArgumentParser:
    """Create argparse parser for diff command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for diff command

    """
    parser = argparse.ArgumentParser(
        prog="criticdiff diff",
        description="Compare two markdown documents and print the changes as CriticMarkup",
        add_help=True,
    )

    parser.add_argument("before", help="Original markdown document (use '-' for stdin)")
    parser.add_argument("after", help="Modified markdown document (use '-' for stdin)")

    parser.add_argument(
        "--format",
        "-f",
        choices=list(get_args(DiffOutputFormat)),
        default="markup",
        help="Output format: markup (default, CriticMarkup), json (structured), color (ANSI CriticMarkup)",
    )
    parser.add_argument("--output", "-o", help="Write diff to file (default: stdout)")

    parser.add_argument(
        "--granularity",
        choices=["word", "character"],
        default=None,
        help="Token granularity for in-block edits (default: word)",
    )
    parser.add_argument(
        "--paragraph-threshold",
        type=_validate_threshold,
        default=None,
        help="Divergence above which a whole block is substituted (default: 0.40)",
    )
    parser.add_argument(
        "--sentence-threshold",
        type=_validate_threshold,
        default=None,
        help="Divergence above which a whole sentence is substituted (default: 0.15)",
    )
    parser.add_argument(
        "--no-sentence-pass",
        dest="sentence_pass",
        action="store_const",
        const=False,
        default=None,
        help="Diff edited blocks word by word without sentence pairing",
    )

    parser.add_argument("--config", help="Path to configuration file (TOML, YAML or JSON)")
    parser.add_argument(
        "--no-config",
        action="store_true",
        help=f"Ignore configuration files and ${CONFIG_ENV_VAR}",
    )

    add_logging_arguments(parser)
    return parser


def build_diff_options(parsed: argparse.Namespace) -> DiffOptions:
    """Combine configuration file values with command line overrides.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration file cannot be loaded
    ValidationError
        If the combined values are not valid diff options

    """
    config: Dict[str, Any] = {}
    if not parsed.no_config:
        config = load_config_with_priority(parsed.config, os.environ.get(CONFIG_ENV_VAR))

    overrides = {
        "text_granularity": parsed.granularity,
        "paragraph_atomic_threshold": parsed.paragraph_threshold,
        "sentence_atomic_threshold": parsed.sentence_threshold,
        "sentence_pass": parsed.sentence_pass,
    }
    merged = merge_configs(config, {key: value for key, value in overrides.items() if value is not None})
    return DiffOptions.from_dict(merged)


def _render(diff: Any, output_format: str, to_file: bool) -> str:
    if output_format == "json":
        from criticdiff.diff.renderers.json import JsonDiffRenderer

        return JsonDiffRenderer().render(diff)

    if output_format == "color":
        from criticdiff.diff.renderers.terminal import TerminalDiffRenderer

        # Never write escape codes to a file
        return TerminalDiffRenderer(use_color=not to_file).render(diff.markup)

    return diff.markup


def handle_diff_command(args: list[str] | None = None) -> int:
    """Handle diff command to compare two markdown documents.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'diff')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parsed = parse_command_args(_create_diff_parser(), args)
    if isinstance(parsed, int):
        return parsed

    setup_logging(parsed)

    if parsed.before == STDIN_ARGUMENT and parsed.after == STDIN_ARGUMENT:
        print("Error: Cannot read both before and after from stdin", file=sys.stderr)
        return EXIT_FILE_ERROR

    for source in (parsed.before, parsed.after):
        problem = check_input_file(source)
        if problem:
            print(f"Error: {problem}", file=sys.stderr)
            return EXIT_FILE_ERROR

    try:
        options = build_diff_options(parsed)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except CriticDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    try:
        before_text = read_text_input(parsed.before)
        after_text = read_text_input(parsed.after)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        from criticdiff.diff.api import compare_markdown

        diff = compare_markdown(before_text, after_text, options)
    except CriticDiffError as e:
        print(f"Error comparing documents: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected failure while comparing documents", exc_info=True)
        print(f"Error comparing documents: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not diff.statistics.has_changes:
        print("No differences found.", file=sys.stderr)

    try:
        write_output(_render(diff, parsed.format, bool(parsed.output)), parsed.output)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS
