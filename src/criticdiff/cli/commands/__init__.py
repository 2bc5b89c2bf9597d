#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/commands/__init__.py
"""CLI command handlers for criticdiff.

Each handler takes the arguments after the command name and returns an
exit code.
"""

import logging
import sys

# Command handlers are imported lazily in dispatch_command so that
# ``criticdiff --help`` does not load the diff engine or mistune

logger = logging.getLogger(__name__)

COMMANDS = ("diff", "preprocess", "accept", "reject")


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Run the subcommand named by the first argument.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments

    Returns
    -------
    int or None
        Exit code if a command was handled, None otherwise

    """
    if not args:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] == "diff":
        from criticdiff.cli.commands.diff import handle_diff_command

        return handle_diff_command(args[1:])

    if args[0] == "preprocess":
        from criticdiff.cli.commands.markup import handle_preprocess_command

        return handle_preprocess_command(args[1:])

    if args[0] == "accept":
        from criticdiff.cli.commands.markup import handle_accept_command

        return handle_accept_command(args[1:])

    if args[0] == "reject":
        from criticdiff.cli.commands.markup import handle_reject_command

        return handle_reject_command(args[1:])

    return None


__all__ = ["COMMANDS", "dispatch_command"]
