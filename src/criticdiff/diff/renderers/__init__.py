#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/renderers/__init__.py
"""Output renderers for diffs and CriticMarkup segments."""

from criticdiff.diff.renderers.json import JsonDiffRenderer
from criticdiff.diff.renderers.terminal import TerminalDiffRenderer

__all__ = ["JsonDiffRenderer", "TerminalDiffRenderer"]
