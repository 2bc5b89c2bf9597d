#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/criticmarkup/__init__.py
"""CriticMarkup rendering and parsing.

Rendering turns an aligned, classified block sequence into annotated
text; preprocessing turns annotated text back into typed segments for an
editor. Every rendered string is valid preprocessor input, and accepting
all of its changes reproduces the after document.
"""

from criticdiff.criticmarkup.preprocessor import (
    accept_all,
    preprocess,
    reconstruct_after,
    reconstruct_before,
    reject_all,
    summarize,
)
from criticdiff.criticmarkup.renderer import render
from criticdiff.criticmarkup.syntax import escape, unescape

__all__ = [
    "accept_all",
    "escape",
    "preprocess",
    "reconstruct_after",
    "reconstruct_before",
    "reject_all",
    "render",
    "summarize",
    "unescape",
]
