#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/__init__.py
"""criticdiff - structural document diffs rendered as CriticMarkup.

criticdiff compares two versions of a parsed document tree block by
block and renders the result as annotated markdown: ``{++inserted++}``,
``{--deleted--}`` and ``{~~old~>new~~}`` markers inline with the
unchanged text. Small edits are shown word by word; heavily rewritten
blocks and sentences are shown as single substitutions. The companion
preprocessor parses annotated text back into typed segments for a
structured editor.

Examples
--------
    >>> from criticdiff import compare_markdown, accept_all
    >>> diff = compare_markdown("The cat sat on the mat.", "The cat sat on the rug.")
    >>> diff.markup
    'The cat sat on the {--mat--}{++rug++}.'
    >>> accept_all(diff.markup)
    'The cat sat on the rug.'

"""

from __future__ import annotations

from criticdiff.diff import (
    DocumentDiff,
    align,
    classify,
    compare_markdown,
    diff_documents,
    diff_text,
    document_text,
    render_critic_markup,
)
from criticdiff.criticmarkup import accept_all, preprocess, reject_all, render
from criticdiff.exceptions import (
    CriticDiffError,
    DependencyError,
    MalformedTreeError,
    ParsingError,
    ValidationError,
)
from criticdiff.options import DiffOptions

__version__ = "0.1.0"

__all__ = [
    "CriticDiffError",
    "DependencyError",
    "DiffOptions",
    "DocumentDiff",
    "MalformedTreeError",
    "ParsingError",
    "ValidationError",
    "__version__",
    "accept_all",
    "align",
    "classify",
    "compare_markdown",
    "diff_documents",
    "diff_text",
    "document_text",
    "preprocess",
    "reject_all",
    "render",
    "render_critic_markup",
]
