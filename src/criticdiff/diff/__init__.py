#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/__init__.py
"""Structural document diffing.

This package compares two document trees block by block:

- :mod:`~criticdiff.diff.blocks` flattens trees into alignable blocks
- :mod:`~criticdiff.diff.aligner` pairs the blocks of both trees
- :mod:`~criticdiff.diff.classifier` decides between inline edits and
  whole-block substitutions for each pair
- :mod:`~criticdiff.diff.text_diff` produces word or character segments

Examples
--------
    >>> from criticdiff.diff import compare_markdown
    >>> compare_markdown("The cat sat.", "The dog sat.").markup
    'The {--cat--}{++dog++} sat.'

"""

from criticdiff.diff.models import (
    AlignmentEntry,
    AtomicSubstitution,
    Block,
    BlockDiffDecision,
    BlockSignature,
    Deleted,
    GranularEdit,
    Inserted,
    Matched,
    Segment,
    Unchanged,
    after_text,
    before_text,
)
from criticdiff.diff.text_diff import diff_text, tokenize
from criticdiff.diff.blocks import collect_blocks, document_text
from criticdiff.diff.classifier import classify, divergence_ratio
from criticdiff.diff.aligner import align
from criticdiff.diff.api import DocumentDiff, compare_markdown, diff_documents, render_critic_markup

__all__ = [
    "AlignmentEntry",
    "AtomicSubstitution",
    "Block",
    "BlockDiffDecision",
    "BlockSignature",
    "Deleted",
    "DocumentDiff",
    "GranularEdit",
    "Inserted",
    "Matched",
    "Segment",
    "Unchanged",
    "after_text",
    "align",
    "before_text",
    "classify",
    "collect_blocks",
    "compare_markdown",
    "diff_documents",
    "diff_text",
    "divergence_ratio",
    "document_text",
    "render_critic_markup",
    "tokenize",
]
