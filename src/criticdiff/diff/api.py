#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/api.py
"""Python API for structural document comparison.

This module ties the pipeline together: two document trees are flattened
into blocks, aligned, classified pair by pair and rendered as CriticMarkup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from criticdiff.criticmarkup.renderer import render
from criticdiff.diff.aligner import AlignSource, align_blocks, as_blocks
from criticdiff.diff.blocks import serialize_blocks
from criticdiff.diff.classifier import classify
from criticdiff.diff.models import (
    AlignmentEntry,
    AtomicSubstitution,
    Block,
    BlockDiffDecision,
    Deleted,
    GranularEdit,
    Inserted,
    Matched,
    Unchanged,
)
from criticdiff.options import DiffOptions

logger = logging.getLogger(__name__)


@dataclass
class DiffStatistics:
    """Counts of alignment entries and decisions in a diff."""

    matched: int = 0
    inserted: int = 0
    deleted: int = 0
    unchanged: int = 0
    granular: int = 0
    substituted: int = 0

    @property
    def has_changes(self) -> bool:
        """Whether any block differs between the two documents."""
        return bool(self.inserted or self.deleted or self.granular or self.substituted)

    def to_dict(self) -> dict[str, int]:
        """Return the counts as a plain dictionary."""
        return {
            "matched": self.matched,
            "inserted": self.inserted,
            "deleted": self.deleted,
            "unchanged": self.unchanged,
            "granular": self.granular,
            "substituted": self.substituted,
        }


@dataclass
class DocumentDiff:
    """Result of comparing two documents.

    Parameters
    ----------
    before_blocks : list of Block
        Blocks of the before document
    after_blocks : list of Block
        Blocks of the after document
    alignment : list of AlignmentEntry
        Aligned block sequence
    decisions : dict
        Decision for every ``Matched`` entry
    markup : str
        Rendered CriticMarkup
    options : DiffOptions
        Options the diff was computed with

    """

    before_blocks: list[Block]
    after_blocks: list[Block]
    alignment: list[AlignmentEntry]
    decisions: dict[Matched, BlockDiffDecision]
    markup: str
    options: DiffOptions = field(default_factory=DiffOptions)

    @property
    def before_text(self) -> str:
        """Markdown text of the before document."""
        return serialize_blocks(self.before_blocks)

    @property
    def after_text(self) -> str:
        """Markdown text of the after document."""
        return serialize_blocks(self.after_blocks)

    @property
    def statistics(self) -> DiffStatistics:
        """Entry and decision counts."""
        stats = DiffStatistics()
        for entry in self.alignment:
            if isinstance(entry, Matched):
                stats.matched += 1
                decision = self.decisions[entry]
                if isinstance(decision, Unchanged):
                    stats.unchanged += 1
                elif isinstance(decision, GranularEdit):
                    stats.granular += 1
                elif isinstance(decision, AtomicSubstitution):
                    stats.substituted += 1
            elif isinstance(entry, Inserted):
                stats.inserted += 1
            elif isinstance(entry, Deleted):
                stats.deleted += 1
        return stats


def classify_alignment(
    alignment: list[AlignmentEntry], options: Optional[DiffOptions] = None
) -> dict[Matched, BlockDiffDecision]:
    """Classify every matched entry of an alignment independently."""
    options = options or DiffOptions()
    return {
        entry: classify(entry.before, entry.after, options) for entry in alignment if isinstance(entry, Matched)
    }


def diff_documents(
    before: AlignSource,
    after: AlignSource,
    options: Optional[DiffOptions] = None,
) -> DocumentDiff:
    """Compare two document trees.

    Parameters
    ----------
    before : Document or sequence of Node
        The before tree
    after : Document or sequence of Node
        The after tree
    options : DiffOptions, optional
        Alignment and classification options

    Returns
    -------
    DocumentDiff
        Alignment, per-block decisions and rendered CriticMarkup

    Raises
    ------
    MalformedTreeError
        If either tree does not have the expected node shape

    Examples
    --------
    >>> from criticdiff.ast import Document, Paragraph, Text
    >>> result = diff_documents(
    ...     Document([Paragraph([Text("The cat sat on the mat.")])]),
    ...     Document([Paragraph([Text("The cat sat on the rug.")])]),
    ... )
    >>> result.markup
    'The cat sat on the {--mat--}{++rug++}.'

    """
    options = options or DiffOptions()
    before_blocks = as_blocks(before)
    after_blocks = as_blocks(after)

    alignment = align_blocks(before_blocks, after_blocks, options)
    decisions = classify_alignment(alignment, options)
    markup = render(alignment, decisions)

    result = DocumentDiff(
        before_blocks=before_blocks,
        after_blocks=after_blocks,
        alignment=alignment,
        decisions=decisions,
        markup=markup,
        options=options,
    )
    logger.debug("Diff statistics: %s", result.statistics.to_dict())
    return result


def render_critic_markup(
    before: AlignSource,
    after: AlignSource,
    options: Optional[DiffOptions] = None,
) -> str:
    """Compare two document trees and return the CriticMarkup string."""
    return diff_documents(before, after, options).markup


def compare_markdown(before: str, after: str, options: Optional[DiffOptions] = None) -> DocumentDiff:
    """Parse two markdown strings and compare them.

    Requires the ``mistune`` package.

    Examples
    --------
    >>> compare_markdown("# Hello\\n- Two", "# Hello\\n- Two\\n- Three").markup
    '# Hello\\n\\n- Two\\n{++- Three++}'

    """
    from criticdiff.parsers.markdown import markdown_to_ast

    return diff_documents(markdown_to_ast(before), markdown_to_ast(after), options)
