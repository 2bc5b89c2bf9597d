#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/criticmarkup/renderer.py
"""Render an aligned block sequence as CriticMarkup.

Rendering rules per alignment entry:

- ``Inserted``: the block text in an insertion marker
- ``Deleted``: the block text in a deletion marker
- ``Matched`` + ``Unchanged``: the block text verbatim
- ``Matched`` + ``AtomicSubstitution``: one substitution marker with the
  whole before and after block texts
- ``Matched`` + ``GranularEdit``: the block prefix, then each segment

Block separators come from the after document: matched and inserted blocks
are preceded by their own separator as plain text. A deleted block carries
its separator inside its deletion marker, so accepting all changes never
leaves a stray blank line behind.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from criticdiff.criticmarkup.syntax import deletion, escape, insertion, substitution
from criticdiff.diff.models import (
    AlignmentEntry,
    AtomicSubstitution,
    BlockDiffDecision,
    Deleted,
    GranularEdit,
    Inserted,
    Matched,
    Segment,
    Unchanged,
)
from criticdiff.exceptions import ValidationError

logger = logging.getLogger(__name__)


class _MarkupWriter:
    """Accumulate output, merging adjacent plain text before escaping it."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._plain: list[str] = []

    def plain(self, text: str) -> None:
        if text:
            self._plain.append(text)

    def marker(self, markup: str) -> None:
        if not markup:
            return
        self._flush()
        self._parts.append(markup)

    def segment(self, segment: Segment) -> None:
        if segment.kind == "unchanged":
            self.plain(segment.text)
        elif segment.kind == "inserted":
            self.marker(insertion(segment.text))
        elif segment.kind == "deleted":
            self.marker(deletion(segment.text))
        elif segment.kind == "substituted":
            self.marker(substitution(segment.text, segment.new_text or ""))
        else:
            raise ValidationError(f"Unknown segment kind: {segment.kind!r}", parameter_value=segment)

    def _flush(self) -> None:
        if self._plain:
            self._parts.append(escape("".join(self._plain)))
            self._plain = []

    def getvalue(self) -> str:
        self._flush()
        return "".join(self._parts)


def render(alignment: Sequence[AlignmentEntry], decisions: Mapping[Matched, BlockDiffDecision]) -> str:
    """Render aligned blocks and their decisions as CriticMarkup.

    Parameters
    ----------
    alignment : sequence of AlignmentEntry
        Output of :func:`criticdiff.diff.aligner.align`
    decisions : Mapping[Matched, BlockDiffDecision]
        Decision for every ``Matched`` entry, keyed by the entry itself

    Returns
    -------
    str
        Annotated markdown. Accepting every change reproduces the after
        document's text.

    Raises
    ------
    ValidationError
        If a ``Matched`` entry has no decision or an entry has an unknown
        type

    Examples
    --------
    >>> from criticdiff.ast import Paragraph, Text
    >>> from criticdiff.diff.aligner import align
    >>> entries = align([Paragraph([Text("a")])], [Paragraph([Text("a")]), Paragraph([Text("b")])])
    >>> render(entries, {entries[0]: Unchanged()})
    'a\\n\\n{++b++}'

    """
    writer = _MarkupWriter()
    seen_matched = False

    for position, entry in enumerate(alignment):
        if isinstance(entry, Matched):
            decision = decisions.get(entry)
            if decision is None:
                raise ValidationError("No decision provided for a matched block", parameter_value=entry)
            writer.plain(entry.after.lead)
            _render_matched(writer, entry, decision)
            seen_matched = True
        elif isinstance(entry, Inserted):
            writer.plain(entry.after.lead)
            writer.marker(insertion(entry.after.text))
        elif isinstance(entry, Deleted):
            # Deletions ahead of the first matched block carry the separator that follows them
            if seen_matched:
                writer.marker(deletion(entry.before.lead + entry.before.text))
            else:
                writer.marker(deletion(entry.before.text + _next_before_lead(alignment, position)))
        else:
            raise ValidationError(f"Unknown alignment entry: {type(entry).__name__}", parameter_value=entry)

    return writer.getvalue()


def _next_before_lead(alignment: Sequence[AlignmentEntry], position: int) -> str:
    """Return the separator that follows a leading deleted block in the before document."""
    for entry in alignment[position + 1 :]:
        if isinstance(entry, (Matched, Deleted)):
            return entry.before.lead
    return ""


def _render_matched(writer: _MarkupWriter, entry: Matched, decision: BlockDiffDecision) -> None:
    if isinstance(decision, Unchanged):
        writer.plain(entry.after.text)
    elif isinstance(decision, AtomicSubstitution):
        writer.marker(substitution(decision.before_text, decision.after_text))
    elif isinstance(decision, GranularEdit):
        before_prefix = entry.before.prefix
        after_prefix = entry.after.prefix
        if before_prefix == after_prefix:
            writer.plain(after_prefix)
        else:
            writer.marker(substitution(before_prefix, after_prefix))
        for segment in decision.segments:
            writer.segment(segment)
    else:
        raise ValidationError(f"Unknown block decision: {type(decision).__name__}", parameter_value=decision)
