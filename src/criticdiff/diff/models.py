#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/models.py
"""Value types shared by the aligner, classifier and renderers.

Everything here is created fresh for a single diff call and discarded
afterwards. Alignment entries compare by identity so they can key the
decision mapping handed to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from criticdiff.ast.nodes import Node
from criticdiff.constants import SegmentKind


@dataclass(slots=True)
class Segment:
    """A typed run of text in a diff.

    ``substituted`` segments carry the old text in ``text`` and the new
    text in ``new_text``; every other kind leaves ``new_text`` unset.
    """

    kind: SegmentKind
    text: str
    new_text: Optional[str] = None

    @property
    def before(self) -> str:
        """Text this segment contributes to the before side."""
        if self.kind == "inserted":
            return ""
        return self.text

    @property
    def after(self) -> str:
        """Text this segment contributes to the after side."""
        if self.kind == "deleted":
            return ""
        if self.kind == "substituted":
            return self.new_text or ""
        return self.text

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-serializable representation."""
        data = {"kind": self.kind, "text": self.text}
        if self.kind == "substituted":
            data["new_text"] = self.new_text or ""
        return data


def before_text(segments: Iterable[Segment]) -> str:
    """Concatenate the before side of a segment sequence."""
    return "".join(segment.before for segment in segments)


def after_text(segments: Iterable[Segment]) -> str:
    """Concatenate the after side of a segment sequence."""
    return "".join(segment.after for segment in segments)


def coalesce_segments(segments: Iterable[Segment]) -> list[Segment]:
    """Merge adjacent segments of the same kind and drop empty ones.

    Substitutions are never merged with each other.
    """
    merged: list[Segment] = []
    for segment in segments:
        if segment.kind == "substituted":
            if segment.text or segment.new_text:
                merged.append(Segment("substituted", segment.text, segment.new_text or ""))
            continue
        if not segment.text:
            continue
        if merged and merged[-1].kind == segment.kind:
            merged[-1] = Segment(segment.kind, merged[-1].text + segment.text)
        else:
            merged.append(Segment(segment.kind, segment.text))
    return merged


@dataclass(frozen=True)
class BlockSignature:
    """Comparable representation of a block used for alignment.

    Parameters
    ----------
    key : tuple
        Block kind followed by its structural attributes (heading level,
        list ordering, task status, code language, nesting). Blocks can
        only be paired when their keys are equal.
    text : str
        Whitespace-normalized plain text of the block

    """

    key: tuple
    text: str


@dataclass(frozen=True, eq=False)
class Block:
    """One alignable unit of a document.

    Parameters
    ----------
    node : Node
        The source node (a block node, or the list item owning the text)
    kind : str
        Block kind, one of the values of ``BlockKind``
    prefix : str
        Markdown that introduces the block (quote markers, list marker,
        heading hashes)
    body : str
        Markdown text of the block content
    lead : str
        Separator placed before the block in its own document
    structure : tuple
        Structural attributes that must match for two blocks to pair
    plain_text : str
        Whitespace-normalized plain text used in the signature
    atomic : bool
        Whether any change renders the whole block as a substitution

    """

    node: Node
    kind: str
    prefix: str
    body: str
    lead: str
    structure: tuple
    plain_text: str
    atomic: bool

    @property
    def text(self) -> str:
        """Full markdown text of the block, prefix included."""
        return self.prefix + self.body

    @property
    def signature(self) -> BlockSignature:
        """Signature used by the aligner to detect identical blocks."""
        return BlockSignature((self.kind, *self.structure), self.plain_text)


# ============================================================================
# Alignment Entries
# ============================================================================


@dataclass(frozen=True, eq=False)
class Matched:
    """Pair of blocks aligned between the before and after documents."""

    before: Block
    after: Block


@dataclass(frozen=True, eq=False)
class Inserted:
    """Block present only in the after document."""

    after: Block


@dataclass(frozen=True, eq=False)
class Deleted:
    """Block present only in the before document."""

    before: Block


AlignmentEntry = Union[Matched, Inserted, Deleted]


# ============================================================================
# Block Diff Decisions
# ============================================================================


@dataclass(frozen=True)
class Unchanged:
    """Matched blocks are identical and render verbatim."""


@dataclass(frozen=True)
class AtomicSubstitution:
    """Matched blocks differ too much for inline edits.

    Parameters
    ----------
    before_text : str
        Full text of the before block
    after_text : str
        Full text of the after block

    """

    before_text: str
    after_text: str


@dataclass(frozen=True)
class GranularEdit:
    """Matched blocks render as inline edits of the block body.

    Parameters
    ----------
    segments : tuple of Segment
        Segments whose before side is the before body and whose after side
        is the after body. May contain ``substituted`` segments for
        sentences that were rewritten as a whole.

    """

    segments: tuple[Segment, ...]


BlockDiffDecision = Union[Unchanged, AtomicSubstitution, GranularEdit]
