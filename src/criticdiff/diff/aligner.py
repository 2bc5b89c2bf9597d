#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/aligner.py
"""Block-level alignment of two document trees.

The aligner pairs the blocks of the before and after documents with a
weighted longest-common-subsequence:

- blocks with equal signatures pair with an anchor weight larger than any
  number of similar pairs, so the alignment keeps as many identical
  blocks as possible;
- blocks with the same kind and structure (heading level, list type, task
  status, code language, nesting) pair with weight 1 when their word
  similarity reaches ``DiffOptions.block_pairing_min_similarity``, filling
  the gaps between identical blocks;
- everything else cannot pair. A structural change therefore shows up as
  a deletion followed by an insertion.

Unpaired before blocks become :class:`Deleted` entries and unpaired after
blocks :class:`Inserted` entries. Within each gap between two pairs the
deletions are emitted before the insertions.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from criticdiff.ast.nodes import Document, Node
from criticdiff.diff.blocks import collect_blocks
from criticdiff.diff.classifier import divergence_ratio
from criticdiff.diff.lcs import anchor_weight, weighted_lcs
from criticdiff.diff.models import AlignmentEntry, Block, Deleted, Inserted, Matched
from criticdiff.options import DiffOptions

logger = logging.getLogger(__name__)

AlignSource = Union[Document, Sequence[Node], Sequence[Block]]


def as_blocks(source: AlignSource) -> list[Block]:
    """Return blocks for a tree, a list of block nodes, or already collected blocks."""
    if isinstance(source, (list, tuple)) and source and all(isinstance(item, Block) for item in source):
        return list(source)
    return collect_blocks(source)  # type: ignore[arg-type]


def pair_weight(before: Block, after: Block, options: DiffOptions) -> int:
    """Score how strongly two blocks should be paired.

    Returns
    -------
    int
        2 for identical signatures, 1 for admissible similar blocks, 0 when
        the blocks cannot be paired. :func:`align_blocks` turns 2 into an
        anchor weight that outranks every set of similar pairs

    """
    before_signature = before.signature
    after_signature = after.signature
    if before_signature == after_signature:
        return 2
    if before_signature.key != after_signature.key:
        return 0
    if options.block_pairing_min_similarity <= 0.0:
        return 1
    similarity = 1.0 - divergence_ratio(before.body, after.body)
    return 1 if similarity >= options.block_pairing_min_similarity else 0


def align_blocks(
    before: Sequence[Block], after: Sequence[Block], options: Optional[DiffOptions] = None
) -> list[AlignmentEntry]:
    """Align two flattened block lists.

    Parameters
    ----------
    before : sequence of Block
        Blocks of the before document
    after : sequence of Block
        Blocks of the after document
    options : DiffOptions, optional
        Pairing options; defaults are used when omitted

    Returns
    -------
    list of AlignmentEntry
        Entries covering every block of both lists exactly once

    """
    options = options or DiffOptions()
    identical = anchor_weight(len(before), len(after))

    def weight(i: int, j: int) -> int:
        tier = pair_weight(before[i], after[j], options)
        return identical if tier == 2 else tier

    pairs = weighted_lcs(len(before), len(after), weight)

    entries: list[AlignmentEntry] = []
    i = j = 0
    for pair_i, pair_j in [*pairs, (len(before), len(after))]:
        entries.extend(Deleted(block) for block in before[i:pair_i])
        entries.extend(Inserted(block) for block in after[j:pair_j])
        if pair_i < len(before) and pair_j < len(after):
            entries.append(Matched(before[pair_i], after[pair_j]))
        i, j = pair_i + 1, pair_j + 1

    logger.debug(
        "Aligned %d before / %d after blocks into %d entries (%d matched)",
        len(before),
        len(after),
        len(entries),
        len(pairs),
    )
    return entries


def align(before: AlignSource, after: AlignSource, options: Optional[DiffOptions] = None) -> list[AlignmentEntry]:
    """Align the blocks of two document trees.

    Parameters
    ----------
    before : Document, sequence of Node or sequence of Block
        The before tree, its top-level block nodes, or already collected
        blocks
    after : Document, sequence of Node or sequence of Block
        The after tree in the same forms
    options : DiffOptions, optional
        Pairing options; defaults are used when omitted

    Returns
    -------
    list of AlignmentEntry
        ``Matched``, ``Inserted`` and ``Deleted`` entries in document order.
        ``Matched`` + ``Deleted`` entries cover every before block and
        ``Matched`` + ``Inserted`` entries cover every after block.

    Raises
    ------
    MalformedTreeError
        If either tree does not have the expected node shape

    Examples
    --------
    >>> from criticdiff.ast import Paragraph, Text
    >>> entries = align([Paragraph([Text("a")])], [Paragraph([Text("a")]), Paragraph([Text("b")])])
    >>> [type(entry).__name__ for entry in entries]
    ['Matched', 'Inserted']

    """
    return align_blocks(as_blocks(before), as_blocks(after), options)
