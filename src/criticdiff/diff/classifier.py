#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/classifier.py
"""Decide how a matched pair of blocks is rendered.

A matched pair is either unchanged, rewritten as one atomic substitution,
or shown as granular inline edits. The choice depends only on the pair
itself and the :class:`~criticdiff.options.DiffOptions` thresholds.

Divergence metric
-----------------
The divergence ratio of two texts is the word-level insert/delete edit
distance normalized by the longer text::

    divergence = 1 - LCS(words_a, words_b) / max(len(words_a), len(words_b))

Words are the non-whitespace tokens of the word tokenizer, so punctuation
marks count as words and markdown links or code spans count as one word
each. The ratio is 0 for texts with the same words and 1 when they share
none or when either side has no words at all.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from criticdiff.ast.nodes import Node
from criticdiff.diff.blocks import make_block
from criticdiff.diff.lcs import anchor_weight, lcs_length, weighted_lcs
from criticdiff.diff.models import (
    AtomicSubstitution,
    Block,
    BlockDiffDecision,
    GranularEdit,
    Segment,
    Unchanged,
    coalesce_segments,
)
from criticdiff.diff.sentences import split_sentences
from criticdiff.diff.text_diff import diff_text, word_tokens
from criticdiff.options import DiffOptions

logger = logging.getLogger(__name__)


def divergence_ratio(before: str, after: str) -> float:
    """Return the normalized word-level divergence of two texts.

    Parameters
    ----------
    before : str
        Original text
    after : str
        Updated text

    Returns
    -------
    float
        Value in [0, 1]; 0 means the same words, 1 means nothing in common
        or an empty side

    Examples
    --------
    >>> round(divergence_ratio("The cat sat on the mat.", "The cat sat on the rug."), 3)
    0.143

    """
    if before == after:
        return 0.0
    before_words = word_tokens(before)
    after_words = word_tokens(after)
    if not before_words or not after_words:
        return 1.0
    common = lcs_length(before_words, after_words)
    return 1.0 - common / max(len(before_words), len(after_words))


def _split_trailing_whitespace(sentence: str) -> tuple[str, str]:
    core = sentence.rstrip()
    return core, sentence[len(core) :]


def sentence_segments(before: str, after: str, options: DiffOptions) -> list[Segment]:
    """Diff two block bodies, substituting heavily rewritten sentences whole.

    Sentences are paired with a weighted LCS that keeps as many identical
    sentences as possible, then adds sentences whose divergence is below
    ``sentence_pairing_threshold``. A paired sentence whose divergence exceeds
    ``sentence_atomic_threshold`` becomes one ``substituted`` segment; the
    other paired sentences are diffed word by word and unpaired sentences
    become pure insertions or deletions. When no sentence is substituted,
    the result is the plain text diff of the two bodies.

    Parameters
    ----------
    before : str
        Before block body
    after : str
        After block body
    options : DiffOptions
        Thresholds and text granularity

    Returns
    -------
    list of Segment
        Segments whose before side is ``before`` and whose after side is
        ``after``

    """
    granularity = options.text_granularity
    before_sentences = [_split_trailing_whitespace(s) for s in split_sentences(before)]
    after_sentences = [_split_trailing_whitespace(s) for s in split_sentences(after)]

    ratios: dict[tuple[int, int], float] = {}
    identical = anchor_weight(len(before_sentences), len(after_sentences))

    def weight(i: int, j: int) -> int:
        before_core = before_sentences[i][0]
        after_core = after_sentences[j][0]
        if before_core == after_core:
            ratios[(i, j)] = 0.0
            return identical
        ratio = divergence_ratio(before_core, after_core)
        ratios[(i, j)] = ratio
        return 1 if ratio < options.sentence_pairing_threshold else 0

    pairs = weighted_lcs(len(before_sentences), len(after_sentences), weight)
    if not any(ratios[pair] > options.sentence_atomic_threshold for pair in pairs):
        return diff_text(before, after, granularity)

    segments: list[Segment] = []
    i = j = 0
    for pair_i, pair_j in [*pairs, (len(before_sentences), len(after_sentences))]:
        segments.extend(Segment("deleted", "".join(s)) for s in before_sentences[i:pair_i])
        segments.extend(Segment("inserted", "".join(s)) for s in after_sentences[j:pair_j])
        if pair_i < len(before_sentences) and pair_j < len(after_sentences):
            before_core, before_space = before_sentences[pair_i]
            after_core, after_space = after_sentences[pair_j]
            if ratios[(pair_i, pair_j)] > options.sentence_atomic_threshold:
                segments.append(Segment("substituted", before_core, after_core))
                segments.extend(diff_text(before_space, after_space, granularity))
            else:
                segments.extend(diff_text(before_core + before_space, after_core + after_space, granularity))
        i, j = pair_i + 1, pair_j + 1

    return coalesce_segments(segments)


def classify(
    before: Union[Block, Node],
    after: Union[Block, Node],
    options: Optional[DiffOptions] = None,
) -> BlockDiffDecision:
    """Classify the difference between two matched blocks.

    Parameters
    ----------
    before : Block or Node
        The before block, or a single block-level node
    after : Block or Node
        The after block, or a single block-level node
    options : DiffOptions, optional
        Classification thresholds; defaults are used when omitted

    Returns
    -------
    BlockDiffDecision
        ``Unchanged`` when the block texts are identical,
        ``AtomicSubstitution`` when the blocks are atomic, of different
        kinds, or diverge by more than ``paragraph_atomic_threshold``,
        otherwise ``GranularEdit``

    Notes
    -----
    As the divergence between the two bodies grows the decision only moves
    from ``Unchanged`` to ``GranularEdit`` to ``AtomicSubstitution``. The
    sentence pass refines the segments of a granular edit but never changes
    which decision is returned.

    """
    options = options or DiffOptions()
    before_block = make_block(before)
    after_block = make_block(after)

    if before_block.text == after_block.text:
        return Unchanged()

    if before_block.atomic or after_block.atomic or before_block.kind != after_block.kind:
        logger.debug("Atomic %s block changed; substituting whole block", after_block.kind)
        return AtomicSubstitution(before_block.text, after_block.text)

    ratio = divergence_ratio(before_block.body, after_block.body)
    if ratio > options.paragraph_atomic_threshold:
        logger.debug(
            "Divergence %.3f exceeds %.2f; substituting whole %s",
            ratio,
            options.paragraph_atomic_threshold,
            after_block.kind,
        )
        return AtomicSubstitution(before_block.text, after_block.text)

    if options.sentence_pass:
        segments = sentence_segments(before_block.body, after_block.body, options)
    else:
        segments = diff_text(before_block.body, after_block.body, options.text_granularity)
    logger.debug("Divergence %.3f; granular edit with %d segments", ratio, len(segments))
    return GranularEdit(tuple(segments))
