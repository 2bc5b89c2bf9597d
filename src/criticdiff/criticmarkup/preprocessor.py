#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/criticmarkup/preprocessor.py
"""Parse CriticMarkup text back into typed segments.

The preprocessor is the editor-facing half of the round trip: it turns
rendered markup into ``unchanged``, ``inserted``, ``deleted`` and
``substituted`` segments. It is intentionally lenient because it may be
run on arbitrary text:

- an opening delimiter without its closing delimiter is plain text;
- a substitution without a ``~>`` separator is plain text;
- markers inside a marker are not interpreted (the outer span wins);
- empty markers are dropped.

For string input it never raises.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional

from criticdiff.constants import (
    DELETION_CLOSE,
    DELETION_OPEN,
    ESCAPABLE_CHARACTERS,
    INSERTION_CLOSE,
    INSERTION_OPEN,
    SUBSTITUTION_CLOSE,
    SUBSTITUTION_OPEN,
    SUBSTITUTION_SEPARATOR,
)
from criticdiff.diff.models import Segment, after_text, before_text, coalesce_segments

logger = logging.getLogger(__name__)

_OPEN_LENGTH = 3


def _scan_until(text: str, start: int, stops: tuple[str, ...]) -> tuple[Optional[str], int, str]:
    """Scan from ``start`` to the first unescaped stop token.

    Returns
    -------
    tuple
        The stop token found (or None), its index, and the unescaped text
        before it

    """
    out: list[str] = []
    index = start
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\" and index + 1 < length and text[index + 1] in ESCAPABLE_CHARACTERS:
            out.append(text[index + 1])
            index += 2
            continue
        for stop in stops:
            if text.startswith(stop, index):
                return stop, index, "".join(out)
        out.append(char)
        index += 1
    return None, index, "".join(out)


def _parse_marker(text: str, start: int) -> Optional[tuple[Segment, int]]:
    """Try to parse a marker whose opening delimiter starts at ``start``.

    Returns the segment and the index just past the marker, or None when
    the text at ``start`` is not a well-formed marker.
    """
    opener = text[start : start + _OPEN_LENGTH]
    body_start = start + _OPEN_LENGTH

    if opener == INSERTION_OPEN or opener == DELETION_OPEN:
        close = INSERTION_CLOSE if opener == INSERTION_OPEN else DELETION_CLOSE
        found, index, content = _scan_until(text, body_start, (close,))
        if found is None:
            return None
        kind = "inserted" if opener == INSERTION_OPEN else "deleted"
        return Segment(kind, content), index + len(close)

    if opener == SUBSTITUTION_OPEN:
        found, index, old = _scan_until(text, body_start, (SUBSTITUTION_SEPARATOR, SUBSTITUTION_CLOSE))
        if found != SUBSTITUTION_SEPARATOR:
            return None
        found, end, new = _scan_until(text, index + len(SUBSTITUTION_SEPARATOR), (SUBSTITUTION_CLOSE,))
        if found is None:
            return None
        end += len(SUBSTITUTION_CLOSE)
        if not old:
            return Segment("inserted", new), end
        if not new:
            return Segment("deleted", old), end
        return Segment("substituted", old, new), end

    return None


def preprocess(markup: str) -> list[Segment]:
    """Parse CriticMarkup text into typed segments.

    Parameters
    ----------
    markup : str
        Text containing ``{++ins++}``, ``{--del--}`` and ``{~~old~>new~~}``
        markers

    Returns
    -------
    list of Segment
        Segments in document order with adjacent unchanged text coalesced.
        Empty input gives an empty list.

    Examples
    --------
    >>> [(s.kind, s.text, s.new_text) for s in preprocess("a {++b++} {~~c~>d~~}")]
    [('unchanged', 'a ', None), ('inserted', 'b', None), ('unchanged', ' ', None), ('substituted', 'c', 'd')]

    """
    if not isinstance(markup, str):
        markup = "" if markup is None else str(markup)

    segments: list[Segment] = []
    plain: list[str] = []
    index = 0
    length = len(markup)
    malformed = 0

    while index < length:
        char = markup[index]
        if char == "\\" and index + 1 < length and markup[index + 1] in ESCAPABLE_CHARACTERS:
            plain.append(markup[index + 1])
            index += 2
            continue
        if char == "{" and markup[index : index + _OPEN_LENGTH] in (INSERTION_OPEN, DELETION_OPEN, SUBSTITUTION_OPEN):
            parsed = _parse_marker(markup, index)
            if parsed is not None:
                segment, index = parsed
                if plain:
                    segments.append(Segment("unchanged", "".join(plain)))
                    plain = []
                segments.append(segment)
                continue
            malformed += 1
        plain.append(char)
        index += 1

    if plain:
        segments.append(Segment("unchanged", "".join(plain)))
    if malformed:
        logger.debug("Treated %d malformed marker(s) as plain text", malformed)

    return coalesce_segments(segments)


def reconstruct_after(segments: list[Segment]) -> str:
    """Return the text with every change accepted."""
    return after_text(segments)


def reconstruct_before(segments: list[Segment]) -> str:
    """Return the text with every change rejected."""
    return before_text(segments)


def accept_all(markup: str) -> str:
    """Accept every change in a CriticMarkup string.

    Examples
    --------
    >>> accept_all("The {--mat--}{++rug++} is {~~red~>blue~~}.")
    'The rug is blue.'

    """
    return reconstruct_after(preprocess(markup))


def reject_all(markup: str) -> str:
    """Reject every change in a CriticMarkup string.

    Examples
    --------
    >>> reject_all("The {--mat--}{++rug++} is {~~red~>blue~~}.")
    'The mat is red.'

    """
    return reconstruct_before(preprocess(markup))


def summarize(segments: list[Segment]) -> dict[str, int]:
    """Count segments per kind."""
    counts = Counter(segment.kind for segment in segments)
    return {kind: counts.get(kind, 0) for kind in ("unchanged", "inserted", "deleted", "substituted")}
