#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/text_diff.py
"""Word- and character-level text diffing using difflib.

The text diff engine knows nothing about document structure: it turns
two strings into a sequence of ``unchanged``, ``inserted`` and
``deleted`` segments. Reading the unchanged and deleted segments in order
reproduces the before text exactly, and reading the unchanged and
inserted segments reproduces the after text.
"""

from __future__ import annotations

import difflib
import re

from criticdiff.constants import TEXT_GRANULARITY_ALIASES, TextGranularity
from criticdiff.diff.models import Segment, coalesce_segments
from criticdiff.exceptions import ValidationError

# Markdown links and images, code spans and bare URLs stay indivisible so a
# changed URL is reported as one replaced token rather than a shower of
# punctuation edits.
_WORD_TOKEN_RE = re.compile(
    r"""
    !?\[[^\]\n]*\]\([^)\s]*(?:\s+"[^"\n]*")?\)
    | `[^`\n]+`
    | https?://[^\s<>()\[\]]*[^\s<>()\[\].,;:!?'"]
    | \w+
    | \s+
    | [^\w\s]
    """,
    re.VERBOSE,
)
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def resolve_granularity(granularity: str) -> TextGranularity:
    """Map a granularity name or alias to its canonical value.

    Raises
    ------
    ValidationError
        If the granularity is not recognized

    """
    resolved = TEXT_GRANULARITY_ALIASES.get(str(granularity).lower())
    if resolved is None:
        raise ValidationError(
            f"Unknown text granularity: {granularity!r}",
            parameter_name="granularity",
            parameter_value=granularity,
        )
    return resolved


def tokenize(text: str, granularity: str = "word") -> list[str]:
    """Split text into diff tokens.

    Parameters
    ----------
    text : str
        Text to split
    granularity : {"word", "character"}, default "word"
        ``word`` yields words, whitespace runs and single punctuation marks
        (markdown links, images, code spans and URLs are kept whole);
        ``character`` yields individual code points.

    Returns
    -------
    list of str
        Tokens whose concatenation equals ``text``

    Examples
    --------
    >>> tokenize("The cat sat.")
    ['The', ' ', 'cat', ' ', 'sat', '.']

    """
    if resolve_granularity(granularity) == "character":
        return list(text)
    return _WORD_TOKEN_RE.findall(text)


def word_tokens(text: str) -> list[str]:
    """Return the non-whitespace word tokens of ``text``."""
    return [token for token in _WORD_TOKEN_RE.findall(text) if not token.isspace()]


def diff_text(before: str, after: str, granularity: str = "word") -> list[Segment]:
    """Compute a typed segment diff between two strings.

    Parameters
    ----------
    before : str
        Original text
    after : str
        Updated text
    granularity : {"word", "character"}, default "word"
        Token unit for the alignment; ``"char"`` is accepted as an alias

    Returns
    -------
    list of Segment
        Coalesced segments. Replacements emit the deleted run before the
        inserted run.

    Raises
    ------
    ValidationError
        If the granularity is not recognized

    Notes
    -----
    Tokens are aligned with :class:`difflib.SequenceMatcher`, which
    recursively takes the longest contiguous matching block rather than a
    guaranteed longest common subsequence. A diff may therefore mark a few
    more tokens as changed than a minimal one would. The segments still
    reproduce both inputs exactly.

    Examples
    --------
    >>> [(s.kind, s.text) for s in diff_text("The cat sat.", "The dog sat.")]
    [('unchanged', 'The '), ('deleted', 'cat'), ('inserted', 'dog'), ('unchanged', ' sat.')]

    """
    resolved = resolve_granularity(granularity)

    if before == after:
        return [Segment("unchanged", before)] if before else []
    if not before:
        return [Segment("inserted", after)]
    if not after:
        return [Segment("deleted", before)]

    old_tokens = tokenize(before, resolved)
    new_tokens = tokenize(after, resolved)

    matcher = difflib.SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)
    segments: list[Segment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            segments.append(Segment("unchanged", "".join(old_tokens[i1:i2])))
        else:
            if i2 > i1:
                segments.append(Segment("deleted", "".join(old_tokens[i1:i2])))
            if j2 > j1:
                segments.append(Segment("inserted", "".join(new_tokens[j1:j2])))

    return coalesce_segments(segments)
