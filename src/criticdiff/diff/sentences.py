#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/sentences.py
"""Approximate sentence segmentation.

This is a string-splitting heuristic, not a linguistic sentence boundary
detector. It exists so the change classifier can judge rewrites sentence
by sentence, and it is kept in its own module so it can be replaced
without touching the classifier.

A boundary is placed after ``.``, ``!`` or ``?`` (optionally followed by
closing quotes or brackets) when whitespace follows, and at blank lines.
Common abbreviations, single-letter initials and anything inside a URL,
markdown link, image or code span never end a sentence.
"""

from __future__ import annotations

import re

ABBREVIATIONS = frozenset(
    {
        "dr",
        "mr",
        "mrs",
        "ms",
        "mt",
        "st",
        "jr",
        "sr",
        "prof",
        "rev",
        "gen",
        "col",
        "capt",
        "lt",
        "sgt",
        "vs",
        "etc",
        "e.g",
        "i.e",
        "cf",
        "al",
        "inc",
        "ltd",
        "co",
        "corp",
        "no",
        "fig",
        "vol",
        "approx",
        "dept",
        "est",
        "jan",
        "feb",
        "mar",
        "apr",
        "jun",
        "jul",
        "aug",
        "sep",
        "sept",
        "oct",
        "nov",
        "dec",
    }
)

_PROTECTED_RE = re.compile(
    r"""
    !?\[[^\]\n]*\]\([^)\n]*\)
    | `[^`\n]+`
    | (?:https?|ftp)://\S+
    | www\.\S+
    """,
    re.VERBOSE,
)
_BOUNDARY_RE = re.compile(r"[.!?]+[\"')\]*_]*(?=\s)|\n[ \t]*\n")
_WORD_BEFORE_RE = re.compile(r"([\w.]+)$")


def _protected_spans(text: str) -> list[tuple[int, int]]:
    return [match.span() for match in _PROTECTED_RE.finditer(text)]


def _is_abbreviation(text: str, end: int) -> bool:
    """Check whether the period ending at ``end`` closes an abbreviation."""
    match = _WORD_BEFORE_RE.search(text, 0, end)
    if match is None:
        return False
    word = match.group(1).rstrip(".")
    if word.lower() in ABBREVIATIONS:
        return True
    # Single initials such as "J. R. R. Tolkien"
    return len(word) == 1 and word.isalpha() and word.isupper()


def split_sentences(text: str) -> list[str]:
    """Split text into sentences, keeping trailing whitespace with each one.

    Parameters
    ----------
    text : str
        Paragraph text

    Returns
    -------
    list of str
        Sentences whose concatenation equals ``text``. Empty input gives an
        empty list.

    Examples
    --------
    >>> split_sentences("Dr. Smith left. He came back!")
    ['Dr. Smith left. ', 'He came back!']

    """
    if not text:
        return []

    protected = _protected_spans(text)
    sentences: list[str] = []
    start = 0

    for match in _BOUNDARY_RE.finditer(text):
        end = match.end()
        if any(lo <= match.start() < hi for lo, hi in protected):
            continue
        if match.group().startswith("\n"):
            cut = match.start()
        else:
            if match.group()[0] == "." and len(match.group().rstrip("\"')]*_")) == 1:
                if _is_abbreviation(text, match.start()):
                    continue
            cut = end

        # Trailing whitespace belongs to the sentence it follows
        while cut < len(text) and text[cut].isspace():
            cut += 1
        if cut > start:
            sentences.append(text[start:cut])
            start = cut

    if start < len(text):
        sentences.append(text[start:])
    return sentences
