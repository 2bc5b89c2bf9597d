#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/criticmarkup/syntax.py
"""CriticMarkup delimiters and escaping.

Rendered markup must stay unambiguous even when the documents themselves
contain marker-like text. Only the few character sequences that would
otherwise be read as markup are escaped with a backslash:

- a ``{`` that starts ``{++``, ``{--`` or ``{~~``
- a ``}`` that ends ``++}``, ``--}`` or ``~~}``
- the ``>`` of ``~>``
- a backslash that precedes one of ``\\ { } >`` or ends the escaped text

:func:`unescape` reverses the transformation exactly.
"""

from __future__ import annotations

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

_MARKER_PAIRS = ("++", "--", "~~")


def escape(text: str) -> str:
    """Escape text so that it never reads as CriticMarkup.

    Examples
    --------
    >>> escape("plain text")
    'plain text'
    >>> escape("a {++b++} c")
    'a \\\\{++b++\\\\} c'

    """
    if not any(char in text for char in ESCAPABLE_CHARACTERS):
        return text

    out: list[str] = []
    length = len(text)
    for index, char in enumerate(text):
        if char == "\\":
            if index + 1 == length or text[index + 1] in ESCAPABLE_CHARACTERS:
                out.append("\\\\")
                continue
        elif char == "{":
            if text[index + 1 : index + 3] in _MARKER_PAIRS:
                out.append("\\{")
                continue
        elif char == "}":
            if index >= 2 and text[index - 2 : index] in _MARKER_PAIRS:
                out.append("\\}")
                continue
        elif char == ">":
            if index >= 1 and text[index - 1] == "~":
                out.append("\\>")
                continue
        out.append(char)
    return "".join(out)


def unescape(text: str) -> str:
    """Remove the backslash escapes added by :func:`escape`."""
    if "\\" not in text:
        return text

    out: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\" and index + 1 < length and text[index + 1] in ESCAPABLE_CHARACTERS:
            out.append(text[index + 1])
            index += 2
        else:
            out.append(char)
            index += 1
    return "".join(out)


def insertion(text: str) -> str:
    """Wrap text in an insertion marker; empty text renders nothing."""
    if not text:
        return ""
    return f"{INSERTION_OPEN}{escape(text)}{INSERTION_CLOSE}"


def deletion(text: str) -> str:
    """Wrap text in a deletion marker; empty text renders nothing."""
    if not text:
        return ""
    return f"{DELETION_OPEN}{escape(text)}{DELETION_CLOSE}"


def substitution(old: str, new: str) -> str:
    """Render an old/new pair as one substitution marker.

    A pair with an empty side degrades to a pure insertion or deletion.
    """
    if not old:
        return insertion(new)
    if not new:
        return deletion(old)
    return f"{SUBSTITUTION_OPEN}{escape(old)}{SUBSTITUTION_SEPARATOR}{escape(new)}{SUBSTITUTION_CLOSE}"
