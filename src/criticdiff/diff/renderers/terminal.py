#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/renderers/terminal.py
"""CriticMarkup renderer with optional ANSI colors.

Colors the markers of a CriticMarkup string for terminal display: deleted
text in red, inserted text in green, and substitutions as red old text
followed by green new text. The delimiters are kept so the output can
still be read (or copied) as CriticMarkup.
"""

from __future__ import annotations

from criticdiff.constants import (
    DELETION_CLOSE,
    DELETION_OPEN,
    INSERTION_CLOSE,
    INSERTION_OPEN,
    SUBSTITUTION_CLOSE,
    SUBSTITUTION_OPEN,
    SUBSTITUTION_SEPARATOR,
)
from criticdiff.criticmarkup.preprocessor import preprocess
from criticdiff.criticmarkup.syntax import escape

RED = "\033[31m"
GREEN = "\033[32m"
CYAN = "\033[36m"
RESET = "\033[0m"


class TerminalDiffRenderer:
    """Render CriticMarkup with optional ANSI colors.

    Parameters
    ----------
    use_color : bool, default = True
        If True, add ANSI color codes to output

    Examples
    --------
        >>> renderer = TerminalDiffRenderer(use_color=False)
        >>> renderer.render("a {++b++}")
        'a {++b++}'

    """

    def __init__(self, use_color: bool = True):
        """Initialize the terminal renderer."""
        self.use_color = use_color

    def render(self, markup: str) -> str:
        """Colorize a CriticMarkup string.

        Parameters
        ----------
        markup : str
            Rendered CriticMarkup

        Returns
        -------
        str
            Colorized markup (or the original markup if color is disabled)

        """
        if not self.use_color:
            return markup

        parts: list[str] = []
        for segment in preprocess(markup):
            if segment.kind == "unchanged":
                parts.append(escape(segment.text))
            elif segment.kind == "inserted":
                parts.append(f"{GREEN}{INSERTION_OPEN}{escape(segment.text)}{INSERTION_CLOSE}{RESET}")
            elif segment.kind == "deleted":
                parts.append(f"{RED}{DELETION_OPEN}{escape(segment.text)}{DELETION_CLOSE}{RESET}")
            else:
                parts.append(
                    f"{CYAN}{SUBSTITUTION_OPEN}{RESET}{RED}{escape(segment.text)}{RESET}"
                    f"{CYAN}{SUBSTITUTION_SEPARATOR}{RESET}{GREEN}{escape(segment.new_text or '')}{RESET}"
                    f"{CYAN}{SUBSTITUTION_CLOSE}{RESET}"
                )
        return "".join(parts)
