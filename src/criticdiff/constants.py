#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/constants.py
"""Constants and default values for criticdiff.

Constants are organized by category:
1. Type Definitions - Literal types shared across modules
2. Classification Defaults - thresholds used by the change classifier
3. Block Structure - block kinds and atomicity
4. CriticMarkup Syntax - marker delimiters
5. Dependencies - optional package requirements
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TextGranularity = Literal["word", "character"]
SegmentKind = Literal["unchanged", "inserted", "deleted", "substituted"]
BlockKind = Literal[
    "heading",
    "paragraph",
    "list_item",
    "code_block",
    "thematic_break",
    "html_block",
    "table",
]
DiffOutputFormat = Literal["markup", "json", "color"]

# =============================================================================
# Classification Defaults
# =============================================================================

DEFAULT_TEXT_GRANULARITY: TextGranularity = "word"

# Granularity aliases accepted from configuration files and the CLI
TEXT_GRANULARITY_ALIASES: dict[str, TextGranularity] = {
    "word": "word",
    "words": "word",
    "character": "character",
    "char": "character",
    "chars": "character",
}

DEFAULT_PARAGRAPH_ATOMIC_THRESHOLD = 0.40
DEFAULT_SENTENCE_ATOMIC_THRESHOLD = 0.15
DEFAULT_SENTENCE_PAIRING_THRESHOLD = 0.5
DEFAULT_BLOCK_PAIRING_MIN_SIMILARITY = 0.0
DEFAULT_SENTENCE_PASS = True

# Alignment tables above this many cells are logged as a warning
LARGE_ALIGNMENT_CELLS = 1_000_000

# =============================================================================
# Block Structure
# =============================================================================

ATOMIC_BLOCK_KINDS: frozenset[str] = frozenset({"heading", "code_block", "table", "thematic_break", "html_block"})

BLOCK_SEPARATOR = "\n\n"
TIGHT_LIST_SEPARATOR = "\n"
QUOTE_MARKER = "> "
BULLET_MARKER = "- "
THEMATIC_BREAK_MARKUP = "---"

# =============================================================================
# CriticMarkup Syntax
# =============================================================================

INSERTION_OPEN = "{++"
INSERTION_CLOSE = "++}"
DELETION_OPEN = "{--"
DELETION_CLOSE = "--}"
SUBSTITUTION_OPEN = "{~~"
SUBSTITUTION_SEPARATOR = "~>"
SUBSTITUTION_CLOSE = "~~}"

# Characters that may follow a backslash escape in rendered markup
ESCAPABLE_CHARACTERS = "\\{}>"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
