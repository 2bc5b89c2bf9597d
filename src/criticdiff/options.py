#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/options.py
"""Configuration options for the structural diff engine.

The thresholds that decide between granular and atomic rendering live
here rather than in the classifier so that the policy can be swapped
(from code, a configuration file or the command line) without touching
the algorithm.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from criticdiff.constants import (
    DEFAULT_BLOCK_PAIRING_MIN_SIMILARITY,
    DEFAULT_PARAGRAPH_ATOMIC_THRESHOLD,
    DEFAULT_SENTENCE_ATOMIC_THRESHOLD,
    DEFAULT_SENTENCE_PAIRING_THRESHOLD,
    DEFAULT_SENTENCE_PASS,
    DEFAULT_TEXT_GRANULARITY,
    TEXT_GRANULARITY_ALIASES,
    TextGranularity,
)
from criticdiff.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DiffOptions(CloneFrozenMixin):
    """Options controlling block alignment and change classification.

    Parameters
    ----------
    text_granularity : {"word", "character"}, default "word"
        Token unit used by the text diff engine for granular edits. The
        alias ``"char"`` is accepted and normalized to ``"character"``.
    paragraph_atomic_threshold : float, default 0.40
        A matched text block whose divergence ratio exceeds this value is
        rendered as one substitution of the whole block.
    sentence_atomic_threshold : float, default 0.15
        Within a granular block, a paired sentence whose divergence ratio
        exceeds this value is rendered as one substitution of the sentence.
    sentence_pairing_threshold : float, default 0.5
        Two sentences are only paired when their divergence ratio is below
        this value; unpaired sentences become pure insertions or deletions.
    block_pairing_min_similarity : float, default 0.0
        Minimum word similarity (``1 - divergence``) for two non-identical
        blocks of the same kind to be paired by the block aligner.
    sentence_pass : bool, default True
        Whether granular blocks are re-evaluated sentence by sentence.

    Examples
    --------
    >>> options = DiffOptions(text_granularity="char")
    >>> options.text_granularity
    'character'
    >>> stricter = options.create_updated(paragraph_atomic_threshold=0.25)

    """

    text_granularity: TextGranularity = field(
        default=DEFAULT_TEXT_GRANULARITY,
        metadata={"help": "Token unit for granular edits: word or character", "importance": "core"},
    )
    paragraph_atomic_threshold: float = field(
        default=DEFAULT_PARAGRAPH_ATOMIC_THRESHOLD,
        metadata={
            "help": "Divergence ratio above which a paragraph is rendered as one substitution",
            "type": float,
            "importance": "core",
        },
    )
    sentence_atomic_threshold: float = field(
        default=DEFAULT_SENTENCE_ATOMIC_THRESHOLD,
        metadata={
            "help": "Divergence ratio above which a sentence is rendered as one substitution",
            "type": float,
            "importance": "core",
        },
    )
    sentence_pairing_threshold: float = field(
        default=DEFAULT_SENTENCE_PAIRING_THRESHOLD,
        metadata={
            "help": "Divergence ratio below which two sentences are considered the same sentence",
            "type": float,
            "importance": "advanced",
        },
    )
    block_pairing_min_similarity: float = field(
        default=DEFAULT_BLOCK_PAIRING_MIN_SIMILARITY,
        metadata={
            "help": "Minimum similarity for pairing two non-identical blocks of the same kind",
            "type": float,
            "importance": "advanced",
        },
    )
    sentence_pass: bool = field(
        default=DEFAULT_SENTENCE_PASS,
        metadata={"help": "Re-evaluate granular paragraphs sentence by sentence", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize the granularity and validate threshold ranges.

        Raises
        ------
        ValueError
            If the granularity is unknown or a threshold is outside [0, 1].

        """
        granularity = TEXT_GRANULARITY_ALIASES.get(str(self.text_granularity).lower())
        if granularity is None:
            raise ValueError(
                f"text_granularity must be one of 'word' or 'character', got {self.text_granularity!r}"
            )
        object.__setattr__(self, "text_granularity", granularity)

        for name in (
            "paragraph_atomic_threshold",
            "sentence_atomic_threshold",
            "sentence_pairing_threshold",
            "block_pairing_min_similarity",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {type(value).__name__}")
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiffOptions":
        """Build options from configuration data.

        Keys may use dashes or underscores. Unknown keys are rejected so that
        typos in configuration files do not pass silently.

        Parameters
        ----------
        data : Mapping[str, Any]
            Option names and values, e.g. loaded from ``.criticdiff.toml``

        Returns
        -------
        DiffOptions
            Options instance with the given values applied

        Raises
        ------
        ValidationError
            If a key is unknown or a value is invalid

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown diff option '{key}'. Valid options: {', '.join(sorted(known))}",
                    parameter_name=str(key),
                    parameter_value=value,
                )
            kwargs[name] = value

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid diff options: {e}", original_error=e) from e


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Options for the markdown parsing collaborator.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Recognize ``~~strikethrough~~`` spans
    parse_tables : bool, default True
        Recognize GFM pipe tables
    parse_task_lists : bool, default True
        Recognize ``- [ ]`` / ``- [x]`` task list items

    """

    parse_strikethrough: bool = field(
        default=True, metadata={"help": "Parse ~~strikethrough~~ spans", "importance": "advanced"}
    )
    parse_tables: bool = field(default=True, metadata={"help": "Parse GFM pipe tables", "importance": "advanced"})
    parse_task_lists: bool = field(
        default=True, metadata={"help": "Parse task list checkboxes", "importance": "advanced"}
    )
