#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/renderers/json.py
"""JSON renderer for structured diff output.

Produces machine-readable output for a :class:`DocumentDiff` (markup,
statistics and one record per alignment entry) or for the segment list
returned by the CriticMarkup preprocessor.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Sequence

from criticdiff.criticmarkup.preprocessor import reconstruct_after, reconstruct_before, summarize
from criticdiff.diff.api import DocumentDiff
from criticdiff.diff.models import (
    AlignmentEntry,
    AtomicSubstitution,
    Block,
    BlockDiffDecision,
    Deleted,
    GranularEdit,
    Inserted,
    Matched,
    Segment,
    Unchanged,
)


class JsonDiffRenderer:
    """Render diffs and preprocessed segments as JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)

    Examples
    --------
        >>> from criticdiff.diff.api import compare_markdown
        >>> diff = compare_markdown("# Title", "# Title\\n\\nNew paragraph.")
        >>> output = JsonDiffRenderer(pretty_print=False).render(diff)

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent

    def _dumps(self, data: Dict[str, Any]) -> str:
        if self.pretty_print:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)

    def render(self, diff: DocumentDiff) -> str:
        """Render a document diff to a JSON string.

        Parameters
        ----------
        diff : DocumentDiff
            Result of :func:`criticdiff.diff.api.diff_documents`

        Returns
        -------
        str
            JSON with ``markup``, ``statistics``, ``options`` and ``entries``

        """
        data: Dict[str, Any] = {
            "type": "critic_markup_diff",
            "markup": diff.markup,
            "statistics": diff.statistics.to_dict(),
            "options": {
                "text_granularity": diff.options.text_granularity,
                "paragraph_atomic_threshold": diff.options.paragraph_atomic_threshold,
                "sentence_atomic_threshold": diff.options.sentence_atomic_threshold,
            },
            "entries": [self._entry_to_dict(entry, diff.decisions) for entry in diff.alignment],
        }
        return self._dumps(data)

    def render_segments(self, segments: Sequence[Segment]) -> str:
        """Render preprocessed CriticMarkup segments to a JSON string.

        Parameters
        ----------
        segments : sequence of Segment
            Output of :func:`criticdiff.criticmarkup.preprocessor.preprocess`

        Returns
        -------
        str
            JSON with ``segments``, per-kind ``statistics`` and the accepted
            and rejected texts

        """
        data: Dict[str, Any] = {
            "type": "critic_markup_segments",
            "segments": [segment.to_dict() for segment in segments],
            "statistics": summarize(list(segments)),
            "after_text": reconstruct_after(list(segments)),
            "before_text": reconstruct_before(list(segments)),
        }
        return self._dumps(data)

    def render_to_file(self, diff: DocumentDiff, output_path: str | Path) -> None:
        """Render a document diff and write it to a file."""
        Path(output_path).write_text(self.render(diff), encoding="utf-8")

    @staticmethod
    def _block_to_dict(block: Block) -> Dict[str, Any]:
        return {"kind": block.kind, "text": block.text}

    def _entry_to_dict(self, entry: AlignmentEntry, decisions: Dict[Matched, BlockDiffDecision]) -> Dict[str, Any]:
        if isinstance(entry, Inserted):
            return {"type": "inserted", "after": self._block_to_dict(entry.after)}
        if isinstance(entry, Deleted):
            return {"type": "deleted", "before": self._block_to_dict(entry.before)}

        record: Dict[str, Any] = {
            "type": "matched",
            "before": self._block_to_dict(entry.before),
            "after": self._block_to_dict(entry.after),
        }
        decision = decisions.get(entry)
        if isinstance(decision, Unchanged):
            record["decision"] = "unchanged"
        elif isinstance(decision, AtomicSubstitution):
            record["decision"] = "atomic_substitution"
        elif isinstance(decision, GranularEdit):
            record["decision"] = "granular_edit"
            record["segments"] = [segment.to_dict() for segment in decision.segments]
        return record
