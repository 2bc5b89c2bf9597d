"""Unit tests for the CriticMarkup preprocessor."""

import logging

import pytest

from criticdiff.criticmarkup.preprocessor import (
    accept_all,
    preprocess,
    reconstruct_after,
    reconstruct_before,
    reject_all,
    summarize,
)
from criticdiff.diff.models import Segment


def _triples(segments):
    return [(segment.kind, segment.text, segment.new_text) for segment in segments]


@pytest.mark.unit
class TestPreprocess:
    """Tests for preprocess."""

    def test_empty_input(self):
        """Test empty input gives no segments."""
        assert preprocess("") == []

    def test_plain_text(self):
        """Test text without markers is one unchanged segment."""
        assert preprocess("just text") == [Segment("unchanged", "just text")]

    def test_all_marker_kinds(self):
        """Test the three marker forms."""
        result = preprocess("a {++b++} c {--d--} e {~~f~>g~~}")
        assert _triples(result) == [
            ("unchanged", "a ", None),
            ("inserted", "b", None),
            ("unchanged", " c ", None),
            ("deleted", "d", None),
            ("unchanged", " e ", None),
            ("substituted", "f", "g"),
        ]

    def test_multiline_marker(self):
        """Test markers may span lines."""
        assert _triples(preprocess("{--\n\n- item--}")) == [("deleted", "\n\n- item", None)]

    def test_adjacent_markers(self):
        """Test adjacent markers stay separate segments."""
        assert _triples(preprocess("{--mat--}{++rug++}")) == [("deleted", "mat", None), ("inserted", "rug", None)]

    def test_escapes_are_removed(self):
        """Test escaped delimiters are read as plain text."""
        assert preprocess("\\{++not a marker++\\}") == [Segment("unchanged", "{++not a marker++}")]

    def test_escapes_inside_markers(self):
        """Test escaped closers inside a marker do not end it."""
        assert _triples(preprocess("{++a ++\\} b++}")) == [("inserted", "a ++} b", None)]

    @pytest.mark.parametrize(
        "markup",
        ["{++unclosed", "{--also unclosed", "{~~no separator~~}", "{~~a~>unclosed", "{+ not +}", "~> ~~} ++}"],
    )
    def test_malformed_markers_are_plain_text(self, markup):
        """Test malformed marker-like text passes through unchanged."""
        assert preprocess(markup) == [Segment("unchanged", markup)]

    def test_malformed_then_valid(self):
        """Test a valid marker after a malformed opener is still parsed."""
        result = preprocess("{++ oops {--x--}")
        assert _triples(result) == [("unchanged", "{++ oops ", None), ("deleted", "x", None)]

    def test_nested_markers_outer_wins(self):
        """Test markers inside a marker are not interpreted."""
        result = preprocess("{--a {++b++} c--}")
        assert _triples(result) == [("deleted", "a {++b++} c", None)]

    def test_empty_markers_dropped(self):
        """Test empty markers produce no segments."""
        assert preprocess("a{++++}b{----}c") == [Segment("unchanged", "abc")]

    def test_one_sided_substitution(self):
        """Test substitutions with an empty side degrade."""
        assert _triples(preprocess("{~~~>new~~}")) == [("inserted", "new", None)]
        assert _triples(preprocess("{~~old~>~~}")) == [("deleted", "old", None)]

    def test_non_string_input(self):
        """Test None is treated as empty input."""
        assert preprocess(None) == []

    def test_malformed_logged(self, caplog):
        """Test malformed markers are reported at debug level."""
        with caplog.at_level(logging.DEBUG, logger="criticdiff.criticmarkup.preprocessor"):
            preprocess("{++open")
        assert "malformed" in caplog.text


@pytest.mark.unit
class TestReconstruction:
    """Tests for accept/reject and reconstruction."""

    def test_accept_all(self):
        """Test accepting every change."""
        assert accept_all("The {--mat--}{++rug++} is {~~red~>blue~~}.") == "The rug is blue."

    def test_reject_all(self):
        """Test rejecting every change."""
        assert reject_all("The {--mat--}{++rug++} is {~~red~>blue~~}.") == "The mat is red."

    def test_reconstruct_from_segments(self):
        """Test reconstruction helpers work on segment lists."""
        segments = [Segment("unchanged", "a"), Segment("substituted", "b", "c"), Segment("inserted", "d")]
        assert reconstruct_after(segments) == "acd"
        assert reconstruct_before(segments) == "ab"

    def test_summarize(self):
        """Test counting segments by kind."""
        counts = summarize(preprocess("a {++b++} {--c--} {~~d~>e~~}"))
        assert counts == {"unchanged": 3, "inserted": 1, "deleted": 1, "substituted": 1}
