"""Unit tests for the diff API."""

import pytest
from utils import bullets, doc, heading, para

from criticdiff.diff.api import DiffStatistics, compare_markdown, diff_documents, render_critic_markup
from criticdiff.diff.models import AtomicSubstitution, GranularEdit, Matched
from criticdiff.exceptions import MalformedTreeError
from criticdiff.options import DiffOptions


@pytest.mark.unit
class TestDiffDocuments:
    """Tests for diff_documents."""

    def test_result_fields(self):
        """Test the result carries blocks, alignment, decisions and markup."""
        before = doc(heading("T"), para("The cat sat on the mat."))
        after = doc(heading("T"), para("The cat sat on the rug."))
        result = diff_documents(before, after)
        assert len(result.before_blocks) == len(result.after_blocks) == 2
        assert all(isinstance(entry, Matched) for entry in result.alignment)
        assert set(result.decisions) == set(result.alignment)
        assert result.markup == "# T\n\nThe cat sat on the {--mat--}{++rug++}."
        assert result.before_text == "# T\n\nThe cat sat on the mat."
        assert result.after_text == "# T\n\nThe cat sat on the rug."

    def test_statistics(self):
        """Test entry and decision counts."""
        before = doc(heading("Old title"), para("Same."), para("Removed paragraph here."))
        after = doc(heading("New title"), para("Same."), bullets("added"))
        stats = diff_documents(before, after).statistics
        assert stats.to_dict() == {
            "matched": 2,
            "inserted": 1,
            "deleted": 1,
            "unchanged": 1,
            "granular": 0,
            "substituted": 1,
        }
        assert stats.has_changes

    def test_no_changes(self):
        """Test identical documents report no changes."""
        tree = doc(para("x"))
        result = diff_documents(tree, tree)
        assert not result.statistics.has_changes
        assert result.markup == "x"

    def test_options_are_used(self):
        """Test options flow through to the classifier."""
        before, after = doc(para("The cat sat on the mat.")), doc(para("The cat sat on the rug."))
        result = diff_documents(before, after, DiffOptions(paragraph_atomic_threshold=0.1))
        (decision,) = result.decisions.values()
        assert isinstance(decision, AtomicSubstitution)
        assert result.options.paragraph_atomic_threshold == 0.1

    def test_character_granularity(self):
        """Test character granularity produces character-level markers."""
        before, after = doc(para("The colour is red.")), doc(para("The color is red."))
        options = DiffOptions(text_granularity="character", sentence_pass=False)
        result = diff_documents(before, after, options)
        (decision,) = result.decisions.values()
        assert isinstance(decision, GranularEdit)
        assert result.markup == "The colo{--u--}r is red."

    def test_malformed_tree(self):
        """Test malformed trees raise MalformedTreeError."""
        with pytest.raises(MalformedTreeError):
            diff_documents(doc(para("a")), doc(42))

    def test_render_critic_markup(self):
        """Test the markup shortcut."""
        assert render_critic_markup(doc(), doc(para("new"))) == "{++new++}"

    def test_shifted_paragraphs(self):
        """Test dropping the first paragraph and appending one keeps the shared paragraph."""
        markup = render_critic_markup(doc(para("A"), para("B")), doc(para("B"), para("C")))
        assert markup == "{--A\n\n--}B\n\n{++C++}"


@pytest.mark.unit
class TestDiffStatistics:
    """Tests for DiffStatistics."""

    def test_defaults(self):
        """Test empty statistics have no changes."""
        assert not DiffStatistics().has_changes

    @pytest.mark.parametrize("field", ["inserted", "deleted", "granular", "substituted"])
    def test_change_fields(self, field):
        """Test each change count marks the diff as changed."""
        assert DiffStatistics(**{field: 1}).has_changes


@pytest.mark.unit
class TestCompareMarkdown:
    """Tests for compare_markdown."""

    def test_appended_item(self):
        """Test appending a list item to markdown text."""
        pytest.importorskip("mistune")
        result = compare_markdown("# Hello\n\n- Two\n- Three\n", "# Hello\n\n- Two\n- Three\n- Four\n")
        assert result.markup == "# Hello\n\n- Two\n- Three\n{++- Four++}"

    def test_identical(self):
        """Test identical markdown renders without markers."""
        pytest.importorskip("mistune")
        text = "# Title\n\nSome *emphasis* and `code`.\n"
        result = compare_markdown(text, text)
        assert result.markup == "# Title\n\nSome *emphasis* and `code`."
        assert not result.statistics.has_changes
