"""Integration tests: markdown documents through parsing, diffing and rendering."""

import pytest

pytest.importorskip("mistune")

from criticdiff import accept_all, compare_markdown, preprocess, reject_all  # noqa: E402
from criticdiff.options import DiffOptions  # noqa: E402

REWRITE_BEFORE = "The quick brown fox jumps over the lazy dog."
REWRITE_AFTER = "A completely different sentence about something else."


def _count(markup, opener):
    return markup.count(opener)


@pytest.mark.integration
class TestDocumentScenarios:
    """End-to-end scenarios on markdown text."""

    def test_pure_insertion(self):
        """Test an appended list item is a single insertion."""
        markup = compare_markdown("# Hello\n- Two\n- Three", "# Hello\n- Two\n- Three\n- Four").markup
        assert markup == "# Hello\n\n- Two\n- Three\n{++- Four++}"
        assert _count(markup, "{--") == 0

    def test_pure_deletion(self):
        """Test a removed list item is a single deletion."""
        markup = compare_markdown("# Hello\n- Two\n- Three\n- Four", "# Hello\n- Two\n- Three").markup
        assert markup == "# Hello\n\n- Two\n- Three{--\n- Four--}"
        assert _count(markup, "{++") == 0

    def test_small_word_edit(self):
        """Test a one-word change renders word-level markers."""
        markup = compare_markdown("The cat sat on the mat.", "The cat sat on the rug.").markup
        assert markup == "The cat sat on the {--mat--}{++rug++}."
        assert _count(markup, "{~~") == 0

    def test_full_rewrite(self):
        """Test a rewritten paragraph is one whole-paragraph substitution."""
        markup = compare_markdown(REWRITE_BEFORE, REWRITE_AFTER).markup
        assert markup == f"{{~~{REWRITE_BEFORE}~>{REWRITE_AFTER}~~}}"
        assert _count(markup, "{~~") == 1
        assert _count(markup, "{++") == _count(markup, "{--") == 0

    def test_identical_documents(self, sample_before):
        """Test identical documents render their text with no markers."""
        result = compare_markdown(sample_before, sample_before)
        assert result.markup == result.before_text
        assert all(segment.kind == "unchanged" for segment in preprocess(result.markup))

    def test_rewritten_sentence(self):
        """Test a rewritten sentence in a stable paragraph is substituted alone."""
        before = "Alpha beta gamma delta. The weather today is sunny and warm. Epsilon zeta eta theta."
        after = "Alpha beta gamma delta. The weather today is cold and rainy. Epsilon zeta eta theta."
        markup = compare_markdown(before, after).markup
        assert markup == (
            "Alpha beta gamma delta. "
            "{~~The weather today is sunny and warm.~>The weather today is cold and rainy.~~}"
            " Epsilon zeta eta theta."
        )

    def test_nested_list_insertion(self):
        """Test a new nested item keeps its indentation inside the marker."""
        before = "- A\n  - A.1\n  - A.2\n- B\n"
        after = "- A\n  - A.1\n  - A.2\n  - A.3\n- B\n"
        markup = compare_markdown(before, after).markup
        assert markup == "- A\n  - A.1\n  - A.2\n{++  - A.3++}\n- B"

    def test_code_block_change_is_atomic(self):
        """Test any change in a code block substitutes the whole block."""
        before = "```python\nx = 1\n```\n"
        after = "```python\nx = 2\n```\n"
        markup = compare_markdown(before, after).markup
        assert markup == "{~~```python\nx = 1\n```~>```python\nx = 2\n```~~}"

    def test_table_change_is_atomic(self):
        """Test a changed table cell substitutes the whole table."""
        before = "| A | B |\n| --- | --- |\n| 1 | 2 |\n"
        after = "| A | B |\n| --- | --- |\n| 1 | 3 |\n"
        markup = compare_markdown(before, after).markup
        assert _count(markup, "{~~") == 1
        assert markup.startswith("{~~| A | B |")

    def test_heading_level_change(self):
        """Test a heading level change deletes and inserts the heading."""
        markup = compare_markdown("# Title\n\nBody.", "## Title\n\nBody.").markup
        assert markup == "{--# Title\n\n--}{++## Title++}\n\nBody."

    def test_markup_in_documents_round_trips(self):
        """Test documents containing CriticMarkup syntax stay unambiguous."""
        before = "Use {++this++} syntax.\n\nSecond paragraph."
        after = "Use {++that++} syntax.\n\nSecond paragraph."
        result = compare_markdown(before, after)
        assert accept_all(result.markup) == result.after_text
        assert reject_all(result.markup) == result.before_text

    def test_options(self):
        """Test options change the rendering decisions."""
        options = DiffOptions(paragraph_atomic_threshold=0.1)
        markup = compare_markdown("The cat sat on the mat.", "The cat sat on the rug.", options).markup
        assert markup == "{~~The cat sat on the mat.~>The cat sat on the rug.~~}"


@pytest.mark.integration
class TestRoundTrip:
    """Accept and reject on whole documents."""

    def test_sample_documents(self, sample_before, sample_after):
        """Test accepting all changes gives the after document."""
        result = compare_markdown(sample_before, sample_after)
        assert accept_all(result.markup) == result.after_text
        assert result.statistics.inserted == 1
        assert result.statistics.granular == 1

    def test_edits_without_insertions(self):
        """Test both directions when no block is inserted."""
        before = "# Notes\n\nFirst point here.\n\n- one\n- two\n- three\n"
        after = "# Notes\n\nFirst point there.\n\n- one\n- three\n"
        result = compare_markdown(before, after)
        assert accept_all(result.markup) == result.after_text
        assert reject_all(result.markup) == result.before_text
