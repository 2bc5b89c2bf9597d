"""Unit tests for flattening document trees into blocks."""

import pytest
from utils import bullets, doc, heading, numbered, para, quote

from criticdiff.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    HTMLBlock,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from criticdiff.diff.blocks import collect_blocks, document_text, make_block, render_inline, serialize_blocks
from criticdiff.exceptions import MalformedTreeError


@pytest.mark.unit
class TestRenderInline:
    """Tests for inline markdown serialization."""

    def test_formatting(self):
        """Test emphasis, strong and strikethrough markers."""
        nodes = [
            Text("a "),
            Strong(content=[Text("b")]),
            Text(" "),
            Emphasis(content=[Text("c")]),
            Text(" "),
            Strikethrough(content=[Text("d")]),
        ]
        assert render_inline(nodes) == "a **b** *c* ~~d~~"

    def test_links_and_images(self):
        """Test links and images with titles."""
        nodes = [Link(url="http://x", content=[Text("x")], title="X"), Image(url="i.png", alt_text="pic")]
        assert render_inline(nodes) == '[x](http://x "X")![pic](i.png)'

    def test_code_span_with_backticks(self):
        """Test code spans containing backticks use a longer fence."""
        assert render_inline([Code("a")]) == "`a`"
        assert render_inline([Code("a`b")]) == "`` a`b ``"

    def test_line_breaks(self):
        """Test soft and hard line breaks."""
        assert render_inline([Text("a"), LineBreak(soft=True), Text("b")]) == "a\nb"
        assert render_inline([Text("a"), LineBreak(), Text("b")]) == "a\\\nb"

    def test_block_in_inline_content(self):
        """Test block nodes are rejected in inline content."""
        with pytest.raises(MalformedTreeError, match="Block Paragraph found in inline content"):
            render_inline([Paragraph(content=[Text("x")])])

    def test_non_node_in_inline_content(self):
        """Test plain strings are rejected in inline content."""
        with pytest.raises(MalformedTreeError):
            render_inline(["raw string"])


@pytest.mark.unit
class TestCollectBlocks:
    """Tests for collect_blocks."""

    def test_heading_and_paragraph(self):
        """Test top-level blocks get a blank-line separator."""
        blocks = collect_blocks(doc(heading("Title", 2), para("Body.")))
        assert [(b.kind, b.prefix, b.body, b.lead) for b in blocks] == [
            ("heading", "## ", "Title", ""),
            ("paragraph", "", "Body.", "\n\n"),
        ]

    def test_tight_list_items(self):
        """Test items of a tight list are separated by single newlines."""
        blocks = collect_blocks(doc(bullets("one", "two")))
        assert [(b.kind, b.text, b.lead) for b in blocks] == [
            ("list_item", "- one", ""),
            ("list_item", "- two", "\n"),
        ]

    def test_loose_list_items(self):
        """Test items of a loose list are separated by blank lines."""
        blocks = collect_blocks(doc(bullets("one", "two", tight=False)))
        assert [b.lead for b in blocks] == ["", "\n\n"]

    def test_ordered_list_numbering(self):
        """Test ordered markers count from the list start."""
        blocks = collect_blocks(doc(numbered("a", "b", start=3)))
        assert [b.prefix for b in blocks] == ["3. ", "4. "]

    def test_task_items(self):
        """Test task markers are part of the prefix and structure."""
        items = [
            ListItem(children=[para("done")], task_status="checked"),
            ListItem(children=[para("todo")], task_status="unchecked"),
        ]
        blocks = collect_blocks(doc(List(ordered=False, items=items)))
        assert [b.prefix for b in blocks] == ["- [x] ", "- [ ] "]
        assert blocks[0].signature.key != blocks[1].signature.key

    def test_nested_list(self):
        """Test nested items are indented under their parent marker."""
        inner = bullets("child")
        outer = List(ordered=False, items=[ListItem(children=[para("parent"), inner])])
        blocks = collect_blocks(doc(outer))
        assert [b.text for b in blocks] == ["- parent", "  - child"]
        assert blocks[1].lead == "\n"
        assert blocks[0].signature.key != blocks[1].signature.key

    def test_item_with_inline_children(self):
        """Test list items whose children are inline nodes."""
        item = ListItem(children=[Text("bare "), Strong(content=[Text("item")])])
        blocks = collect_blocks(doc(List(ordered=False, items=[item])))
        assert blocks[0].text == "- bare **item**"

    def test_item_continuation_lines(self):
        """Test multi-line item text is indented under the marker."""
        item = ListItem(children=[Paragraph(content=[Text("a"), LineBreak(soft=True), Text("b")])])
        blocks = collect_blocks(doc(List(ordered=True, items=[item])))
        assert blocks[0].text == "1. a\n   b"

    def test_block_quote(self):
        """Test quoted blocks carry the quote prefix and quoted separators."""
        blocks = collect_blocks(doc(quote(para("first"), para("second"))))
        assert [b.text for b in blocks] == ["> first", "> second"]
        assert blocks[1].lead == "\n>\n"

    def test_quote_multiline_paragraph(self):
        """Test continuation lines of a quoted paragraph are quoted."""
        node = quote(Paragraph(content=[Text("a"), LineBreak(soft=True), Text("b")]))
        assert collect_blocks(doc(node))[0].text == "> a\n> b"

    def test_nested_quote_depth_in_structure(self):
        """Test quote depth is part of the signature key."""
        shallow = collect_blocks(doc(quote(para("x"))))[0]
        deep = collect_blocks(doc(quote(quote(para("x")))))[0]
        assert deep.text == "> > x"
        assert shallow.signature != deep.signature

    def test_code_block(self):
        """Test fenced code blocks are atomic and keep their language."""
        block = collect_blocks(doc(CodeBlock(content="x = 1\n", language="python")))[0]
        assert block.text == "```python\nx = 1\n```"
        assert block.atomic
        assert block.signature.key[:2] == ("code_block", "python")

    def test_code_block_with_fence_inside(self):
        """Test a longer fence is used when the code contains backticks."""
        block = collect_blocks(doc(CodeBlock(content="```\ninner\n```")))[0]
        assert block.text.startswith("````\n")
        assert block.text.endswith("\n````")

    def test_table(self):
        """Test tables serialize with a delimiter row."""
        table = Table(
            header=TableRow(cells=[TableCell(content=[Text("A")]), TableCell(content=[Text("B")])], is_header=True),
            rows=[TableRow(cells=[TableCell(content=[Text("1")]), TableCell(content=[Text("a|b")])])],
            alignments=["left", "right"],
        )
        block = collect_blocks(doc(table))[0]
        assert block.text == "| A | B |\n| :--- | ---: |\n| 1 | a\\|b |"
        assert block.atomic

    def test_thematic_break_and_html(self):
        """Test thematic breaks and HTML blocks."""
        blocks = collect_blocks(doc(ThematicBreak(), HTMLBlock(content="<div>x</div>\n")))
        assert [b.text for b in blocks] == ["---", "<div>x</div>"]
        assert all(b.atomic for b in blocks)

    def test_signature_normalizes_whitespace(self):
        """Test plain text in the signature is whitespace-normalized."""
        a = collect_blocks(doc(para("a  b")))[0]
        b = collect_blocks(doc(para("a b")))[0]
        assert a.signature.text == b.signature.text
        assert a.text != b.text

    def test_sequence_input(self):
        """Test a list of block nodes is accepted."""
        assert len(collect_blocks([para("a"), para("b")])) == 2


@pytest.mark.unit
class TestMalformedTrees:
    """Tests for rejection of malformed trees."""

    def test_bare_list_item(self):
        """Test a list item outside a list is rejected."""
        with pytest.raises(MalformedTreeError, match="ListItem"):
            collect_blocks(doc(ListItem(children=[para("x")])))

    def test_inline_in_block_position(self):
        """Test inline nodes are rejected where a block is required."""
        with pytest.raises(MalformedTreeError) as exc_info:
            collect_blocks(doc(Text("loose")))
        assert isinstance(exc_info.value.node, Text)

    def test_non_item_in_list(self):
        """Test list children must be list items."""
        with pytest.raises(MalformedTreeError):
            collect_blocks(doc(List(ordered=False, items=[para("x")])))

    def test_non_node_value(self):
        """Test non-node values are rejected."""
        with pytest.raises(MalformedTreeError):
            collect_blocks(doc("not a node"))

    def test_unknown_node_type(self):
        """Test unknown node subclasses are rejected."""

        class CustomBlock(Node):
            pass

        with pytest.raises(MalformedTreeError, match="CustomBlock"):
            collect_blocks([CustomBlock()])

    def test_mutated_heading_level(self):
        """Test heading levels are validated again during flattening."""
        node = heading("x")
        node.level = 9
        with pytest.raises(MalformedTreeError, match="Heading level"):
            collect_blocks(doc(node))

    def test_bad_table_cell(self):
        """Test table cells must be TableCell nodes."""
        table = Table(rows=[TableRow(cells=[Text("x")])])
        with pytest.raises(MalformedTreeError):
            collect_blocks(doc(table))

    def test_bad_source(self):
        """Test unsupported source types are rejected."""
        with pytest.raises(MalformedTreeError):
            collect_blocks(42)


@pytest.mark.unit
class TestMakeBlock:
    """Tests for make_block."""

    def test_paragraph(self):
        """Test a single paragraph becomes one block."""
        assert make_block(para("x")).kind == "paragraph"

    def test_bare_list_item(self):
        """Test a bare list item is treated as a bullet item."""
        assert make_block(ListItem(children=[para("x")])).text == "- x"

    def test_block_passthrough(self):
        """Test an existing block is returned unchanged."""
        block = make_block(para("x"))
        assert make_block(block) is block

    def test_multi_block_node(self):
        """Test containers producing several blocks are rejected."""
        with pytest.raises(MalformedTreeError, match="single block"):
            make_block(BlockQuote(children=[para("a"), para("b")]))


@pytest.mark.unit
class TestDocumentText:
    """Tests for document_text and serialize_blocks."""

    def test_mixed_document(self):
        """Test the serialized text of a mixed document."""
        tree = doc(heading("Hello"), bullets("Two", "Three"), quote(para("q")), para("end"))
        assert document_text(tree) == "# Hello\n\n- Two\n- Three\n\n> q\n\nend"

    def test_serialize_matches_document_text(self):
        """Test serialize_blocks joins blocks with their leads."""
        tree = doc(para("a"), para("b"))
        assert serialize_blocks(collect_blocks(tree)) == document_text(tree) == "a\n\nb"

    def test_empty_document(self):
        """Test an empty document has empty text."""
        assert document_text(doc()) == ""
