#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/parsers/markdown.py
"""Markdown to document tree converter.

This module builds the document trees consumed by the diff engine from
markdown text using the mistune parser. The diff engine does not depend
on it; it is the default parsing collaborator for the command line tool
and :func:`criticdiff.diff.api.compare_markdown`.

"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional, Union

from criticdiff.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
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
from criticdiff.constants import DEPS_MARKDOWN
from criticdiff.exceptions import ParsingError
from criticdiff.options import MarkdownParserOptions
from criticdiff.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


class MarkdownToAstConverter:
    r"""Convert Markdown to a document tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        self.options = options or MarkdownParserOptions()

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse Markdown input into a Document.

        Parameters
        ----------
        input_data : str or bytes
            Markdown text; bytes are decoded as UTF-8

        Returns
        -------
        Document
            Document tree

        Raises
        ------
        ParsingError
            If the input cannot be decoded or parsed

        """
        if isinstance(input_data, bytes):
            try:
                input_data = input_data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParsingError(f"Markdown input is not valid UTF-8: {e}", original_error=e) from e

        import mistune

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_task_lists:
            plugins.append("task_lists")

        # Tokens only; the tree is built from them below
        markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        try:
            tokens, _state = markdown.parse(input_data)
        except Exception as e:
            raise ParsingError(f"Failed to parse markdown: {e}", original_error=e) from e

        children = self._process_tokens(tokens) if isinstance(tokens, list) else []
        logger.debug("Parsed markdown into %d top-level blocks", len(children))
        return Document(children=children)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting node, or None for tokens without content (blank lines)

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))

        if token_type != "blank_line":
            logger.debug("Skipping unsupported markdown token: %s", token_type)
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process a fenced or indented code block.

        The first word of the info string is the language.
        """
        attrs = token.get("attrs", {})
        info_string = (attrs.get("info") or "").strip() if isinstance(attrs, dict) else ""
        language = info_string.split(maxsplit=1)[0] if info_string else None
        return CodeBlock(content=token.get("raw", ""), language=language)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process a list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight' and 'attrs' (ordered, start)

        Returns
        -------
        List
            List node

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = token.get("tight", attrs.get("tight", True))

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []

        items = [self._process_list_item(child) for child in children if isinstance(child, dict)]
        return List(ordered=ordered, items=items, start=start if isinstance(start, int) else 1, tight=bool(tight))

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        content = self._process_tokens(token.get("children", []))

        task_status: Literal["checked", "unchecked"] | None = None
        attrs = token.get("attrs", {})
        if isinstance(attrs, dict) and "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"

        return ListItem(children=content, task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process a table token.

        The header cells are direct children of ``table_head``; body rows are
        ``table_row`` children of ``table_body``.
        """
        header = None
        rows = []
        alignments = []

        for row_token in token.get("children", []):
            row_type = row_token.get("type", "")
            if row_type == "table_head":
                cells = self._process_table_cells(row_token.get("children", []))
                alignments = [cell.alignment for cell in cells]
                header = TableRow(cells=cells, is_header=True)
            elif row_type == "table_body":
                for body_row in row_token.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(body_row.get("children", []))))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, cell_tokens: list[dict[str, Any]]) -> list[TableCell]:
        cells = []
        for cell_token in cell_tokens:
            if cell_token.get("type") != "table_cell":
                continue
            attrs = cell_token.get("attrs", {})
            alignment = attrs.get("align") if isinstance(attrs, dict) else None
            content = self._process_inline_tokens(cell_token.get("children", []))
            cells.append(TableCell(content=content, alignment=alignment))
        return cells

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens into inline nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        children = token.get("children", [])
        if not isinstance(children, list):
            children = []
        return Link(url=attrs.get("url", ""), content=self._process_inline_tokens(children), title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; the alt text is carried by the children."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        alt_parts = [
            child.get("raw", "")
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") == "text"
        ]
        return Image(url=attrs.get("url", ""), alt_text="".join(alt_parts), title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        return HTMLInline(content=token.get("raw", ""))

    def _process_inline_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Dispatch a single inline token to its handler."""
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)
        logger.debug("Skipping unsupported inline token: %s", token_type)
        return None


def markdown_to_ast(markdown_content: Union[str, bytes], options: MarkdownParserOptions | None = None) -> Document:
    """Parse markdown text into a document tree.

    Parameters
    ----------
    markdown_content : str or bytes
        Markdown text
    options : MarkdownParserOptions, optional
        Parser options

    Returns
    -------
    Document
        Document tree

    Raises
    ------
    DependencyError
        If mistune is not installed
    ParsingError
        If the markdown cannot be parsed

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
