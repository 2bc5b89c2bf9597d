#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/blocks.py
"""Flatten document trees into alignable blocks.

Lists and block quotes are containers rather than blocks of their own:
each list item becomes a block carrying its marker, and the children of a
block quote become blocks carrying the quote prefix. Every block records
the separator that precedes it in its own document, so joining
``block.lead + block.text`` over all blocks reproduces the markdown text
of the whole document (see :func:`document_text`).

Any deviation from the expected node shape raises
:class:`~criticdiff.exceptions.MalformedTreeError`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from criticdiff.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
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
from criticdiff.ast.utils import extract_text
from criticdiff.constants import (
    ATOMIC_BLOCK_KINDS,
    BLOCK_SEPARATOR,
    BULLET_MARKER,
    QUOTE_MARKER,
    THEMATIC_BREAK_MARKUP,
    TIGHT_LIST_SEPARATOR,
)
from criticdiff.diff.models import Block
from criticdiff.diff.text_diff import normalize_whitespace
from criticdiff.exceptions import MalformedTreeError

logger = logging.getLogger(__name__)

BlockSource = Union[Document, Sequence[Node]]

_BACKTICK_RUN_RE = re.compile(r"`+")


@dataclass(frozen=True)
class _Context:
    """Container state for the blocks being collected."""

    quote_path: tuple[int, ...] = ()
    indent: str = ""
    list_root: Optional[tuple[int, bool]] = None
    list_depth: int = 0

    @property
    def line_prefix(self) -> str:
        return QUOTE_MARKER * len(self.quote_path) + self.indent


def _longest_run(pattern: re.Pattern[str], text: str) -> int:
    return max((len(match) for match in pattern.findall(text)), default=0)


def _continue_lines(text: str, line_prefix: str) -> str:
    """Prefix every line after the first with the container prefix."""
    if "\n" not in text or not line_prefix:
        return text
    lines = text.split("\n")
    return lines[0] + "".join("\n" + (line_prefix + line if line else line_prefix.rstrip()) for line in lines[1:])


# ============================================================================
# Inline serialization
# ============================================================================


def render_inline(nodes: Sequence[Node]) -> str:
    """Serialize inline nodes back to markdown text.

    Parameters
    ----------
    nodes : sequence of Node
        Inline nodes

    Returns
    -------
    str
        Markdown text

    Raises
    ------
    MalformedTreeError
        If a block node or a non-node value appears in inline content

    """
    return "".join(_render_inline_node(node) for node in nodes)


def _render_inline_node(node: Node) -> str:
    if isinstance(node, Text):
        return node.content
    if isinstance(node, Strong):
        return f"**{render_inline(node.content)}**"
    if isinstance(node, Emphasis):
        return f"*{render_inline(node.content)}*"
    if isinstance(node, Strikethrough):
        return f"~~{render_inline(node.content)}~~"
    if isinstance(node, Code):
        fence = "`" * (_longest_run(_BACKTICK_RUN_RE, node.content) + 1)
        if fence == "`":
            return f"`{node.content}`"
        return f"{fence} {node.content} {fence}"
    if isinstance(node, Link):
        title = f' "{node.title}"' if node.title else ""
        return f"[{render_inline(node.content)}]({node.url}{title})"
    if isinstance(node, Image):
        title = f' "{node.title}"' if node.title else ""
        return f"![{node.alt_text}]({node.url}{title})"
    if isinstance(node, LineBreak):
        return "\n" if node.soft else "\\\n"
    if isinstance(node, HTMLInline):
        return node.content
    if isinstance(node, BLOCK_NODE_TYPES):
        raise MalformedTreeError(f"Block {type(node).__name__} found in inline content", node=node)
    if isinstance(node, Node):
        raise MalformedTreeError(f"{type(node).__name__} is not allowed in inline content", node=node)
    raise MalformedTreeError(f"Expected an inline node, got {type(node).__name__}", node=node)


# ============================================================================
# Block serialization
# ============================================================================


def _code_block_body(node: CodeBlock) -> str:
    fence = "`" * max(3, _longest_run(_BACKTICK_RUN_RE, node.content) + 1)
    content = node.content.rstrip("\n")
    opening = fence + (node.language or "")
    if not content:
        return f"{opening}\n{fence}"
    return f"{opening}\n{content}\n{fence}"


def _table_row_markup(row: TableRow) -> str:
    if not isinstance(row, TableRow):
        raise MalformedTreeError(f"Table rows must be TableRow nodes, got {type(row).__name__}", node=row)
    for cell in row.cells:
        if not isinstance(cell, TableCell):
            raise MalformedTreeError(f"Table cells must be TableCell nodes, got {type(cell).__name__}", node=cell)
    cells = [render_inline(cell.content).replace("|", "\\|").replace("\n", " ") for cell in row.cells]
    return "| " + " | ".join(cells) + " |"


def _table_body(node: Table) -> str:
    lines: list[str] = []
    if node.header is not None:
        lines.append(_table_row_markup(node.header))
        delimiters = []
        for index in range(len(node.header.cells)):
            alignment = node.alignments[index] if index < len(node.alignments) else None
            if alignment == "left":
                delimiters.append(":---")
            elif alignment == "center":
                delimiters.append(":---:")
            elif alignment == "right":
                delimiters.append("---:")
            else:
                delimiters.append("---")
        lines.append("| " + " | ".join(delimiters) + " |")
    lines.extend(_table_row_markup(row) for row in node.rows)
    return "\n".join(lines)


class _BlockCollector:
    """Walk a document tree and collect its blocks in document order."""

    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self._last_context: Optional[_Context] = None

    def _separator(self, context: _Context) -> str:
        previous = self._last_context
        if previous is None:
            return ""
        if (
            context.list_root is not None
            and previous.list_root is not None
            and context.list_root[0] == previous.list_root[0]
            and context.list_root[1]
        ):
            return TIGHT_LIST_SEPARATOR

        shared = 0
        for mine, theirs in zip(context.quote_path, previous.quote_path):
            if mine != theirs:
                break
            shared += 1
        if shared:
            return "\n" + (QUOTE_MARKER * shared).rstrip() + "\n"
        return BLOCK_SEPARATOR

    def _add(
        self,
        node: Node,
        kind: str,
        context: _Context,
        prefix: str,
        body: str,
        structure: tuple,
        plain_text: str,
        continuation: Optional[str] = None,
    ) -> None:
        if continuation is None:
            continuation = context.line_prefix
        block = Block(
            node=node,
            kind=kind,
            prefix=prefix,
            body=_continue_lines(body, continuation),
            lead=self._separator(context),
            structure=(*structure, len(context.quote_path), context.list_depth),
            plain_text=normalize_whitespace(plain_text),
            atomic=kind in ATOMIC_BLOCK_KINDS,
        )
        self.blocks.append(block)
        self._last_context = context

    def walk(self, nodes: Sequence[Node], context: _Context) -> None:
        for node in nodes:
            self.walk_block(node, context)

    def walk_block(self, node: Node, context: _Context) -> None:
        line_prefix = context.line_prefix
        if isinstance(node, Heading):
            if not isinstance(node.level, int) or not 1 <= node.level <= 6:
                raise MalformedTreeError(f"Heading level must be 1-6, got {node.level!r}", node=node)
            self._add(
                node,
                "heading",
                context,
                line_prefix + "#" * node.level + " ",
                render_inline(node.content),
                (node.level,),
                extract_text(node.content, joiner=""),
            )
        elif isinstance(node, Paragraph):
            self._add(
                node,
                "paragraph",
                context,
                line_prefix,
                render_inline(node.content),
                (),
                extract_text(node.content, joiner=""),
            )
        elif isinstance(node, CodeBlock):
            self._add(
                node, "code_block", context, line_prefix, _code_block_body(node), (node.language or "",), node.content
            )
        elif isinstance(node, BlockQuote):
            self.walk(node.children, replace(context, quote_path=(*context.quote_path, id(node))))
        elif isinstance(node, List):
            self._walk_list(node, context)
        elif isinstance(node, ThematicBreak):
            self._add(node, "thematic_break", context, line_prefix, THEMATIC_BREAK_MARKUP, (), "")
        elif isinstance(node, HTMLBlock):
            self._add(node, "html_block", context, line_prefix, node.content.rstrip("\n"), (), node.content)
        elif isinstance(node, Table):
            self._add(node, "table", context, line_prefix, _table_body(node), (), extract_text(node, joiner=" "))
        elif isinstance(node, ListItem):
            raise MalformedTreeError("ListItem must be a child of a List", node=node)
        elif isinstance(node, INLINE_NODE_TYPES):
            raise MalformedTreeError(f"Inline {type(node).__name__} found where a block is required", node=node)
        elif isinstance(node, Node):
            raise MalformedTreeError(f"Unsupported node type in block position: {type(node).__name__}", node=node)
        else:
            raise MalformedTreeError(f"Expected a document node, got {type(node).__name__}", node=node)

    def _walk_list(self, node: List, context: _Context) -> None:
        root = context.list_root or (id(node), bool(node.tight))
        for index, item in enumerate(node.items):
            if not isinstance(item, ListItem):
                raise MalformedTreeError(
                    f"List items must be ListItem nodes, got {type(item).__name__}", node=item
                )
            marker = f"{node.start + index}. " if node.ordered else BULLET_MARKER
            self._walk_item(node, item, marker, replace(context, list_root=root))

    def _walk_item(self, parent: List, item: ListItem, marker: str, context: _Context) -> None:
        if item.task_status == "checked":
            task = "[x] "
        elif item.task_status == "unchecked":
            task = "[ ] "
        else:
            task = ""

        children = list(item.children)
        inline_run: list[Node] = []
        while children and isinstance(children[0], INLINE_NODE_TYPES):
            inline_run.append(children.pop(0))
        if not inline_run and children and isinstance(children[0], Paragraph):
            inline_run = list(children.pop(0).content)

        nested = replace(
            context,
            indent=context.indent + " " * len(marker),
            list_depth=context.list_depth + 1,
        )
        # Continuation lines of the item text align with the text after the marker
        self._add(
            item,
            "list_item",
            context,
            context.line_prefix + marker + task,
            render_inline(inline_run),
            (bool(parent.ordered), item.task_status or ""),
            extract_text(inline_run, joiner=""),
            continuation=nested.line_prefix,
        )
        self.walk(children, nested)


def collect_blocks(source: BlockSource) -> list[Block]:
    """Flatten a document, or a sequence of block nodes, into blocks.

    Parameters
    ----------
    source : Document or sequence of Node
        The tree to flatten. A sequence is treated as the children of a
        document.

    Returns
    -------
    list of Block
        Blocks in document order

    Raises
    ------
    MalformedTreeError
        If the tree does not have the expected node shape

    """
    if isinstance(source, Document):
        children: Sequence[Node] = source.children
    elif isinstance(source, Node):
        children = [source]
    elif isinstance(source, (list, tuple)):
        children = source
    else:
        raise MalformedTreeError(f"Expected a Document or a list of block nodes, got {type(source).__name__}")

    collector = _BlockCollector()
    collector.walk(children, _Context())
    logger.debug("Collected %d blocks", len(collector.blocks))
    return collector.blocks


def make_block(node: Union[Block, Node]) -> Block:
    """Build a standalone block from a single block-level node.

    A bare :class:`ListItem` is treated as an item of a bullet list.

    Raises
    ------
    MalformedTreeError
        If the node does not produce exactly one block

    """
    if isinstance(node, Block):
        return node
    if isinstance(node, ListItem):
        blocks = collect_blocks([List(ordered=False, items=[node])])
    else:
        blocks = collect_blocks([node])
    if len(blocks) != 1:
        raise MalformedTreeError(f"Expected a single block, {type(node).__name__} produced {len(blocks)}", node=node)
    return blocks[0]


def serialize_blocks(blocks: Sequence[Block]) -> str:
    """Join blocks with their own separators."""
    return "".join(block.lead + block.text for block in blocks)


def document_text(source: BlockSource) -> str:
    """Return the markdown text of a document as seen by the diff engine.

    This is the text that accepting every change in the rendered
    CriticMarkup reproduces for the after document.

    Examples
    --------
    >>> from criticdiff.ast import Document, Heading, Paragraph, Text
    >>> document_text(Document(children=[
    ...     Heading(level=1, content=[Text("Title")]),
    ...     Paragraph(content=[Text("Body.")]),
    ... ]))
    '# Title\\n\\nBody.'

    """
    return serialize_blocks(collect_blocks(source))
