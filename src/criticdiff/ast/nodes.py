#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/ast/nodes.py
"""Document tree node classes consumed by the diff engine.

The node set is closed: the diff engine dispatches on exactly these
classes and reports anything else as a malformed tree. Trees are built by
a parsing collaborator (see :mod:`criticdiff.parsers.markdown`) or by hand
in tests, and are never mutated by the engine.

Node Hierarchy
--------------
Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Strikethrough, Code
    - Link, Image, LineBreak, HTMLInline

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

Alignment = Literal["left", "center", "right"]
TaskStatus = Literal["checked", "unchecked"]


@dataclass
class SourceLocation:
    """Source location information for tree nodes.

    Parameters
    ----------
    format : str
        Source format (e.g., 'markdown')
    line : int or None, default = None
        Line number in source document
    column : int or None, default = None
        Column number in source document

    """

    format: str
    line: Optional[int] = None
    column: Optional[int] = None


class Node:
    """Base class for all document tree nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node
    source_location : SourceLocation or None, default = None
        Information about where this node came from in the source

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing block-level children.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata (title, author, etc.)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not isinstance(self.level, int) or not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class CodeBlock(Node):
    """Fenced code block with optional language.

    Parameters
    ----------
    content : str
        Raw code text
    language : str or None, default = None
        Language identifier from the fence info string
    metadata : dict, default = empty dict
        Code block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class BlockQuote(Node):
    """Block quote containing block-level children."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    tight : bool, default = True
        Whether list is tight (no blank lines between items)
    metadata : dict, default = empty dict
        List metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class ListItem(Node):
    """List item node containing block content.

    A list item's children are normally block nodes (a paragraph followed
    by nested lists or other blocks). A leading run of inline nodes is also
    accepted and treated as the item's own text.

    Parameters
    ----------
    children : list of Node, default = empty list
        Nodes in the list item
    task_status : {'checked', 'unchecked'} or None, default = None
        For task lists (GFM extension)
    metadata : dict, default = empty dict
        List item metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[TaskStatus] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Table(Node):
    """Table node with optional header row and column alignments.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table body rows
    header : TableRow or None, default = None
        Header row
    alignments : list of {'left', 'center', 'right'} or None
        Column alignments
    metadata : dict, default = empty dict
        Table metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Optional[Alignment]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class TableRow(Node):
    """Table row containing cells."""

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class TableCell(Node):
    """Table cell containing inline content."""

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class ThematicBreak(Node):
    """Horizontal rule separating sections."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class HTMLBlock(Node):
    """Raw HTML block passed through verbatim."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text content.

    Parameters
    ----------
    content : str
        The text content
    metadata : dict, default = empty dict
        Text metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Emphasis(Node):
    """Emphasized (italic) inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Strong(Node):
    """Strong (bold) inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Strikethrough(Node):
    """Strikethrough inline content (GFM extension)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Code(Node):
    """Inline code span."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Link(Node):
    """Hyperlink with inline content.

    Parameters
    ----------
    url : str
        Link target
    content : list of Node, default = empty list
        Inline nodes forming the link text
    title : str or None, default = None
        Optional link title
    metadata : dict, default = empty dict
        Link metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class Image(Node):
    """Inline image reference."""

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class LineBreak(Node):
    """Line break inside a paragraph.

    Parameters
    ----------
    soft : bool, default = False
        True for a soft break (a plain newline in the source), False for a
        hard break

    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


@dataclass
class HTMLInline(Node):
    """Raw inline HTML passed through verbatim."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None


BlockNode = Union[Heading, Paragraph, CodeBlock, BlockQuote, List, ListItem, Table, ThematicBreak, HTMLBlock]
InlineNode = Union[Text, Emphasis, Strong, Strikethrough, Code, Link, Image, LineBreak, HTMLInline]

BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Heading,
    Paragraph,
    CodeBlock,
    BlockQuote,
    List,
    ThematicBreak,
    HTMLBlock,
    Table,
)
INLINE_NODE_TYPES: tuple[type[Node], ...] = (
    Text,
    Emphasis,
    Strong,
    Strikethrough,
    Code,
    Link,
    Image,
    LineBreak,
    HTMLInline,
)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(node, (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link, TableCell)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    return []
