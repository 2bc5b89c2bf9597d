#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/ast/__init__.py
"""Document tree consumed by the structural diff engine."""

from criticdiff.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    BlockNode,
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    InlineNode,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    get_node_children,
)
from criticdiff.ast.utils import extract_text

__all__ = [
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    "BlockNode",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "InlineNode",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "extract_text",
    "get_node_children",
]
