#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/ast/utils.py
"""Utility functions for working with document tree nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes

Examples
--------
    >>> from criticdiff.ast import Heading, Text, Emphasis
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(heading, joiner="")
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from criticdiff.ast.nodes import Code, CodeBlock, HTMLBlock, HTMLInline, Image, LineBreak, Text, get_node_children

if TYPE_CHECKING:
    from criticdiff.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text-bearing leaves contribute their content: text, inline code and
    code blocks their raw text, images their alt text, raw HTML its markup
    and line breaks a single newline. Formatting containers contribute
    the text of their children.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String used to join the text of sibling nodes. Use "" to keep the
        original spacing of inline content.

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, (Text, Code, CodeBlock, HTMLBlock, HTMLInline)):
        return node.content
    if isinstance(node, Image):
        return node.alt_text
    if isinstance(node, LineBreak):
        return "\n"

    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))
