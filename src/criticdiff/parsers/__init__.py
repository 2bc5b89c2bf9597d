#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/parsers/__init__.py
"""Parsing collaborators that build document trees for the diff engine."""

from criticdiff.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
