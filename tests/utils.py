"""Test utilities for the criticdiff test suite.

This module provides small builders for document trees and helpers for
temporary directories used by the CLI tests.
"""

import shutil
import tempfile
from pathlib import Path

from criticdiff.ast import BlockQuote, Document, Heading, List, ListItem, Paragraph, Text


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def para(text: str) -> Paragraph:
    """Build a paragraph holding a single text node."""
    return Paragraph(content=[Text(content=text)])


def heading(text: str, level: int = 1) -> Heading:
    """Build a heading holding a single text node."""
    return Heading(level=level, content=[Text(content=text)])


def bullets(*texts: str, tight: bool = True) -> List:
    """Build a bullet list with one paragraph per item."""
    return List(ordered=False, items=[ListItem(children=[para(text)]) for text in texts], tight=tight)


def numbered(*texts: str, start: int = 1) -> List:
    """Build an ordered list with one paragraph per item."""
    return List(ordered=True, start=start, items=[ListItem(children=[para(text)]) for text in texts])


def quote(*children) -> BlockQuote:
    """Build a block quote around the given blocks."""
    return BlockQuote(children=list(children))


def doc(*children) -> Document:
    """Build a document from block nodes."""
    return Document(children=list(children))
