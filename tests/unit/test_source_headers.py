"""Checks that every criticdiff module starts with the project header."""

from pathlib import Path

import pytest

import criticdiff

PACKAGE_DIR = Path(criticdiff.__file__).parent
SOURCE_ROOT = PACKAGE_DIR.parent

MODULES = sorted(path for path in PACKAGE_DIR.rglob("*.py") if path.name != "__main__.py")


@pytest.mark.unit
@pytest.mark.parametrize("path", MODULES, ids=lambda path: str(path.relative_to(SOURCE_ROOT)))
def test_module_header(path):
    """Test the copyright line, a bare comment line and the module path."""
    lines = path.read_text(encoding="utf-8").splitlines()[:3]
    relative = path.relative_to(SOURCE_ROOT).as_posix()
    assert lines == [
        "#  Copyright (c) 2025 Tom Villani, Ph.D.",
        "#",
        f"# src/{relative}",
    ]
