"""Pytest configuration and shared fixtures for the criticdiff test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings
from utils import cleanup_test_dir, create_test_temp_dir

# Register custom Hypothesis profiles
settings.register_profile(
    "ci", max_examples=200, deadline=None, verbosity=Verbosity.verbose, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo handler changes made by CLI tests that call configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch) -> Path:
    """Run in an empty working directory with no discoverable config file."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv("CRITICDIFF_CONFIG", raising=False)
    return work


@pytest.fixture
def sample_before() -> str:
    """Provide the before version of a small markdown document."""
    return """# Field Notes

The cat sat on the mat.

- Milk
- Eggs
- Bread

> Quoted remark.
"""


@pytest.fixture
def sample_after() -> str:
    """Provide the after version of a small markdown document."""
    return """# Field Notes

The cat sat on the rug.

- Milk
- Eggs
- Bread
- Butter

> Quoted remark.
"""
