"""Unit tests for utils/decorators.py."""

from __future__ import annotations

from importlib import metadata
from unittest.mock import patch

import pytest

import criticdiff.utils.decorators
from criticdiff.exceptions import DependencyError
from criticdiff.utils.decorators import requires_dependencies


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the requires_dependencies decorator."""

    def test_missing_package_raises_error(self) -> None:
        """Test that a missing package raises DependencyError."""

        @requires_dependencies("test", [("nonexistent-package", "nonexistent_criticdiff_pkg", "")])
        def sample_function() -> str:
            return "success"

        with pytest.raises(DependencyError) as exc_info:
            sample_function()

        assert exc_info.value.missing_packages == ["nonexistent-package"]
        assert isinstance(exc_info.value.original_error, ImportError)
        assert "pip install" in str(exc_info.value)

    def test_version_mismatch_raises_error(self) -> None:
        """Test that an installed package with the wrong version raises DependencyError."""
        with patch("criticdiff.utils.decorators.importlib.import_module"):
            with patch.object(criticdiff.utils.decorators, "_installed_version", return_value="1.0.0"):

                @requires_dependencies("test", [("test-package", "test_package", ">=2.0.0")])
                def sample_function() -> str:
                    return "success"

                with pytest.raises(DependencyError, match=r"installed: 1\.0\.0"):
                    sample_function()

    def test_correct_version_succeeds(self) -> None:
        """Test that a satisfied requirement calls through."""
        with patch("criticdiff.utils.decorators.importlib.import_module"):
            with patch.object(criticdiff.utils.decorators, "_installed_version", return_value="3.1.0"):

                @requires_dependencies("test", [("test-package", "test_package", ">=3.0.0")])
                def sample_function() -> str:
                    return "success"

                assert sample_function() == "success"

    def test_no_version_spec_allows_any_version(self) -> None:
        """Test an empty version spec only checks the import."""

        @requires_dependencies("json", [("json", "json", "")])
        def sample_function() -> str:
            return "success"

        assert sample_function() == "success"

    def test_unknown_installed_version(self) -> None:
        """Test a package without metadata is reported as unknown."""
        with patch("criticdiff.utils.decorators.importlib.import_module"):
            with patch.object(criticdiff.utils.decorators, "_installed_version", return_value=None):

                @requires_dependencies("test", [("test-package", "test_package", ">=1.0")])
                def sample_function() -> str:
                    return "success"

                with pytest.raises(DependencyError, match="installed: unknown"):
                    sample_function()

    def test_invalid_installed_version(self) -> None:
        """Test an unparsable installed version does not satisfy a requirement."""
        with patch("criticdiff.utils.decorators.importlib.import_module"):
            with patch.object(criticdiff.utils.decorators, "_installed_version", return_value="not-a-version"):

                @requires_dependencies("test", [("test-package", "test_package", ">=1.0")])
                def sample_function() -> str:
                    return "success"

                with pytest.raises(DependencyError):
                    sample_function()

    def test_preserves_function_metadata(self) -> None:
        """Test that the wrapper keeps the wrapped function's name and docstring."""

        @requires_dependencies("json", [("json", "json", "")])
        def documented() -> None:
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."

    def test_passes_args_and_kwargs(self) -> None:
        """Test arguments reach the wrapped function."""

        @requires_dependencies("json", [("json", "json", "")])
        def add(a: int, b: int = 0) -> int:
            return a + b

        assert add(1, b=2) == 3


@pytest.mark.unit
class TestInstalledVersion:
    """Test the installed version lookup."""

    def test_reads_distribution_metadata(self) -> None:
        """Test the version comes from the distribution metadata."""
        with patch.object(criticdiff.utils.decorators.metadata, "version", return_value="2.5.0"):
            assert criticdiff.utils.decorators._installed_version("test-package") == "2.5.0"

    def test_missing_distribution(self) -> None:
        """Test a distribution without metadata gives None."""
        with patch.object(
            criticdiff.utils.decorators.metadata,
            "version",
            side_effect=metadata.PackageNotFoundError("test-package"),
        ):
            assert criticdiff.utils.decorators._installed_version("test-package") is None
