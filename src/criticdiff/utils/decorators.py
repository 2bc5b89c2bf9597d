#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/utils/decorators.py
"""Dependency checking for optional collaborators.

The diff engine itself has no third-party dependencies at runtime; only
the markdown parsing collaborator needs ``mistune``. Functions that need
an optional package are wrapped with :func:`requires_dependencies` so a
missing or outdated package surfaces as a
:class:`~criticdiff.exceptions.DependencyError` with an install hint.
"""

from __future__ import annotations

import importlib
from functools import wraps
from importlib import metadata
from typing import Any, Callable, List, Optional, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from criticdiff.exceptions import DependencyError


def _installed_version(install_name: str) -> Optional[str]:
    try:
        return metadata.version(install_name)
    except metadata.PackageNotFoundError:
        return None


def _meets_requirement(installed: str, version_spec: str) -> bool:
    try:
        return Version(installed) in SpecifierSet(version_spec)
    except InvalidVersion:
        return False


def requires_dependencies(feature: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required packages and versions before calling the wrapped function.

    Parameters
    ----------
    feature : str
        Name of the feature needing the packages (e.g., "markdown"), used in
        the error message
    packages : list of tuple
        Required packages as ``(install_name, import_name, version_spec)``

    Returns
    -------
    Callable
        Decorator checking the packages on every call

    Raises
    ------
    DependencyError
        If a package is missing or its installed version does not satisfy
        the version specification

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(text):
        ...     import mistune
        ...     return mistune.create_markdown(renderer=None).parse(text)

    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            problems: list[str] = []
            missing: list[str] = []
            original_error: Optional[ImportError] = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append(install_name)
                    problems.append(f"{install_name}{version_spec}")
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    installed = _installed_version(install_name)
                    if installed is None or not _meets_requirement(installed, version_spec):
                        missing.append(install_name)
                        problems.append(f"{install_name}{version_spec} (installed: {installed or 'unknown'})")

            if missing:
                requirements = " ".join(f'"{name}{spec}"' for name, _, spec in packages if name in missing)
                raise DependencyError(
                    f"'{feature}' support requires {', '.join(problems)}. Install with: pip install {requirements}",
                    missing_packages=missing,
                    original_error=original_error,
                ) from original_error

            return function(*args, **kwargs)

        return wrapper

    return decorator
