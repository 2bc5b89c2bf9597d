#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/cli/config.py
"""Configuration file discovery and loading for the criticdiff CLI.

Diff options can be stored in a dedicated ``.criticdiff.toml``,
``.criticdiff.yaml``/``.yml`` or ``.criticdiff.json`` file, or in the
``[tool.criticdiff]`` table of a ``pyproject.toml``. The keys are the
field names of :class:`criticdiff.options.DiffOptions`, for example::

    # .criticdiff.toml
    text_granularity = "word"
    paragraph_atomic_threshold = 0.5
    sentence_pass = false

Errors are reported as ``argparse.ArgumentTypeError`` so the commands can
print them the same way as bad command line values.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CRITICDIFF_CONFIG"
DEDICATED_CONFIG_FILENAMES = (".criticdiff.toml", ".criticdiff.yaml", ".criticdiff.yml", ".criticdiff.json")
CONFIG_FILENAMES = [*DEDICATED_CONFIG_FILENAMES, "pyproject.toml"]


def _load_toml(handle_path: Path) -> Any:
    with open(handle_path, "rb") as f:
        return tomllib.load(f)


def _load_json(handle_path: Path) -> Any:
    with open(handle_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_yaml(handle_path: Path) -> Any:
    with open(handle_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_mapping(config_path: Path, loader: Callable[[Path], Any], format_name: str) -> Dict[str, Any]:
    """Load a config file with ``loader`` and check that it holds a mapping."""
    try:
        data = loader(config_path)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise argparse.ArgumentTypeError(f"Invalid {format_name} in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading {format_name} config {config_path}: {e}") from e

    # An empty YAML document loads as None
    if data is None and format_name == "YAML":
        return {}
    if not isinstance(data, dict):
        raise argparse.ArgumentTypeError(
            f"{format_name} config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.criticdiff]`` table of a pyproject.toml, or ``{}``.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table

    """
    data = _read_mapping(pyproject_path, _load_toml, "TOML")
    section = data.get("tool", {}).get("criticdiff")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.criticdiff] section in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file at or above ``start_dir``.

    In each directory the dedicated files are checked first (in the order
    of ``DEDICATED_CONFIG_FILENAMES``), then ``pyproject.toml``, which only
    counts when it has a non-empty ``[tool.criticdiff]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches from ``start_dir`` (default: the working directory) up to the
    filesystem root, then falls back to the dedicated files in the user's
    home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file does not exist, cannot be parsed, or has an unsupported
        extension

    Examples
    --------
    >>> config = load_config_file(".criticdiff.toml")
    >>> config.get("paragraph_atomic_threshold")
    0.5

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    if ext == ".toml":
        return _read_mapping(config_path, _load_toml, "TOML")
    if ext in (".yaml", ".yml"):
        return _read_mapping(config_path, _load_yaml, "YAML")
    if ext == ".json":
        return _read_mapping(config_path, _load_json, "JSON")

    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries, recursing into nested tables.

    Examples
    --------
    >>> merge_configs({"sentence_pass": True, "x": {"a": 1}}, {"x": {"b": 2}})
    {'sentence_pass': True, 'x': {'a': 1, 'b': 2}}

    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. Environment variable config path (``CRITICDIFF_CONFIG``)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Path given on the command line
    env_var_path : str, optional
        Path taken from the environment

    Returns
    -------
    dict
        Configuration from the highest-priority source, or ``{}``

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered = discover_config_file()
    if discovered:
        logger.debug("Using configuration file %s", discovered)
        return load_config_file(discovered)

    return {}
