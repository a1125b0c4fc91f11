#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the fswikifmt CLI.

This module finds a configuration file near the documents being
formatted, loads it from TOML, YAML or JSON, and returns a flat mapping of
option names to values. Keys may be written with dashes or underscores.

Example ``.fswikifmt.toml``::

    table_align = "left"
    table_insert_space = true

or, in ``pyproject.toml``::

    [tool.fswikifmt]
    table-align = "left"
"""

import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from fswikifmt.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from fswikifmt.exceptions import ConfigError


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.fswikifmt] section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from the section, or empty dict if not found

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e) from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root,
    checking each directory for configuration files in priority order:

    1. .fswikifmt.toml
    2. .fswikifmt.yaml / .fswikifmt.yml
    3. .fswikifmt.json
    4. pyproject.toml (only with a [tool.fswikifmt] section)

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                # A broken pyproject.toml belongs to some other tool; keep searching
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in standard locations.

    Parent directories of ``start_dir`` are searched first (see
    :func:`find_config_in_parents`), then the user's home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", config_path=str(config_path), original_error=e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", config_path=str(config_path), original_error=e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"JSON config file must contain an object, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", config_path=str(config_path), original_error=e) from e

    # An empty YAML file loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary with keys normalized to underscores

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed, or of an unsupported type

    Examples
    --------
    >>> config = load_config_file(".fswikifmt.toml")
    >>> config.get("table_align")
    'left'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            config = _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            config = _load_yaml_config(config_path)
        elif ext == ".json":
            config = _load_json_config(config_path)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", config_path=str(config_path)
            )
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", config_path=str(config_path), original_error=e) from e

    return {str(key).replace("-", "_"): value for key, value in config.items()}


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (--config flag)
    2. Environment variable config path (FSWIKIFMT_CONFIG)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the FSWIKIFMT_CONFIG environment variable
    start_dir : Path, optional
        Directory discovery starts from, defaults to the current directory

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    ConfigError
        If a config file is specified or found but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file(start_dir)
    if discovered_path:
        return load_config_file(discovered_path)

    return {}
