#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for down2html.

A configuration file holds up to two sections, ``markdown`` and ``html``,
whose keys are the fields of ``MarkdownParserOptions`` and
``HtmlRendererOptions`` respectively:

.. code-block:: toml

    [markdown]
    max_nesting_depth = 16

    [html]
    indent = "  "
    standalone = false

The same tables may live under ``[tool.down2html]`` in ``pyproject.toml``.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from down2html.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from down2html.exceptions import ConfigError
from down2html.options import HtmlRendererOptions, MarkdownParserOptions
from down2html.options.base import CloneFrozenMixin

logger = logging.getLogger(__name__)

CONFIG_SECTIONS: Dict[str, type[CloneFrozenMixin]] = {
    "markdown": MarkdownParserOptions,
    "html": HtmlRendererOptions,
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.down2html]`` table from ``pyproject.toml``.

    Returns
    -------
    dict
        The table, or an empty dict if the file has none

    Raises
    ------
    ConfigError
        If the file cannot be parsed or the entry is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or any of its parents.

    Each directory is checked for, in order, ``.down2html.toml``,
    ``.down2html.yaml``, ``.down2html.yml``, ``.down2html.json`` and a
    ``pyproject.toml`` with a ``[tool.down2html]`` table. A malformed
    ``pyproject.toml`` is skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

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
            except ConfigError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e.message)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches ``start_dir`` (default: the working directory) and its parents
    first, then the user's home directory.

    Returns
    -------
    Path or None
        Path to the discovered file

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


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or ``pyproject.toml`` file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be parsed, or is not a mapping

    Examples
    --------
    >>> config = load_config_file(".down2html.toml")
    >>> config["html"]["indent"]
    '  '

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", str(config_path)
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid configuration file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file must contain a mapping at root level, got {type(config).__name__}", str(config_path)
        )
    logger.info("Loaded configuration from %s", config_path)
    return config


def _build_options(section: str, options_class: type[CloneFrozenMixin], values: Any) -> Any:
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{section}' must be a table, got {type(values).__name__}")

    unknown = sorted(set(values) - options_class.field_names())
    if unknown:
        raise ConfigError(f"Unknown key(s) in section '{section}': {', '.join(unknown)}")

    defaults = options_class()
    for option_field in fields(options_class):  # type: ignore[arg-type]
        if option_field.name not in values:
            continue
        expected_type = type(getattr(defaults, option_field.name))
        value = values[option_field.name]
        # bool is an int subclass; reject it for integer options.
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise ConfigError(
                f"Option '{section}.{option_field.name}' must be {expected_type.__name__}, got {type(value).__name__}"
            )

    try:
        return options_class(**values)
    except ValueError as e:
        raise ConfigError(f"Invalid value in section '{section}': {e}", original_error=e) from e


def options_from_config(config: Dict[str, Any]) -> tuple[MarkdownParserOptions, HtmlRendererOptions]:
    """Build parser and renderer options from a configuration mapping.

    Missing sections and keys keep their defaults.

    Raises
    ------
    ConfigError
        If the mapping has unknown sections or keys, or a value has the
        wrong type or is out of range

    Examples
    --------
    >>> parser_options, renderer_options = options_from_config({"html": {"standalone": False}})
    >>> renderer_options.standalone
    False

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown configuration section(s): {', '.join(unknown)}")

    parser_options = _build_options("markdown", MarkdownParserOptions, config.get("markdown", {}))
    renderer_options = _build_options("html", HtmlRendererOptions, config.get("html", {}))
    return parser_options, renderer_options
