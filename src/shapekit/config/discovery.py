"""Locate and read the shapekit configuration table.

Settings live either in a dedicated ``shapekit.toml`` (the whole document)
or in the ``[tool.shapekit]`` table of a ``pyproject.toml``. The finder
walks up from the start directory and stops at the first directory that
has either. Within one directory ``shapekit.toml`` wins. The
``SHAPEKIT_CONFIG`` env var names a file directly and skips the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "shapekit.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "SHAPEKIT_CONFIG"


class ConfigError(Exception):
    """Raised when a config file exists but cannot be parsed."""


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML, raising ConfigError on malformed content."""
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def _tool_table(document: dict[str, Any], path: Path) -> dict[str, Any] | None:
    table = document.get("tool", {}).get("shapekit")
    if table is None:
        return None
    if not isinstance(table, dict):
        msg = f"[tool.shapekit] in {path} must be a table"
        raise ConfigError(msg)
    return table


def read_config_table(path: Path) -> dict[str, Any]:
    """Return the shapekit settings held by *path*.

    A ``pyproject.toml`` contributes its ``[tool.shapekit]`` table (empty
    when absent); any other file is taken whole.
    """
    document = read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        return _tool_table(document, path) or {}
    return document


def _has_tool_table(path: Path) -> bool:
    return _tool_table(read_toml(path), path) is not None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for shapekit settings.

    Returns the first ``shapekit.toml``, or ``pyproject.toml`` carrying a
    ``[tool.shapekit]`` table, or None if neither is found. A pyproject
    without the table does not stop the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        dedicated = directory / CONFIG_FILENAME
        if dedicated.is_file():
            return dedicated
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None
