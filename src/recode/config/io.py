# topmark:header:start
#
#   project      : Recode
#   file         : io.py
#   file_relpath : src/recode/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Lightweight TOML I/O helpers for Recode configuration.

Pure helpers for reading TOML documents and extracting typed values from the
resulting tables. Keeping these separate from the model classes avoids import
cycles and keeps the model small.

Typical flow:
    1. Load a TOML file (``load_toml_dict``).
    2. Select the relevant table (``select_recode_table``).
    3. Extract values with the typed getters (``get_string_value_or_none``, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from recode.config.logging import get_logger
from recode.constants import PYPROJECT_FILE_NAME, PYPROJECT_TOOL_TABLE
from recode.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from recode.config.logging import RecodeLogger

logger: RecodeLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Return True if ``val`` is a TOML table (a ``dict``)."""
    return isinstance(val, dict)


def is_any_list(val: Any) -> TypeGuard[list[Any]]:
    """Return True if ``val`` is a list."""
    return isinstance(val, list)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table, or an empty dict when missing or not a table."""
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value.

    Integers, floats and booleans are coerced with ``str(...)``; other types
    yield ``None``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value (integers are coerced with ``bool``)."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def get_command_value_or_none(value: Any) -> tuple[str, ...] | None:
    """Normalize a formatter command: a list of strings, or a single string.

    A single string is split on whitespace. Anything else yields ``None``.
    """
    if isinstance(value, str):
        return tuple(value.split())
    if is_any_list(value) and all(isinstance(v, str) for v in value):
        return tuple(value)
    return None


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``recode.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content as plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    return doc.unwrap()


def select_recode_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the Recode settings table of a parsed TOML document.

    For ``pyproject.toml`` this is ``[tool.recode]`` (None when absent); for any
    other file it is the whole document.
    """
    if path.name == PYPROJECT_FILE_NAME:
        tool: TomlTable = get_table_value(data, "tool")
        if PYPROJECT_TOOL_TABLE not in tool:
            return None
        return get_table_value(tool, PYPROJECT_TOOL_TABLE)
    return data
