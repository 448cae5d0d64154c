# topmark:header:start
#
#   project      : Recode
#   file         : constants.py
#   file_relpath : src/recode/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Recode Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    RECODE_VERSION: str = get_version("recode")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    RECODE_VERSION = "0.0.0"

# Suffixes appended to a label to form its marker comments:
BEGIN_SUFFIX: str = "-BEGIN"
END_SUFFIX: str = "-END"

# Template used when neither a row nor a column template is given:
IDENTITY_TEMPLATE: str = "{{ . }}"

DEFAULT_COLUMN_SEPARATOR: str = ","
ROW_SEPARATOR: str = "\n"

# Environment variables:
SOURCE_FILE_ENV: str = "GOFILE"
LOG_LEVEL_ENV: str = "RECODE_LOG_LEVEL"

# Configuration discovery:
CONFIG_FILE_NAME: str = "recode.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_TABLE: str = "recode"
