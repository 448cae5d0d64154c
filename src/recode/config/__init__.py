# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Recode configuration: layered TOML settings frozen into an immutable `Config`."""

from __future__ import annotations

from recode.config.model import ArgsLike, Config, MutableConfig

__all__ = [
    "ArgsLike",
    "Config",
    "MutableConfig",
]
