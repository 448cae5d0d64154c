# topmark:header:start
#
#   project      : Recode
#   file         : options.py
#   file_relpath : src/recode/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Common CLI option utilities for the Recode command.

This module centralizes reusable options (verbosity, color) and their
resolution logic, so the command itself stays thin. The helpers here are
Click-aware.

Go-style single dash flags (``-src``) are declared alongside GNU-style ones
(``--src``); Click treats a multi-character option with a single dash prefix
as a long option.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from recode.cli.errors import RecodeUsageError
from recode.config.logging import TRACE_LEVEL, get_logger

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output level from the verbose and quiet counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        The level as a standard logging level integer.

    Raises:
        RecodeUsageError: If both verbose and quiet flags are used simultaneously.

    Behavior:
        Three or more -v flags select TRACE, two DEBUG, one INFO.
        One or more -q flags select ERROR.
        Default is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise RecodeUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO

    if quiet_count >= 1:  # -q
        return logging.ERROR

    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase program output (info notes, then per-step statuses).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stream_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode: Explicit color mode from CLI options (auto, always, never).
        stream_isatty: Whether stderr is a TTY; if None, auto-detected.

    Returns:
        True if color output should be enabled, False otherwise.

    Behavior:
        Honors --color and --no-color CLI flags.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stderr is a TTY (colored output never
        goes to stdout, which carries the rendered block).
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stream_isatty is None:
        try:
            stream_isatty = sys.stderr.isatty()
        except (AttributeError, ValueError):
            stream_isatty = False
    return bool(stream_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with color options added.
    """
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def render_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the source, label, input and template options.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function.
    """
    f = click.option(
        "-sep",
        "--sep",
        "sep",
        type=str,
        default=None,
        help="Column-mode output separator (default ',').",
    )(f)
    f = click.option(
        "-col",
        "--col",
        "col",
        type=str,
        default="",
        help="Column-mode template: one value per input line, joined by the separator.",
    )(f)
    f = click.option(
        "-row",
        "--row",
        "row",
        type=str,
        default="",
        help="Row-mode template: one output line per input line.",
    )(f)
    f = click.option(
        "-input",
        "--input",
        "input_file",
        type=str,  # Ensure '-' passes through untouched
        default="",
        help="Line-oriented input file (empty or '-' reads STDIN).",
    )(f)
    f = click.option(
        "-label",
        "--label",
        "label",
        type=str,
        default="",
        help="Label name; the region lies between '<LABEL>-BEGIN' and '<LABEL>-END' comments.",
    )(f)
    f = click.option(
        "-src",
        "--src",
        "src",
        type=str,
        default="",
        help="Source file to modify (default: $GOFILE).",
    )(f)
    return f


def apply_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the write, diff, formatter and config options.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function.
    """
    f = click.option(
        "--config",
        "config_files",
        type=click.Path(dir_okay=False, path_type=str),
        multiple=True,
        help="Additional TOML config file (recode.toml or pyproject.toml); repeatable.",
    )(f)
    f = click.option(
        "--formatter",
        "formatter",
        type=str,
        default=None,
        help="Formatter command line overriding the per file type default.",
    )(f)
    f = click.option(
        "--no-format",
        "no_format",
        is_flag=True,
        help="Do not run the formatter after writing.",
    )(f)
    f = click.option(
        "--diff",
        "diff",
        is_flag=True,
        help="Print a unified diff of the splice to stderr.",
    )(f)
    f = click.option(
        "--dry-run",
        "dry_run",
        is_flag=True,
        help="Render and splice in memory only; do not write or format.",
    )(f)
    return f
