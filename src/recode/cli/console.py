# topmark:header:start
#
#   project      : Recode
#   file         : console.py
#   file_relpath : src/recode/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Console abstraction for user-facing program output.

This module provides a `ClickConsole` class that separates CLI output from
internal logging. Standard output carries only the rendered block, so that it
can be piped; everything else (diagnostics, diffs, errors) goes to stderr.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TextIO, TypedDict

import click

from recode.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from recode.core.diagnostics import Diagnostic


# This TypedDict is for documentation and type-checking on the *caller* side.
class StyleKwargs(TypedDict, total=False):
    """Keyword arguments accepted by click.style()."""

    fg: str
    bg: str
    bold: bool
    dim: bool
    underline: bool


_LEVEL_STYLES: dict[DiagnosticLevel, StyleKwargs] = {
    DiagnosticLevel.INFO: {"fg": "blue"},
    DiagnosticLevel.WARNING: {"fg": "yellow"},
    DiagnosticLevel.ERROR: {"fg": "bright_red"},
}


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, enables ANSI color codes in the output.
            Otherwise, all output is plain text.
        out (TextIO | None): The text stream to use for standard output.
            Defaults to `sys.stdout`.
        err (TextIO | None): The text stream to use for error output.
            Defaults to `sys.stderr`.

    Attributes:
        enable_color (bool): Whether to emit ANSI color codes.
        out (TextIO): Stream for standard output.
        err (TextIO): Stream for error output.
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout.

        Args:
            text (str): Message text.
            nl (bool): If True, append a newline.
        """
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def note(self, text: str = "", *, nl: bool = True) -> None:
        """Write an informational message to stderr.

        Args:
            text (str): Message text.
            nl (bool): If True, append a newline.
        """
        click.echo(text, nl=nl, file=self.err, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr.

        Args:
            text (str): Error text.
            nl (bool): If True, append a newline.
        """
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def diagnostic(self, diagnostic: Diagnostic) -> None:
        """Write a diagnostic to stderr, prefixed and styled by its level."""
        prefix: str = self.styled(f"[{diagnostic.level.value}]", **_LEVEL_STYLES[diagnostic.level])
        click.echo(f"{prefix} {diagnostic.message}", file=self.err, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return a styled string using click.style.

        Args:
            text (str): Text to style.
            **style_kwargs (Any): Subset of keyword arguments supported by click.style.
                Expected keys are defined in the StyleKwargs TypedDict.

        Returns:
            str: The styled text (or plain text if color is disabled).
        """
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
