# topmark:header:start
#
#   project      : Recode
#   file         : errors.py
#   file_relpath : src/recode/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Exceptions for the Recode CLI.

Usage:
    Raise these exceptions in the CLI to signal errors with standardized
    messages and exit codes (see [`ExitCode`][recode.core.exit_codes.ExitCode]).

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from recode.core.exit_codes import ExitCode


class RecodeCliError(click.ClickException):
    """Base class for all Recode CLI errors."""

    exit_code = ExitCode.FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.ctx: click.Context | None = click.get_current_context(silent=True)

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        if self.ctx is not None and isinstance(self.ctx.obj, dict):
            console = self.ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class RecodeUsageError(RecodeCliError):
    """Error for command-line invocation errors (missing or invalid flags)."""

    exit_code = ExitCode.USAGE_ERROR

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Print the command usage line before the message."""
        if self.ctx is not None:
            click.echo(self.ctx.get_usage(), file=file, err=True)
        super().show(file)


class RecodeConfigError(RecodeCliError):
    """Error for configuration errors (unreadable or malformed config file)."""

    exit_code = ExitCode.CONFIG_ERROR


class RecodeFileNotFoundError(RecodeCliError):
    """Error when the source or input file does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class RecodePermissionDeniedError(RecodeCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class RecodeIOError(RecodeCliError):
    """Error for I/O errors reading or writing files."""

    exit_code = ExitCode.IO_ERROR


class RecodeEncodingError(RecodeCliError):
    """Error for text decoding errors (the source is not valid UTF-8)."""

    exit_code = ExitCode.ENCODING_ERROR


class RecodeSyntaxError(RecodeCliError):
    """Error when the source file cannot be tokenized."""

    exit_code = ExitCode.SYNTAX_ERROR


class RecodeTemplateError(RecodeCliError):
    """Error when the row or column template fails to compile."""

    exit_code = ExitCode.TEMPLATE_ERROR


class RecodeUnsupportedFileTypeError(RecodeCliError):
    """Error for source files without a comment indexer."""

    exit_code = ExitCode.UNSUPPORTED_FILE_TYPE


class RecodePipelineError(RecodeCliError):
    """Error for internal pipeline failures (step contract violation)."""

    exit_code = ExitCode.PIPELINE_ERROR
