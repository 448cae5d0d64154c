# topmark:header:start
#
#   project      : Recode
#   file         : errors.py
#   file_relpath : src/recode/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Domain exceptions raised by the Recode engine.

These exceptions are CLI-agnostic. The CLI layer maps them onto
[`ExitCode`][recode.core.exit_codes.ExitCode] values (see
`recode.cli.errors`).
"""

from __future__ import annotations


class RecodeError(Exception):
    """Base class for all Recode engine errors."""


class SourceSyntaxError(RecodeError):
    """The source file could not be tokenized into comments.

    Attributes:
        path (str): Display name of the offending source.
        line (int): 1-based line number of the error.
        column (int): 1-based column number of the error.
        reason (str): Human-readable description.
    """

    def __init__(self, path: str, line: int, column: int, reason: str) -> None:
        self.path = path
        self.line = line
        self.column = column
        self.reason = reason
        super().__init__(f"{path}:{line}:{column}: {reason}")


class TemplateError(RecodeError):
    """Base class for template compilation and execution errors."""


class TemplateSyntaxError(TemplateError):
    """A template failed to compile.

    Attributes:
        name (str): Template name (``row`` or ``col``).
        line (int): 1-based line of the template where parsing failed.
        reason (str): Human-readable description.
    """

    def __init__(self, name: str, line: int, reason: str) -> None:
        self.name = name
        self.line = line
        self.reason = reason
        super().__init__(f"template: {name}:{line}: {reason}")


class TemplateExecError(TemplateError):
    """A compiled template failed while executing against one value."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"template: {name}: {reason}")


class ConfigError(RecodeError):
    """A configuration file could not be read or parsed."""
