# topmark:header:start
#
#   project      : Recode
#   file         : diagnostics.py
#   file_relpath : src/recode/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Core diagnostic types and helpers for Recode.

Diagnostics are the user-facing record of what happened during a run (a line
that failed to render, a label that was not found, a formatter that failed).
They are collected on the processing context and printed by the CLI; internal
details go to the logger instead.

Sections:
    * DiagnosticLevel: severity levels (styled by the CLI console).
    * Diagnostic: immutable structured diagnostic payload (level + message).
    * DiagnosticLog: mutable per-run collection with helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from recode.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from recode.config.logging import RecodeLogger


logger: RecodeLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during processing.

    Levels are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str


@dataclass
class DiagnosticLog:
    """Mutable, per-run collection of diagnostics."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic to the log."""
        self._add(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic to the log."""
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic to the log."""
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))
