# topmark:header:start
#
#   project      : Recode
#   file         : formatter.py
#   file_relpath : src/recode/pipeline/steps/formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Formatter step: run an external formatter on the rewritten source.

Formatting is best-effort post-processing. Its outcome is returned as a
[`FormatResult`][recode.pipeline.steps.formatter.FormatResult] and stored on
the context; a failure is recorded as a warning and never halts the pipeline.

The command comes from the configuration (``--formatter``, ``[formatters]``) or
the file type default (``goimports -w`` for Go); the file path is appended as
the last argument.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.pipeline.status import Axis, FormatStatus, WriteStatus
from recode.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext

logger: RecodeLogger = get_logger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Outcome of a formatter run.

    Attributes:
        status (FormatStatus): FORMATTED, FAILED, NOT_FOUND or SKIPPED.
        command (tuple[str, ...]): The full argv that was run (empty if skipped).
        returncode (int | None): Exit status of the formatter, if it ran.
        output (str): Captured stderr (or stdout) of the formatter.
    """

    status: FormatStatus
    command: tuple[str, ...] = ()
    returncode: int | None = None
    output: str = ""

    @property
    def ok(self) -> bool:
        """Return True unless the formatter was attempted and did not succeed."""
        return self.status in {FormatStatus.FORMATTED, FormatStatus.SKIPPED}


def run_formatter(command: Sequence[str], path: Path) -> FormatResult:
    """Run ``command`` with ``path`` appended.

    Args:
        command (Sequence[str]): Formatter argv without the file; empty to skip.
        path (Path): The file to format in place.

    Returns:
        FormatResult: The outcome; never raises for a missing or failing formatter.
    """
    if not command:
        return FormatResult(status=FormatStatus.SKIPPED)
    argv: tuple[str, ...] = (*command, str(path))
    logger.debug("Running formatter: %s", argv)
    try:
        proc: subprocess.CompletedProcess[str] = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        logger.warning("Formatter %r not found: %s", command[0], e)
        return FormatResult(status=FormatStatus.NOT_FOUND, command=argv, output=str(e))
    except OSError as e:
        logger.warning("Formatter %r could not be started: %s", command[0], e)
        return FormatResult(status=FormatStatus.FAILED, command=argv, output=str(e))

    output: str = (proc.stderr or proc.stdout or "").strip()
    if proc.returncode != 0:
        logger.warning("Formatter %s exited with %d: %s", argv, proc.returncode, output)
        return FormatResult(
            status=FormatStatus.FAILED,
            command=argv,
            returncode=proc.returncode,
            output=output,
        )
    return FormatResult(
        status=FormatStatus.FORMATTED,
        command=argv,
        returncode=proc.returncode,
        output=output,
    )


class FormatterStep(BaseStep):
    """Run the configured formatter after the source has been (re)written.

    Axes written:
      - format

    Sets:
      - FormatStatus: {FORMATTED, FAILED, NOT_FOUND, SKIPPED}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.FORMAT,
            axes_written=(Axis.FORMAT,),
        )

    def run(self, ctx: ProcessingContext) -> None:
        """Format ``ctx.path`` in place when it holds a spliced region.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        if not ctx.config.apply_changes or ctx.status.write not in {
            WriteStatus.WRITTEN,
            WriteStatus.UNCHANGED,
        }:
            ctx.format_result = FormatResult(status=FormatStatus.SKIPPED)
        else:
            ctx.format_result = run_formatter(ctx.config.formatter_for(ctx.file_type), ctx.path)
        ctx.status.format = ctx.format_result.status

    def hint(self, ctx: ProcessingContext) -> None:
        """Report formatter failures as warnings."""
        result: FormatResult | None = ctx.format_result
        if result is None or result.ok:
            return
        command: str = " ".join(result.command)
        if result.status == FormatStatus.NOT_FOUND:
            ctx.warning(f"Formatter not found: {command}")
        else:
            detail: str = f": {result.output}" if result.output else ""
            ctx.warning(f"Formatter failed ({command}){detail}")
