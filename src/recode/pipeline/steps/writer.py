# topmark:header:start
#
#   project      : Recode
#   file         : writer.py
#   file_relpath : src/recode/pipeline/steps/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Writer step for committing the spliced content to a sink.

Sinks
-----
- FileSystemSink: writes in place to the source path.
- NullSink: no-op (dry run).

The file is written as UTF-8 without newline translation (the spliced content
already uses the source's newline style); a BOM removed by the reader is
restored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from recode.config.logging import get_logger
from recode.pipeline.status import Axis, SpliceStatus, WriteStatus
from recode.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext

logger: RecodeLogger = get_logger(__name__)


@dataclass
class WriteResult:
    """Structured result of a write operation."""

    status: WriteStatus
    bytes_written: int = 0


class WriteSink(Protocol):
    """Protocol for write sinks used by the writer step."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Write ``ctx.updated_text`` to the target and report the outcome."""
        ...


class NullSink:
    """Dry-run sink: does not write anything."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """No-op write for dry-run mode."""
        return WriteResult(status=WriteStatus.SKIPPED, bytes_written=0)


class FileSystemSink:
    """Filesystem sink that writes in place to ``ctx.path``."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Write the spliced content in place to ``ctx.path``.

        Returns:
            WriteResult: ``WRITTEN`` with the number of UTF-8 bytes written, or
            ``SKIPPED`` when there is no spliced content.
        """
        text: str | None = ctx.updated_text
        if text is None:
            return WriteResult(status=WriteStatus.SKIPPED, bytes_written=0)
        if ctx.leading_bom:
            text = "\ufeff" + text
        with open(ctx.path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        bytes_written: int = len(text.encode("utf-8"))
        logger.debug("FileSystemSink: wrote %d bytes to file %s", bytes_written, ctx.path)
        return WriteResult(status=WriteStatus.WRITTEN, bytes_written=bytes_written)


def select_sink(ctx: ProcessingContext) -> WriteSink:
    """Return ``NullSink`` for a dry run, otherwise ``FileSystemSink``."""
    if not ctx.config.apply_changes:
        logger.debug("Selected NULL sink (ctx.config.apply_changes is False)")
        return NullSink()
    return FileSystemSink()


class WriterStep(BaseStep):
    """Write the spliced content back to the source file.

    Axes written:
      - write

    Sets:
      - WriteStatus: {WRITTEN, UNCHANGED, SKIPPED, FAILED}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.WRITE,
            axes_written=(Axis.WRITE,),
        )

    def run(self, ctx: ProcessingContext) -> None:
        """Commit ``ctx.updated_text`` through the selected sink.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        if ctx.status.splice == SpliceStatus.UNCHANGED:
            ctx.status.write = WriteStatus.UNCHANGED
            return
        if ctx.status.splice != SpliceStatus.CHANGED:
            ctx.status.write = WriteStatus.SKIPPED
            return

        sink: WriteSink = select_sink(ctx)
        try:
            result: WriteResult = sink.write(ctx=ctx)
        except OSError as e:
            logger.error("Error writing %s: %s", ctx.path, e)
            ctx.status.write = WriteStatus.FAILED
            ctx.error(f"Error writing {ctx.path}: {e}")
            ctx.request_halt(reason=WriteStatus.FAILED.value, at_step=self)
            return
        ctx.status.write = result.status

    def hint(self, ctx: ProcessingContext) -> None:
        """Note a dry run that would have changed the file."""
        if ctx.status.write == WriteStatus.SKIPPED and ctx.would_change:
            ctx.info(f"Dry run: {ctx.path} would be updated")
