# topmark:header:start
#
#   project      : Recode
#   file         : reader.py
#   file_relpath : src/recode/pipeline/steps/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

r"""File reader step for the Recode pipeline.

Reads the source file as UTF-8 (strict), removes a leading BOM (remembered so
the writer can restore it) and detects the dominant newline convention (LF,
CRLF or CR). Line endings are preserved in ``ctx.text``: all offsets computed by
later steps refer to this exact text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from recode.config.logging import get_logger
from recode.pipeline.status import Axis, FsStatus
from recode.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext

logger: RecodeLogger = get_logger(__name__)

_RE_NEWLINE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


def newline_histogram(text: str) -> dict[str, int]:
    """Count the ``\\n``, ``\\r\\n`` and ``\\r`` line terminators of ``text``."""
    hist: dict[str, int] = {"\n": 0, "\r\n": 0, "\r": 0}
    for m in _RE_NEWLINE.finditer(text):
        hist[m.group(0)] += 1
    return hist


def dominant_newline(text: str) -> str:
    """Return the most frequent line terminator of ``text`` (``"\\n"`` if none)."""
    hist: dict[str, int] = newline_histogram(text)
    nl, count = max(hist.items(), key=lambda kv: kv[1])
    return nl if count > 0 else "\n"


class ReaderStep(BaseStep):
    """Load the source text and detect its newline style.

    Axes written:
      - fs

    Sets:
      - FsStatus: {OK, EMPTY, NOT_FOUND, NO_READ_PERMISSION, UNREADABLE,
                   UNICODE_DECODE_ERROR}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.FS,
            axes_written=(Axis.FS,),
        )

    def run(self, ctx: ProcessingContext) -> None:
        """Read ``ctx.path`` into ``ctx.text``.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        try:
            data: bytes = ctx.path.read_bytes()
        except FileNotFoundError as e:
            self._fail(ctx, FsStatus.NOT_FOUND, f"Source file not found: {ctx.path}", e)
            return
        except PermissionError as e:
            self._fail(ctx, FsStatus.NO_READ_PERMISSION, f"Permission denied: {ctx.path}", e)
            return
        except OSError as e:
            self._fail(ctx, FsStatus.UNREADABLE, f"Error reading file {ctx.path}: {e}", e)
            return

        try:
            text: str = data.decode("utf-8")
        except UnicodeDecodeError as e:
            self._fail(
                ctx,
                FsStatus.UNICODE_DECODE_ERROR,
                f"Source file {ctx.path} is not valid UTF-8: {e}",
                e,
            )
            return

        if text.startswith("\ufeff"):
            ctx.leading_bom = True
            text = text[1:]

        ctx.text = text
        ctx.newline_style = dominant_newline(text)
        ctx.status.fs = FsStatus.EMPTY if text == "" else FsStatus.OK
        logger.debug(
            "Read %s: %d chars, newline=%r, bom=%s",
            ctx.path,
            len(text),
            ctx.newline_style,
            ctx.leading_bom,
        )

    def _fail(
        self,
        ctx: ProcessingContext,
        status: FsStatus,
        message: str,
        exc: Exception,
    ) -> None:
        logger.error("%s (%s)", message, exc)
        ctx.status.fs = status
        ctx.error(message)
        ctx.request_halt(reason=status.value, at_step=self)

    def hint(self, ctx: ProcessingContext) -> None:
        """Note empty sources (nothing to splice into)."""
        if ctx.status.fs == FsStatus.EMPTY:
            ctx.info(f"Source file {ctx.path} is empty")
