# topmark:header:start
#
#   project      : Recode
#   file         : scanner.py
#   file_relpath : src/recode/pipeline/steps/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Scanner step: index the comments of the source and locate the label markers.

The comment indexer is chosen from the source's file type. A source that fails
to tokenize halts the pipeline (nothing is written). A label whose markers are
missing or out of order is *not* an error: the block is still rendered and
printed, but nothing is spliced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.core.errors import SourceSyntaxError
from recode.core.labels import begin_marker, end_marker, find_label_pair
from recode.filetypes import resolve_file_type
from recode.pipeline.processors import get_indexer_for_file
from recode.pipeline.status import Axis, FsStatus, LabelStatus, ScanStatus
from recode.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext

logger: RecodeLogger = get_logger(__name__)


class ScannerStep(BaseStep):
    """Index comments and find the BEGIN/END pair of ``ctx.label``.

    Axes written:
      - scan
      - label

    Sets:
      - ScanStatus: {OK, UNSUPPORTED, SYNTAX_ERROR}
      - LabelStatus: {FOUND, MISSING}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.LABEL,
            axes_written=(Axis.SCAN, Axis.LABEL),
        )

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Run once the source text is available."""
        return not ctx.is_halted and ctx.status.fs in {FsStatus.OK, FsStatus.EMPTY}

    def run(self, ctx: ProcessingContext) -> None:
        """Populate ``ctx.comments`` and ``ctx.pair``.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        assert ctx.text is not None, "ctx.text not set by the reader"

        ctx.file_type = resolve_file_type(ctx.path)
        ctx.indexer = get_indexer_for_file(ctx.path)
        if ctx.indexer is None:
            ctx.status.scan = ScanStatus.UNSUPPORTED
            reason: str = f"No comment indexer for {ctx.path} (unsupported file type)"
            ctx.error(reason)
            ctx.request_halt(reason=ScanStatus.UNSUPPORTED.value, at_step=self)
            return

        try:
            ctx.comments = ctx.indexer.index(ctx.text, path=str(ctx.path))
        except SourceSyntaxError as e:
            logger.error("%s", e)
            ctx.status.scan = ScanStatus.SYNTAX_ERROR
            ctx.error(str(e))
            ctx.request_halt(reason=ScanStatus.SYNTAX_ERROR.value, at_step=self)
            return

        ctx.status.scan = ScanStatus.OK
        logger.debug("Indexed %d comment(s) in %s", len(ctx.comments), ctx.path)

        ctx.pair = find_label_pair(ctx.label, ctx.comments)
        ctx.status.label = LabelStatus.FOUND if ctx.pair is not None else LabelStatus.MISSING

    def hint(self, ctx: ProcessingContext) -> None:
        """Explain a missing label; the run still succeeds."""
        if ctx.status.label == LabelStatus.MISSING:
            ctx.info(
                f"No '{begin_marker(ctx.label)}' ... '{end_marker(ctx.label)}' comment pair "
                f"in {ctx.path}: file left unchanged"
            )
