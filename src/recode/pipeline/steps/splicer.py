# topmark:header:start
#
#   project      : Recode
#   file         : splicer.py
#   file_relpath : src/recode/pipeline/steps/splicer.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Splicer step: replace the marked region with the rendered block (in memory)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.core.splice import splice
from recode.pipeline.status import Axis, LabelStatus, SpliceStatus
from recode.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext

logger: RecodeLogger = get_logger(__name__)


class SplicerStep(BaseStep):
    """Compute the updated source content into ``ctx.splice``.

    Axes written:
      - splice

    Sets:
      - SpliceStatus: {CHANGED, UNCHANGED, SKIPPED}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.SPLICE,
            axes_written=(Axis.SPLICE,),
        )

    def run(self, ctx: ProcessingContext) -> None:
        """Splice ``ctx.block`` between the markers of ``ctx.pair``.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        if ctx.status.label != LabelStatus.FOUND or ctx.pair is None:
            ctx.status.splice = SpliceStatus.SKIPPED
            return
        assert ctx.text is not None, "ctx.text not set by the reader"
        assert ctx.block is not None, "ctx.block not set by the renderer"

        ctx.splice = splice(ctx.text, ctx.pair, ctx.block.text, ctx.newline_style)
        ctx.status.splice = SpliceStatus.CHANGED if ctx.splice.changed else SpliceStatus.UNCHANGED
        logger.debug(
            "Splice for label '%s' in %s: %s", ctx.label, ctx.path, ctx.status.splice.value
        )
