# topmark:header:start
#
#   project      : Recode
#   file         : patcher.py
#   file_relpath : src/recode/pipeline/steps/patcher.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Patch (diff) generation step for the Recode pipeline.

Compares the original source text with the spliced content and produces a
unified diff in ``ctx.diff``. Performs no I/O: the CLI decides how to display
the diff.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.pipeline.status import Axis, PatchStatus, SpliceStatus
from recode.pipeline.steps.base import BaseStep
from recode.utils.diff import render_patch

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext

logger: RecodeLogger = get_logger(__name__)


class PatcherStep(BaseStep):
    """Generate a unified diff of the splice.

    Axes written:
      - patch

    Sets:
      - PatchStatus: {GENERATED, SKIPPED}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.PATCH,
            axes_written=(Axis.PATCH,),
        )

    def run(self, ctx: ProcessingContext) -> None:
        """Attach the diff to ``ctx.diff`` when the splice changed the source.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        if ctx.status.splice != SpliceStatus.CHANGED or ctx.splice is None:
            ctx.diff = None
            ctx.status.patch = PatchStatus.SKIPPED
            return
        assert ctx.text is not None, "ctx.text not set by the reader"

        current_lines: list[str] = ctx.text.splitlines(keepends=True)
        updated_lines: list[str] = ctx.splice.content.splitlines(keepends=True)
        patch_lines: list[str] = list(
            difflib.unified_diff(
                current_lines,
                updated_lines,
                fromfile=f"{ctx.path} (current)",
                tofile=f"{ctx.path} (updated)",
                n=3,
                lineterm=ctx.newline_style,
            )
        )
        logger.trace("Patch (rendered):\n%s", render_patch(patch_lines))

        # Join exactly as produced by difflib; no newline conversion
        ctx.diff = "".join(patch_lines)
        ctx.status.patch = PatchStatus.GENERATED
