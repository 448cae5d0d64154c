# topmark:header:start
#
#   project      : Recode
#   file         : runner.py
#   file_relpath : src/recode/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Run a Recode pipeline over a processing context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recode.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext
    from recode.pipeline.contracts import Step

logger: RecodeLogger = get_logger(__name__)


def run(ctx: ProcessingContext, steps: Sequence[Step]) -> ProcessingContext:
    """Execute the pipeline sequentially.

    Every step is invoked; steps gate themselves on the context (a halted
    pipeline makes the remaining steps skip their work).

    Args:
        ctx (ProcessingContext): Mutable processing context.
        steps (Sequence[Step]): Ordered sequence of pipeline steps.

    Returns:
        ProcessingContext: The final processing context after all steps have run.
    """
    logger.info("Running %d step(s) on %s (label '%s')", len(steps), ctx.path, ctx.label)
    for step in steps:
        ctx = step(ctx)
    logger.debug("ProcessingContext after run: %s", ctx.to_dict())
    return ctx
