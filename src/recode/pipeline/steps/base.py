# topmark:header:start
#
#   project      : Recode
#   file         : base.py
#   file_relpath : src/recode/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Base class for class-based pipeline steps.

The runner invokes steps as *callables*. `BaseStep` implements the common
lifecycle:

    ctx = step(ctx)  # internally: may_proceed → run? → hint
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recode.config.logging import get_logger

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext
    from recode.pipeline.status import Axis

logger: RecodeLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Subclasses override ``may_proceed()``, ``run()`` and optionally ``hint()``.

    Attributes:
        name (str): Stable step identifier for logs.
        primary_axis (Axis | None): The axis this step represents in summaries.
        axes_written (tuple[Axis, ...]): Status axes this step is allowed to write.
    """

    name: str
    primary_axis: Axis | None
    axes_written: tuple[Axis, ...] = ()

    def __call__(self, ctx: ProcessingContext) -> ProcessingContext:
        """Invoke the step lifecycle: gate → run (if allowed) → hint.

        Args:
            ctx (ProcessingContext): The mutable processing context.

        Returns:
            ProcessingContext: The same context instance after mutation.
        """
        ctx.steps.append(self)

        if self.may_proceed(ctx):
            logger.info("Pipeline step %s - running", self.name)
            self.run(ctx)
            if ctx.flow.halt is True:
                logger.info("Pipeline halted by %s: %s", ctx.flow.at_step, ctx.flow.reason)
        else:
            logger.info("Pipeline step %s may not proceed", self.name)

        self.hint(ctx)
        return ctx

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Return whether the step should run; default: unless the pipeline is halted."""
        return not ctx.is_halted

    def run(self, ctx: ProcessingContext) -> None:
        """Perform the step's primary work, mutating ``ctx`` in place."""
        pass

    def hint(self, ctx: ProcessingContext) -> None:
        """Attach non-binding diagnostics to ``ctx`` (optional)."""
        pass
