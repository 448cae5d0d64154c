# topmark:header:start
#
#   project      : Recode
#   file         : contracts.py
#   file_relpath : src/recode/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Type contracts for pipeline steps (engine-facing).

Steps are instantiated objects that are *callable*; the runner invokes them as
``step(ctx)`` where ``ctx`` is a `ProcessingContext`.

Lifecycle
---------
1) ``step.may_proceed(ctx)`` gates execution.
2) If allowed, ``step.run(ctx)`` mutates ``ctx`` in place.
3) Regardless, ``step.hint(ctx)`` may attach non-binding diagnostics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from recode.pipeline.context import ProcessingContext
    from recode.pipeline.status import Axis


class Step(Protocol):
    """Protocol for a single pipeline step.

    Implementations typically subclass
    [`BaseStep`][recode.pipeline.steps.base.BaseStep].
    """

    name: str
    axes_written: tuple[Axis, ...]

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Return whether the step should run given the current context."""
        ...

    def run(self, ctx: ProcessingContext) -> None:
        """Execute the step, mutating the context in place.

        Implementations must only write to the axes they declare in
        ``axes_written`` and must not raise for expected failures: these update
        the status axis and the diagnostics instead.
        """
        ...

    def hint(self, ctx: ProcessingContext) -> None:
        """Attach non-binding diagnostics to the context."""
        ...

    def __call__(self, ctx: ProcessingContext) -> ProcessingContext:
        """Run the step lifecycle: gate, run (optional), hint."""
        ...
