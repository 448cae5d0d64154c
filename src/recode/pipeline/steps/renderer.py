# topmark:header:start
#
#   project      : Recode
#   file         : renderer.py
#   file_relpath : src/recode/pipeline/steps/renderer.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Renderer step: compile the template, then render it over the input lines.

The template is compiled before the input is opened, so a malformed template
never consumes input. Per-line execution failures are recoverable: the line
renders as an empty string and a warning diagnostic is recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.core.errors import TemplateSyntaxError
from recode.pipeline.status import Axis, RenderStatus
from recode.pipeline.steps.base import BaseStep
from recode.template.render import iter_input_lines, render_block

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.context import ProcessingContext
    from recode.template.exec import Template

logger: RecodeLogger = get_logger(__name__)


class RendererStep(BaseStep):
    """Render ``ctx.render_spec`` over the input into ``ctx.block``.

    Axes written:
      - render

    Sets:
      - RenderStatus: {RENDERED, RENDERED_WITH_ERRORS, TEMPLATE_ERROR,
                       INPUT_NOT_FOUND, INPUT_UNREADABLE}
    """

    def __init__(self) -> None:
        super().__init__(
            name=self.__class__.__name__,
            primary_axis=Axis.RENDER,
            axes_written=(Axis.RENDER,),
        )

    def run(self, ctx: ProcessingContext) -> None:
        """Compile and execute the template.

        Args:
            ctx (ProcessingContext): The processing context.
        """
        try:
            template: Template = ctx.render_spec.compile(ctx.funcs)
        except TemplateSyntaxError as e:
            logger.error("%s", e)
            self._fail(ctx, RenderStatus.TEMPLATE_ERROR, str(e))
            return

        if ctx.input_path is not None:
            try:
                with ctx.input_path.open("r", encoding="utf-8", newline="") as f:
                    ctx.block = render_block(
                        template, ctx.render_spec, iter_input_lines(f), ctx.diagnostics
                    )
            except FileNotFoundError as e:
                logger.error("Input file not found: %s", e)
                self._fail(
                    ctx, RenderStatus.INPUT_NOT_FOUND, f"Input file not found: {ctx.input_path}"
                )
                return
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Error reading input %s: %s", ctx.input_path, e)
                self._fail(
                    ctx, RenderStatus.INPUT_UNREADABLE, f"Error reading input {ctx.input_path}: {e}"
                )
                return
        else:
            ctx.block = render_block(
                template, ctx.render_spec, iter_input_lines(ctx.input_lines or ()), ctx.diagnostics
            )

        ctx.status.render = (
            RenderStatus.RENDERED_WITH_ERRORS if ctx.block.errors else RenderStatus.RENDERED
        )
        logger.debug("Rendered block (%d line(s)):\n%s", ctx.block.line_count, ctx.block.text)

    def _fail(self, ctx: ProcessingContext, status: RenderStatus, message: str) -> None:
        ctx.status.render = status
        ctx.block = None
        ctx.error(message)
        ctx.request_halt(reason=status.value, at_step=self)
