# topmark:header:start
#
#   project      : Recode
#   file         : render.py
#   file_relpath : src/recode/template/render.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Render a template once per input line and join the results.

Two modes exist:

* row mode: outputs are joined with ``"\\n"`` (one output line per input line);
* column mode: outputs are joined with a separator (default ``","``) into a
  single line.

The mode is chosen by [`select_render_spec`][recode.template.render.select_render_spec]:
a non-empty row template wins, then a non-empty column template; with neither,
row mode with the identity template ``{{ . }}`` is used.

A line that fails to render contributes an empty string, so the number of
joined values always equals the number of input lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.constants import DEFAULT_COLUMN_SEPARATOR, IDENTITY_TEMPLATE, ROW_SEPARATOR
from recode.core.errors import TemplateExecError
from recode.template.exec import Template

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping
    from typing import Any

    from recode.config.logging import RecodeLogger
    from recode.core.diagnostics import DiagnosticLog

logger: RecodeLogger = get_logger(__name__)


class RenderMode(str, Enum):
    """How per-line outputs are joined."""

    ROW = "row"
    COLUMN = "col"


@dataclass(frozen=True)
class RenderSpec:
    """The template source and joining rule selected for a run."""

    mode: RenderMode
    source: str
    separator: str

    def compile(self, funcs: Mapping[str, Callable[..., Any]] | None = None) -> Template:
        """Compile the template source (named after the mode)."""
        return Template(self.mode.value, self.source, funcs)


def select_render_spec(
    row: str | None,
    col: str | None,
    sep: str | None = None,
) -> RenderSpec:
    """Select the render mode from the row/column templates.

    Args:
        row (str | None): Row-mode template; wins when non-empty.
        col (str | None): Column-mode template.
        sep (str | None): Column separator; None selects ``","``.

    Returns:
        RenderSpec: The selected mode, template source and separator.
    """
    if row:
        return RenderSpec(RenderMode.ROW, row, ROW_SEPARATOR)
    separator: str = DEFAULT_COLUMN_SEPARATOR if sep is None else sep
    if col:
        return RenderSpec(RenderMode.COLUMN, col, separator)
    return RenderSpec(RenderMode.ROW, IDENTITY_TEMPLATE, ROW_SEPARATOR)


def iter_input_lines(stream: Iterable[str]) -> Iterator[str]:
    """Yield the lines of ``stream`` without their ``\\n`` / ``\\r\\n`` terminators."""
    for raw in stream:
        line: str = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        yield line


@dataclass(frozen=True)
class LineError:
    """A line that failed to render."""

    index: int
    line: str
    message: str


@dataclass(frozen=True)
class RenderedBlock:
    """The joined per-line outputs of a render.

    Attributes:
        text (str): Outputs joined by the mode's separator.
        values (tuple[str, ...]): The per-line outputs (``""`` for failed lines).
        errors (tuple[LineError, ...]): The lines that failed to render.
    """

    text: str
    values: tuple[str, ...] = ()
    errors: tuple[LineError, ...] = field(default=())

    @property
    def line_count(self) -> int:
        """Return the number of input lines rendered."""
        return len(self.values)


def render_block(
    template: Template,
    spec: RenderSpec,
    lines: Iterable[str],
    diagnostics: DiagnosticLog | None = None,
) -> RenderedBlock:
    """Execute ``template`` once per line and join the outputs.

    Args:
        template (Template): The compiled template.
        spec (RenderSpec): Supplies the separator.
        lines (Iterable[str]): Input lines, terminators already stripped.
        diagnostics (DiagnosticLog | None): Receives a warning per failed line.

    Returns:
        RenderedBlock: The joined text with per-line values and errors.
    """
    values: list[str] = []
    errors: list[LineError] = []
    for index, line in enumerate(lines):
        try:
            values.append(template.execute(line))
        except TemplateExecError as exc:
            logger.error("line %d: %s", index + 1, exc)
            errors.append(LineError(index=index, line=line, message=str(exc)))
            if diagnostics is not None:
                diagnostics.add_warning(f"Input line {index + 1} failed to render: {exc}")
            values.append("")
    logger.debug("Rendered %d line(s) in %s mode", len(values), spec.mode.value)
    return RenderedBlock(
        text=spec.separator.join(values),
        values=tuple(values),
        errors=tuple(errors),
    )
