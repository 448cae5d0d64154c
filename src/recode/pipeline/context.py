# topmark:header:start
#
#   project      : Recode
#   file         : context.py
#   file_relpath : src/recode/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Processing context model for the Recode pipeline.

[`ProcessingContext`][recode.pipeline.context.ProcessingContext] carries the
configuration, per-axis status, diagnostics and intermediate results of one
run between the pipeline steps.

Sections:
    ProcessingStatus:
        Current status of every pipeline axis.

    FlowControl:
        Lets a step request early, graceful termination of the pipeline.

    ProcessingContext:
        The per-run state shared by the steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from recode.config.logging import get_logger
from recode.core.diagnostics import DiagnosticLog
from recode.pipeline.status import (
    Axis,
    FormatStatus,
    FsStatus,
    LabelStatus,
    PatchStatus,
    RenderStatus,
    ScanStatus,
    SpliceStatus,
    WriteStatus,
)
from recode.template.funcs import HELPER_FUNCS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from pathlib import Path

    from recode.config import Config
    from recode.config.logging import RecodeLogger
    from recode.core.labels import LabelPair
    from recode.core.splice import SpliceResult
    from recode.filetypes import FileType
    from recode.pipeline.contracts import Step
    from recode.pipeline.processors.base import CommentIndexer
    from recode.pipeline.processors.types import CommentMarker
    from recode.pipeline.steps.formatter import FormatResult
    from recode.template.render import RenderedBlock, RenderSpec

logger: RecodeLogger = get_logger(__name__)

__all__: list[str] = [
    "FlowControl",
    "ProcessingContext",
    "ProcessingStatus",
]


@dataclass
class ProcessingStatus:
    """Current status of every pipeline axis."""

    fs: FsStatus = FsStatus.PENDING
    scan: ScanStatus = ScanStatus.PENDING
    label: LabelStatus = LabelStatus.PENDING
    render: RenderStatus = RenderStatus.PENDING
    splice: SpliceStatus = SpliceStatus.PENDING
    patch: PatchStatus = PatchStatus.PENDING
    write: WriteStatus = WriteStatus.PENDING
    format: FormatStatus = FormatStatus.PENDING

    def get(self, axis: Axis) -> Any:
        """Return the status of ``axis``."""
        return getattr(self, axis.value)

    def to_dict(self) -> dict[str, str]:
        """Return a mapping of axis names to status labels."""
        return {axis.value: self.get(axis).value for axis in Axis}


@dataclass
class FlowControl:
    """Execution flow control for the current run."""

    halt: bool = False
    reason: str = ""
    at_step: str = ""


@dataclass
class ProcessingContext:
    r"""State of one Recode run as it flows through the pipeline.

    Attributes:
        path (Path): The source file to rewrite.
        label (str): The label whose markers delimit the region.
        config (Config): Effective configuration.
        render_spec (RenderSpec): Selected template and joining rule.
        input_lines (Iterable[str] | None): Input lines (terminators included or
            not); used when ``input_path`` is None.
        input_path (Path | None): Input file read by the renderer.
        funcs (Mapping[str, Callable[..., Any]]): Helper functions offered to the
            template.
        steps (list[Step]): Steps executed so far, in order.
        status (ProcessingStatus): Per-axis status.
        flow (FlowControl): Halt request, if any.
        file_type (FileType | None): Resolved file type of the source.
        indexer (CommentIndexer | None): Comment indexer for the file type.
        text (str | None): Decoded source text (BOM removed).
        leading_bom (bool): True if the source began with a UTF-8 BOM.
        newline_style (str): Dominant newline of the source (``"\\n"`` default).
        comments (list[CommentMarker]): Comments of the source in document order.
        pair (LabelPair | None): Located markers, None when missing.
        block (RenderedBlock | None): The rendered block.
        splice (SpliceResult | None): The splice outcome.
        diff (str | None): Unified diff of the splice, when requested.
        format_result (FormatResult | None): Outcome of the formatter run.
        diagnostics (DiagnosticLog): User-facing diagnostics.
    """

    path: Path
    label: str
    config: Config
    render_spec: RenderSpec
    input_lines: Iterable[str] | None = None
    input_path: Path | None = None
    funcs: Mapping[str, Callable[..., Any]] = field(default_factory=lambda: HELPER_FUNCS)

    steps: list[Step] = field(default_factory=lambda: [])
    status: ProcessingStatus = field(default_factory=ProcessingStatus)
    flow: FlowControl = field(default_factory=FlowControl)

    file_type: FileType | None = None
    indexer: CommentIndexer | None = None

    text: str | None = None
    leading_bom: bool = False
    newline_style: str = "\n"

    comments: list[CommentMarker] = field(default_factory=lambda: [])
    pair: LabelPair | None = None
    block: RenderedBlock | None = None
    splice: SpliceResult | None = None
    diff: str | None = None
    format_result: FormatResult | None = None

    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def is_halted(self) -> bool:
        """Return True if a step requested the pipeline to stop."""
        return self.flow.halt

    def request_halt(self, reason: str, at_step: Step) -> None:
        """Stop the pipeline after the current step.

        Args:
            reason (str): Short human-readable reason.
            at_step (Step): The step requesting the halt.
        """
        self.flow.halt = True
        self.flow.reason = reason
        self.flow.at_step = at_step.name
        logger.debug("Halt requested by %s: %s", at_step.name, reason)

    def info(self, message: str) -> None:
        """Add an ``info`` diagnostic."""
        self.diagnostics.add_info(message)

    def warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic."""
        self.diagnostics.add_warning(message)

    def error(self, message: str) -> None:
        """Add an ``error`` diagnostic."""
        self.diagnostics.add_error(message)

    @property
    def rendered_text(self) -> str:
        """Return the rendered block text (empty before rendering)."""
        return self.block.text if self.block is not None else ""

    @property
    def updated_text(self) -> str | None:
        """Return the spliced content, or None when nothing was spliced."""
        return self.splice.content if self.splice is not None else None

    @property
    def would_change(self) -> bool:
        """Return True if the splice altered the source content."""
        return self.status.splice == SpliceStatus.CHANGED

    def to_dict(self) -> dict[str, object]:
        """Return a compact summary for logging."""
        return {
            "path": str(self.path),
            "label": self.label,
            "file_type": self.file_type.name if self.file_type else None,
            "status": self.status.to_dict(),
            "halt": self.flow.halt,
            "halt_reason": self.flow.reason,
            "steps": [step.name for step in self.steps],
            "diagnostics": len(self.diagnostics),
        }
