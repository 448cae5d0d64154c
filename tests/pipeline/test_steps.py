# topmark:header:start
#
#   project      : Recode
#   file         : test_steps.py
#   file_relpath : tests/pipeline/test_steps.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Pipeline steps, run individually and as named pipelines."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from recode.core.diagnostics import DiagnosticLevel
from recode.pipeline.pipelines import Pipeline
from recode.pipeline.runner import run
from recode.pipeline.status import (
    FormatStatus,
    FsStatus,
    LabelStatus,
    PatchStatus,
    RenderStatus,
    ScanStatus,
    SpliceStatus,
    WriteStatus,
)
from recode.pipeline.steps.reader import ReaderStep, dominant_newline
from recode.pipeline.steps.renderer import RendererStep
from recode.template.funcs import HELPER_FUNCS
from tests.conftest import GO_SOURCE
from tests.pipeline.conftest import make_context

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from recode.pipeline.context import ProcessingContext

EXPECTED_GO: str = """package kinds

// KINDS-BEGIN
item: a
item: b
// KINDS-END

func main() {}
"""


def _errors(ctx: ProcessingContext) -> list[str]:
    return [d.message for d in ctx.diagnostics if d.level == DiagnosticLevel.ERROR]


def _go_file(tmp_path: Path, text: str = GO_SOURCE) -> Path:
    path: Path = tmp_path / "kinds.go"
    path.write_text(text, encoding="utf-8", newline="")
    return path


# --- reader ---


def test_dominant_newline() -> None:
    assert dominant_newline("a\r\nb\r\nc\n") == "\r\n"
    assert dominant_newline("no newline") == "\n"
    assert dominant_newline("a\rb\r") == "\r"


def test_reader_strips_and_remembers_bom(tmp_path: Path) -> None:
    path: Path = tmp_path / "a.go"
    path.write_bytes(b"\xef\xbb\xbfpackage a\r\n")
    ctx = ReaderStep()(make_context(path))
    assert ctx.status.fs == FsStatus.OK
    assert ctx.leading_bom is True
    assert ctx.text == "package a\r\n"
    assert ctx.newline_style == "\r\n"


def test_reader_missing_file_halts(tmp_path: Path) -> None:
    ctx = ReaderStep()(make_context(tmp_path / "nope.go"))
    assert ctx.status.fs == FsStatus.NOT_FOUND
    assert ctx.is_halted
    assert ctx.flow.at_step == "ReaderStep"
    assert _errors(ctx) == [f"Source file not found: {tmp_path / 'nope.go'}"]


def test_reader_rejects_invalid_utf8(tmp_path: Path) -> None:
    path: Path = tmp_path / "bad.go"
    path.write_bytes(b"package \xff\n")
    ctx = ReaderStep()(make_context(path))
    assert ctx.status.fs == FsStatus.UNICODE_DECODE_ERROR
    assert ctx.is_halted


def test_reader_empty_file_is_noted(tmp_path: Path) -> None:
    path: Path = tmp_path / "empty.go"
    path.write_text("", encoding="utf-8")
    ctx = ReaderStep()(make_context(path))
    assert ctx.status.fs == FsStatus.EMPTY
    assert not ctx.is_halted
    assert [d.level for d in ctx.diagnostics] == [DiagnosticLevel.INFO]


# --- scanner ---


def test_scanner_finds_the_pair(tmp_path: Path) -> None:
    ctx = run(make_context(_go_file(tmp_path)), Pipeline.SCAN.steps)
    assert ctx.status.scan == ScanStatus.OK
    assert ctx.status.label == LabelStatus.FOUND
    assert ctx.pair is not None
    assert ctx.file_type is not None and ctx.file_type.name == "go"


def test_scanner_unsupported_file_type_halts(tmp_path: Path) -> None:
    path: Path = tmp_path / "notes.txt"
    path.write_text("// KINDS-BEGIN\n// KINDS-END\n", encoding="utf-8")
    ctx = run(make_context(path), Pipeline.SCAN.steps)
    assert ctx.status.scan == ScanStatus.UNSUPPORTED
    assert ctx.is_halted
    assert "unsupported file type" in _errors(ctx)[0]


def test_scanner_syntax_error_halts(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path, 'package a\n\nvar s = "open\n// KINDS-BEGIN\n// KINDS-END\n')
    ctx = run(make_context(path), Pipeline.SCAN.steps)
    assert ctx.status.scan == ScanStatus.SYNTAX_ERROR
    assert ctx.status.label == LabelStatus.PENDING
    assert "kinds.go:" in _errors(ctx)[0]
    assert "syntax error" in _errors(ctx)[0]


def test_apply_refuses_to_rewrite_unparsable_go(tmp_path: Path) -> None:
    # Every literal and comment is terminated, but the parameter list is not.
    source: str = "package main\nfunc main( {\n// KINDS-BEGIN\n// KINDS-END\n"
    path: Path = _go_file(tmp_path, source)
    ctx = run(
        make_context(path, row="x{{ . }}", lines=["a"], run_formatter=False),
        Pipeline.APPLY.steps,
    )
    assert ctx.status.scan == ScanStatus.SYNTAX_ERROR
    assert ctx.status.write == WriteStatus.PENDING
    assert ctx.is_halted
    assert path.read_text(encoding="utf-8") == source


def test_context_defaults_to_helper_funcs(tmp_path: Path) -> None:
    ctx: ProcessingContext = make_context(tmp_path / "a.go")
    funcs_field = next(f for f in dataclasses.fields(ctx) if f.name == "funcs")

    assert funcs_field.default is dataclasses.MISSING
    assert ctx.funcs is HELPER_FUNCS


def test_scanner_missing_label_is_informational(tmp_path: Path) -> None:
    ctx = run(make_context(_go_file(tmp_path), "OTHER"), Pipeline.SCAN.steps)
    assert ctx.status.label == LabelStatus.MISSING
    assert not ctx.is_halted
    infos: list[str] = [d.message for d in ctx.diagnostics]
    assert "'OTHER-BEGIN' ... 'OTHER-END'" in infos[0]


# --- renderer ---


def test_renderer_template_error_halts(tmp_path: Path) -> None:
    ctx = RendererStep()(make_context(tmp_path / "a.go", row="{{ nope . }}", lines=["a"]))
    assert ctx.status.render == RenderStatus.TEMPLATE_ERROR
    assert ctx.block is None
    assert ctx.is_halted
    assert _errors(ctx) == ['template: row:1: function "nope" not defined']


def test_renderer_template_error_does_not_consume_input(tmp_path: Path) -> None:
    consumed: list[str] = []

    def lines() -> Iterator[str]:
        consumed.append("read")
        yield "a"

    RendererStep()(make_context(tmp_path / "a.go", col="{{ else }}", lines=lines()))
    assert consumed == []


def test_renderer_reads_input_file(tmp_path: Path) -> None:
    input_path: Path = tmp_path / "kinds.txt"
    input_path.write_text("a\r\nb\n", encoding="utf-8", newline="")
    ctx = RendererStep()(make_context(tmp_path / "a.go", row="<{{ . }}>", input_path=input_path))
    assert ctx.status.render == RenderStatus.RENDERED
    assert ctx.rendered_text == "<a>\n<b>"


def test_renderer_missing_input_halts(tmp_path: Path) -> None:
    ctx = RendererStep()(make_context(tmp_path / "a.go", input_path=tmp_path / "missing.txt"))
    assert ctx.status.render == RenderStatus.INPUT_NOT_FOUND
    assert ctx.is_halted


def test_renderer_line_failures_are_recoverable(tmp_path: Path) -> None:
    ctx = RendererStep()(
        make_context(tmp_path / "a.go", col="{{ index (split . \"=\") 1 }}", lines=["k=v", "x"])
    )
    assert ctx.status.render == RenderStatus.RENDERED_WITH_ERRORS
    assert ctx.rendered_text == "v,"
    assert not ctx.is_halted


# --- splice, write, patch, format ---


def test_render_pipeline_splices_in_memory(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path)
    ctx = run(make_context(path, row="item: {{ . }}", lines=["a", "b"]), Pipeline.RENDER.steps)
    assert ctx.status.splice == SpliceStatus.CHANGED
    assert ctx.updated_text == EXPECTED_GO
    assert path.read_text(encoding="utf-8") == GO_SOURCE


def test_apply_writes_and_second_run_is_unchanged(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path)
    first = run(
        make_context(path, row="item: {{ . }}", lines=["a", "b"], run_formatter=False),
        Pipeline.APPLY.steps,
    )
    assert first.status.write == WriteStatus.WRITTEN
    assert first.status.format == FormatStatus.SKIPPED
    assert path.read_text(encoding="utf-8") == EXPECTED_GO

    second = run(
        make_context(path, row="item: {{ . }}", lines=["a", "b"], run_formatter=False),
        Pipeline.APPLY.steps,
    )
    assert second.status.splice == SpliceStatus.UNCHANGED
    assert second.status.write == WriteStatus.UNCHANGED


def test_apply_preserves_bom_and_crlf(tmp_path: Path) -> None:
    path: Path = tmp_path / "k.go"
    path.write_bytes(b"\xef\xbb\xbf// KINDS-BEGIN\r\n// KINDS-END\r\n")
    run(
        make_context(path, row="{{ . }}", lines=["a", "b"], run_formatter=False),
        Pipeline.APPLY.steps,
    )
    assert path.read_bytes() == b"\xef\xbb\xbf// KINDS-BEGIN\r\na\r\nb\r\n// KINDS-END\r\n"


def test_dry_run_leaves_file_untouched(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path)
    ctx = run(
        make_context(path, row="item: {{ . }}", lines=["a", "b"], apply_changes=False),
        Pipeline.APPLY.steps,
    )
    assert ctx.status.write == WriteStatus.SKIPPED
    assert ctx.status.format == FormatStatus.SKIPPED
    assert ctx.rendered_text == "item: a\nitem: b"
    assert path.read_text(encoding="utf-8") == GO_SOURCE
    assert any("would be updated" in d.message for d in ctx.diagnostics)


def test_missing_label_renders_but_does_not_write(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path)
    ctx = run(
        make_context(path, "NOPE", row="{{ . }}", lines=["a"], run_formatter=False),
        Pipeline.APPLY.steps,
    )
    assert ctx.rendered_text == "a"
    assert ctx.status.splice == SpliceStatus.SKIPPED
    assert ctx.status.write == WriteStatus.SKIPPED
    assert path.read_text(encoding="utf-8") == GO_SOURCE


def test_patcher_produces_unified_diff(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path)
    ctx = run(
        make_context(path, row="item: {{ . }}", lines=["a"], apply_changes=False),
        Pipeline.APPLY_PATCH.steps,
    )
    assert ctx.status.patch == PatchStatus.GENERATED
    assert ctx.diff is not None
    assert "+item: a\n" in ctx.diff
    assert f"--- {path} (current)" in ctx.diff


def test_patcher_skips_unchanged(tmp_path: Path) -> None:
    path: Path = _go_file(tmp_path)
    ctx = run(make_context(path, lines=[], apply_changes=False), Pipeline.APPLY_PATCH.steps)
    assert ctx.status.splice == SpliceStatus.UNCHANGED
    assert ctx.status.patch == PatchStatus.SKIPPED
    assert ctx.diff is None
