# topmark:header:start
#
#   project      : Recode
#   file         : test_render.py
#   file_relpath : tests/template/test_render.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Per-line rendering: mode selection, joining and line failures."""

from __future__ import annotations

import io

from hypothesis import given
from hypothesis import strategies as st

from recode.core.diagnostics import DiagnosticLevel, DiagnosticLog
from recode.template.exec import Template
from recode.template.render import (
    RenderMode,
    RenderSpec,
    iter_input_lines,
    render_block,
    select_render_spec,
)
from tests.conftest import mark_hypothesis_slow

# Lines never contain a terminator once read.
_line = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="\r\n"),
    max_size=12,
)


def _render(spec: RenderSpec, lines: list[str]) -> str:
    return render_block(spec.compile(), spec, lines).text


def test_row_wins_over_col() -> None:
    spec = select_render_spec("r{{ . }}", "c{{ . }}", "-")
    assert spec == RenderSpec(RenderMode.ROW, "r{{ . }}", "\n")


def test_col_uses_separator() -> None:
    assert select_render_spec("", "{{ . }}", ";").separator == ";"
    assert select_render_spec(None, "{{ . }}").separator == ","
    assert select_render_spec(None, "{{ . }}", "").separator == ""


def test_identity_template_without_row_or_col() -> None:
    spec = select_render_spec(None, None, "-")
    assert spec.mode is RenderMode.ROW
    assert spec.source == "{{ . }}"
    assert _render(spec, ["a", "b"]) == "a\nb"


def test_iter_input_lines_strips_terminators() -> None:
    stream = io.StringIO("a\r\nb\n\nc")
    assert list(iter_input_lines(stream)) == ["a", "b", "", "c"]


def test_row_mode_one_output_line_per_input_line() -> None:
    spec = select_render_spec("item: {{ . }}", None)
    assert _render(spec, ["a", "b"]) == "item: a\nitem: b"


def test_column_mode_joins_with_separator() -> None:
    spec = select_render_spec(None, "{{ basename . }}", "-")
    assert _render(spec, ["x/a.go", "y/b.go"]) == "a.go-b.go"


def test_single_line_helper() -> None:
    spec = select_render_spec("{{ upper . }}", None)
    assert _render(spec, ["hi"]) == "HI"


def test_empty_input_renders_empty_block() -> None:
    spec = select_render_spec("x{{ . }}", None)
    block = render_block(spec.compile(), spec, [])
    assert block.text == ""
    assert block.line_count == 0


def test_failing_line_renders_empty_and_warns() -> None:
    spec = select_render_spec(None, '{{ index (split . ",") 1 }}', "|")
    log = DiagnosticLog()
    block = render_block(spec.compile(), spec, ["a,b", "c", "d,e"], log)

    assert block.text == "b||e"
    assert block.values == ("b", "", "e")
    assert [e.index for e in block.errors] == [1]
    assert block.errors[0].line == "c"
    assert [d.level for d in log] == [DiagnosticLevel.WARNING]
    assert "Input line 2" in log.items[0].message


def test_custom_funcs_reach_the_template() -> None:
    spec = RenderSpec(RenderMode.ROW, "{{ shout . }}", "\n")
    template = spec.compile({"shout": lambda s: s + "!"})
    assert render_block(template, spec, ["a"]).text == "a!"


@mark_hypothesis_slow
@given(lines=st.lists(_line, max_size=8), row=st.booleans())
def test_one_output_per_input_line(lines: list[str], row: bool) -> None:
    spec = (
        select_render_spec("<{{ . }}>", None) if row else select_render_spec(None, "<{{ . }}>", ";")
    )
    block = render_block(spec.compile(), spec, lines)
    assert block.line_count == len(lines)
    assert block.values == tuple(f"<{line}>" for line in lines)
    assert block.text == spec.separator.join(block.values)


@mark_hypothesis_slow
@given(lines=st.lists(_line, max_size=8))
def test_identity_template_reproduces_input(lines: list[str]) -> None:
    spec = select_render_spec(None, None)
    template = Template("row", "{{ . }}")
    assert render_block(template, spec, lines).text == "\n".join(lines)
