# topmark:header:start
#
#   project      : Recode
#   file         : test_cli.py
#   file_relpath : tests/cli/test_cli.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Command line behavior: streams, flags and exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recode.constants import RECODE_VERSION
from recode.core.exit_codes import ExitCode
from tests.cli.conftest import run_cli
from tests.conftest import GO_SOURCE, parametrize

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def go_file(isolation: Path) -> Path:
    path: Path = isolation / "kinds.go"
    path.write_text(GO_SOURCE, encoding="utf-8")
    (isolation / "kinds.txt").write_text("a\nb\n", encoding="utf-8")
    return path


def test_row_mode_prints_and_splices(go_file: Path) -> None:
    result = run_cli(
        ["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt", "-row", "item: {{ . }}"]
        + ["--no-format"]
    )
    assert result.exit_code == ExitCode.SUCCESS, result.stderr
    assert result.stdout == "item: a\nitem: b\n"
    assert "// KINDS-BEGIN\nitem: a\nitem: b\n// KINDS-END\n" in go_file.read_text(
        encoding="utf-8"
    )


def test_double_dash_aliases_and_column_mode(go_file: Path) -> None:
    result = run_cli(
        ["--src", "kinds.go", "--label", "KINDS", "--input", "kinds.txt"]
        + ["--col", "{{ upper . }}", "--sep", "-", "--dry-run"]
    )
    assert result.exit_code == ExitCode.SUCCESS, result.stderr
    assert result.stdout == "A-B\n"
    assert go_file.read_text(encoding="utf-8") == GO_SOURCE


def test_stdin_input(go_file: Path) -> None:
    result = run_cli(
        ["-src", "kinds.go", "-label", "KINDS", "-input", "-", "--dry-run"],
        input_text="x\r\ny\n",
    )
    assert result.exit_code == ExitCode.SUCCESS
    assert result.stdout == "x\ny\n"


def test_gofile_environment_variable(go_file: Path) -> None:
    result = run_cli(
        ["-label", "KINDS", "-input", "kinds.txt", "--no-format"],
        env={"GOFILE": "kinds.go"},
    )
    assert result.exit_code == ExitCode.SUCCESS, result.stderr
    assert "\na\nb\n// KINDS-END" in go_file.read_text(encoding="utf-8")


def test_missing_label_is_a_usage_error(go_file: Path) -> None:
    result = run_cli(["-src", "kinds.go"])
    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "Missing option '-label'" in result.stderr
    assert result.stdout == ""


def test_missing_source_is_a_usage_error(isolation: Path) -> None:
    result = run_cli(["-label", "KINDS"], input_text="")
    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "GOFILE" in result.stderr


def test_verbose_and_quiet_conflict(go_file: Path) -> None:
    result = run_cli(["-src", "kinds.go", "-label", "KINDS", "-v", "-q"])
    assert result.exit_code == ExitCode.USAGE_ERROR


@parametrize(
    ("args", "setup", "exit_code", "message"),
    [
        (["-src", "absent.go"], None, ExitCode.FILE_NOT_FOUND, "Source file not found"),
        (["-input", "absent.txt"], None, ExitCode.FILE_NOT_FOUND, "Input file not found"),
        (["-row", "{{ .Name }}"], None, ExitCode.TEMPLATE_ERROR, "template: row:1:"),
        (["-src", "k.txt"], ("k.txt", "x"), ExitCode.UNSUPPORTED_FILE_TYPE, "unsupported"),
        (["-src", "k.go"], ("k.go", '"open\n'), ExitCode.SYNTAX_ERROR, "syntax error"),
        (["-src", "k.go"], ("k.go", b"\xff"), ExitCode.ENCODING_ERROR, "not valid UTF-8"),
    ],
)
def test_failures_map_to_exit_codes(
    go_file: Path,
    args: list[str],
    setup: tuple[str, str | bytes] | None,
    exit_code: ExitCode,
    message: str,
) -> None:
    if setup is not None:
        name, content = setup
        target: Path = go_file.parent / name
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    base: list[str] = ["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt"]
    result = run_cli([*base, *args, "--no-format"])
    assert result.exit_code == exit_code
    assert message in result.stderr
    assert go_file.read_text(encoding="utf-8") == GO_SOURCE


def test_template_error_prints_nothing_on_stdout(go_file: Path) -> None:
    result = run_cli(["-src", "kinds.go", "-label", "KINDS", "-row", "{{ if }}"], input_text="a")
    assert result.exit_code == ExitCode.TEMPLATE_ERROR
    assert result.stdout == ""


def test_missing_markers_succeed_without_changes(go_file: Path) -> None:
    result = run_cli(["-src", "kinds.go", "-label", "OTHER", "-input", "kinds.txt", "-v"])
    assert result.exit_code == ExitCode.SUCCESS
    assert result.stdout == "a\nb\n"
    assert "'OTHER-BEGIN' ... 'OTHER-END'" in result.stderr
    assert go_file.read_text(encoding="utf-8") == GO_SOURCE


def test_diff_goes_to_stderr(go_file: Path) -> None:
    result = run_cli(
        ["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt", "--diff", "--dry-run"]
    )
    assert result.exit_code == ExitCode.SUCCESS
    assert result.stdout == "a\nb\n"
    assert "+a" in result.stderr
    assert "kinds.go (updated)" in result.stderr


def test_formatter_failure_only_warns(go_file: Path) -> None:
    result = run_cli(
        ["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt"]
        + ["--formatter", "recode-test-no-such-formatter -w"]
    )
    assert result.exit_code == ExitCode.SUCCESS
    assert "Formatter not found" in result.stderr
    assert "\na\nb\n// KINDS-END" in go_file.read_text(encoding="utf-8")


def test_config_error_exit_code(go_file: Path, isolation: Path) -> None:
    (isolation / "recode.toml").write_text("root = [\n", encoding="utf-8")
    result = run_cli(["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt"])
    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "Invalid TOML" in result.stderr


def test_explicit_config_file(go_file: Path, isolation: Path) -> None:
    (isolation / "extra.toml").write_text('separator = "+"\nformat = false\n', encoding="utf-8")
    result = run_cli(
        ["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt", "-col", "{{ . }}"]
        + ["--config", "extra.toml"]
    )
    assert result.exit_code == ExitCode.SUCCESS, result.stderr
    assert result.stdout == "a+b\n"


def test_debug_verbosity_prints_statuses(go_file: Path) -> None:
    result = run_cli(
        ["-src", "kinds.go", "-label", "KINDS", "-input", "kinds.txt", "--dry-run", "-vv"]
    )
    assert result.exit_code == ExitCode.SUCCESS
    assert "region changed" in result.stderr
    assert "write skipped" in result.stderr


def test_version() -> None:
    result = run_cli(["--version"])
    assert result.exit_code == ExitCode.SUCCESS
    assert RECODE_VERSION in result.stdout
