# topmark:header:start
#
#   project      : Recode
#   file         : main.py
#   file_relpath : src/recode/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Recode command line interface.

Typical use is a ``go:generate`` directive next to the labelled region:

```go
//go:generate recode -label KINDS -input kinds.txt -row "Kind{{ . }},"
// KINDS-BEGIN
// KINDS-END
```

``go generate`` exports ``GOFILE``, which is used when ``-src`` is omitted.

Output streams:
- stdout: the rendered block (always printed once rendering succeeded).
- stderr: diagnostics, the optional diff, errors and logging.

Exit status follows [`ExitCode`][recode.core.exit_codes.ExitCode]; a missing
label pair is not an error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

import click

from recode import api
from recode.cli.console import ClickConsole
from recode.cli.errors import (
    RecodeCliError,
    RecodeConfigError,
    RecodeEncodingError,
    RecodeFileNotFoundError,
    RecodeIOError,
    RecodePermissionDeniedError,
    RecodePipelineError,
    RecodeSyntaxError,
    RecodeTemplateError,
    RecodeUnsupportedFileTypeError,
    RecodeUsageError,
)
from recode.cli.options import (
    ColorMode,
    apply_options,
    common_color_options,
    common_verbose_options,
    render_options,
    resolve_color_mode,
    resolve_verbosity,
)
from recode.config.logging import get_logger, resolve_env_log_level, setup_logging
from recode.constants import RECODE_VERSION, SOURCE_FILE_ENV
from recode.core.diagnostics import DiagnosticLevel
from recode.core.errors import ConfigError
from recode.pipeline.processors import register_all_processors
from recode.pipeline.status import (
    Axis,
    FsStatus,
    RenderStatus,
    ScanStatus,
    WriteStatus,
)
from recode.utils.diff import render_patch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from recode.pipeline.context import ProcessingContext
    from recode.rendering.colored_enum import ColoredStrEnum

logger = get_logger(__name__)

register_all_processors()

STDIN_SENTINEL: str = "-"

_FS_ERRORS: dict[FsStatus, type[RecodeCliError]] = {
    FsStatus.NOT_FOUND: RecodeFileNotFoundError,
    FsStatus.NO_READ_PERMISSION: RecodePermissionDeniedError,
    FsStatus.UNREADABLE: RecodeIOError,
    FsStatus.UNICODE_DECODE_ERROR: RecodeEncodingError,
}

_SCAN_ERRORS: dict[ScanStatus, type[RecodeCliError]] = {
    ScanStatus.UNSUPPORTED: RecodeUnsupportedFileTypeError,
    ScanStatus.SYNTAX_ERROR: RecodeSyntaxError,
}

_RENDER_ERRORS: dict[RenderStatus, type[RecodeCliError]] = {
    RenderStatus.TEMPLATE_ERROR: RecodeTemplateError,
    RenderStatus.INPUT_NOT_FOUND: RecodeFileNotFoundError,
    RenderStatus.INPUT_UNREADABLE: RecodeIOError,
}

_WRITE_ERRORS: dict[WriteStatus, type[RecodeCliError]] = {
    WriteStatus.FAILED: RecodeIOError,
}


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Configure internal logging via env:
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)

    # Configure program-output verbosity:
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)


def resolve_input(input_file: str) -> tuple[Path | None, Iterable[str] | None]:
    """Return ``(input_path, input_lines)`` for the ``-input`` value.

    An empty value or ``-`` selects STDIN.
    """
    if not input_file or input_file == STDIN_SENTINEL:
        return None, click.get_text_stream("stdin")
    return Path(input_file), None


def raise_for_status(run: ProcessingContext) -> None:
    """Raise the CLI error matching the first failed pipeline axis, if any.

    Formatter failures never raise; they are reported as warnings.

    Raises:
        RecodeCliError: The error matching the failure, carrying its exit code.
    """
    error_cls: type[RecodeCliError] | None = (
        _FS_ERRORS.get(run.status.fs)
        or _SCAN_ERRORS.get(run.status.scan)
        or _RENDER_ERRORS.get(run.status.render)
        or _WRITE_ERRORS.get(run.status.write)
    )
    if error_cls is None and not run.is_halted:
        return

    messages: list[str] = [d.message for d in run.diagnostics if d.level == DiagnosticLevel.ERROR]
    message: str = messages[-1] if messages else f"{run.flow.at_step}: {run.flow.reason}"
    raise (error_cls or RecodePipelineError)(message)


def report(console: ClickConsole, run: ProcessingContext, verbosity: int) -> None:
    """Print the rendered block, the diff and the non-error diagnostics.

    Args:
        console (ClickConsole): Program-output console.
        run (ProcessingContext): The finished run.
        verbosity (int): Program-output level (see
            [`resolve_verbosity`][recode.cli.options.resolve_verbosity]).
    """
    if run.block is not None:
        console.print(run.rendered_text)

    if run.diff:
        console.note(render_patch(run.diff, color=console.enable_color), nl=False)

    threshold: dict[DiagnosticLevel, int] = {
        DiagnosticLevel.INFO: logging.INFO,
        DiagnosticLevel.WARNING: logging.WARNING,
    }
    for diagnostic in run.diagnostics:
        level: int | None = threshold.get(diagnostic.level)
        if level is not None and verbosity <= level:
            console.diagnostic(diagnostic)

    if verbosity <= logging.DEBUG:
        for axis in Axis:
            status: ColoredStrEnum = run.status.get(axis)
            console.note(f"{axis.value:<8}{status.label(color=console.enable_color)}")


@click.command(
    name="recode",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Render a template once per input line and splice the result between the "
        "'<LABEL>-BEGIN' and '<LABEL>-END' comments of a source file."
    ),
)
@render_options
@apply_options
@common_verbose_options
@common_color_options
@click.version_option(RECODE_VERSION, "--version", prog_name="recode")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    src: str,
    label: str,
    input_file: str,
    row: str,
    col: str,
    sep: str | None,
    dry_run: bool,
    diff: bool,
    no_format: bool,
    formatter: str | None,
    config_files: tuple[str, ...],
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Recode CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]

    if not label:
        raise RecodeUsageError("Missing option '-label'.")
    source: str = src or os.environ.get(SOURCE_FILE_ENV, "")
    if not source:
        raise RecodeUsageError(f"Missing option '-src' (and ${SOURCE_FILE_ENV} is not set).")

    input_path, input_lines = resolve_input(input_file)
    logger.debug(
        "recode: src=%s label=%s input=%s row=%r col=%r sep=%r",
        source,
        label,
        input_path or "<stdin>",
        row,
        col,
        sep,
    )

    try:
        run = api.run(
            source,
            label,
            row=row,
            col=col,
            sep=sep,
            input_path=input_path,
            input_lines=input_lines,
            config_files=config_files,
            dry_run=dry_run,
            diff=diff,
            run_formatter=not no_format,
            formatter=formatter,
        )
    except ConfigError as e:
        raise RecodeConfigError(str(e)) from e

    report(console, run, ctx.obj["verbosity_level"])
    raise_for_status(run)


if __name__ == "__main__":
    cli()
