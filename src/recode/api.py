# topmark:header:start
#
#   project      : Recode
#   file         : api.py
#   file_relpath : src/recode/api.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Public Recode API.

This module runs the Recode pipeline programmatically, without going through
the CLI. The CLI is a thin layer on top of [`run`][recode.api.run].

Configuration contract
----------------------
- When ``config`` is None, configuration is discovered from ``start`` (the
  working directory by default) exactly like the CLI does, then merged with
  the explicit ``config_files``.
- Keyword overrides (``sep``, ``dry_run``, ``diff``, ``run_formatter``,
  ``formatter``) are applied last, on top of discovered or given config.
- The pipeline runs against an immutable [`Config`][recode.config.Config]
  snapshot.

Example:
```python
from recode import api

ctx = api.run(
    "kinds.go",
    "KINDS",
    row='Kind{{ . }} Kind = "{{ lower . }}"',
    input_lines=["Alpha", "Beta"],
    dry_run=True,
)
print(ctx.rendered_text)
```
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from recode.config import Config, MutableConfig
from recode.config.logging import get_logger
from recode.pipeline.context import ProcessingContext
from recode.pipeline.pipelines import Pipeline
from recode.pipeline.runner import run as run_pipeline
from recode.template.funcs import HELPER_FUNCS
from recode.template.render import select_render_spec

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from recode.config.logging import RecodeLogger
    from recode.template.render import RenderSpec

logger: RecodeLogger = get_logger(__name__)

__all__: list[str] = [
    "build_config",
    "run",
    "select_pipeline",
]


def build_config(
    *,
    config: Config | None = None,
    config_files: Sequence[Path | str] = (),
    start: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Resolve the effective configuration for a run.

    Args:
        config (Config | None): A frozen config to start from; discovery is
            skipped when given.
        config_files (Sequence[Path | str]): Explicit config files, applied after
            discovered ones.
        start (Path | None): Discovery anchor (defaults to the working directory).
        overrides (Mapping[str, Any] | None): CLI-style overrides (``sep``,
            ``no_format``, ``formatter``, ``dry_run``, ``diff``).

    Returns:
        Config: The frozen configuration.

    Raises:
        ConfigError: If a config file cannot be read or parsed.
    """
    draft: MutableConfig
    if config is None:
        draft = MutableConfig.load_merged(
            start=start,
            extra_config_files=[Path(p) for p in config_files],
        )
    else:
        draft = config.thaw()
    if overrides:
        draft.apply_cli_args(overrides)
    return draft.freeze()


def select_pipeline(config: Config) -> Pipeline:
    """Return ``APPLY_PATCH`` when a diff is requested, ``APPLY`` otherwise."""
    return Pipeline.APPLY_PATCH if config.show_diff else Pipeline.APPLY


def run(
    source: Path | str,
    label: str,
    *,
    row: str | None = None,
    col: str | None = None,
    sep: str | None = None,
    input_path: Path | str | None = None,
    input_lines: Iterable[str] | None = None,
    config: Config | None = None,
    config_files: Sequence[Path | str] = (),
    dry_run: bool = False,
    diff: bool = False,
    run_formatter: bool = True,
    formatter: str | None = None,
    pipeline: Pipeline | None = None,
    funcs: Mapping[str, Callable[..., Any]] = HELPER_FUNCS,
) -> ProcessingContext:
    """Render the template over the input and splice it into ``source``.

    Exactly one input is used: ``input_path`` when given, otherwise
    ``input_lines`` (an empty input when both are None).

    Args:
        source (Path | str): The source file holding the label markers.
        label (str): Label name; markers are ``<label>-BEGIN`` / ``<label>-END``.
        row (str | None): Row-mode template (wins over ``col``).
        col (str | None): Column-mode template.
        sep (str | None): Column separator; overrides the configured one.
        input_path (Path | str | None): Line-oriented input file.
        input_lines (Iterable[str] | None): Input lines, used without ``input_path``.
        config (Config | None): Frozen configuration; discovered when None.
        config_files (Sequence[Path | str]): Explicit config files.
        dry_run (bool): Do not write the source nor run the formatter.
        diff (bool): Produce a unified diff in ``ctx.diff``.
        run_formatter (bool): Run the formatter after a write.
        formatter (str | None): Formatter command line overriding the default.
        pipeline (Pipeline | None): Pipeline to run; selected from the config when None.
        funcs (Mapping[str, Callable[..., Any]]): Helper functions for the template.

    Returns:
        ProcessingContext: The final context (statuses, rendered block,
        diagnostics, diff and formatter result).

    Raises:
        ValueError: If ``label`` is empty.
        ConfigError: If a config file cannot be read or parsed.
    """
    if not label:
        raise ValueError("label must not be empty")

    effective: Config = build_config(
        config=config,
        config_files=config_files,
        overrides={
            "sep": sep,
            "no_format": not run_formatter,
            "formatter": formatter,
            "dry_run": dry_run,
            "diff": diff,
        },
    )
    spec: RenderSpec = select_render_spec(row, col, effective.separator)
    ctx = ProcessingContext(
        path=Path(source),
        label=label,
        config=effective,
        render_spec=spec,
        input_lines=input_lines,
        input_path=Path(input_path) if input_path is not None else None,
        funcs=funcs,
    )
    ctx.diagnostics.items.extend(effective.diagnostics)

    selected: Pipeline = pipeline or select_pipeline(effective)
    logger.debug("Running pipeline %s for %s (label '%s')", selected.name, source, label)
    run_pipeline(ctx, selected.steps)
    logger.trace("Run summary: %s", ctx.to_dict())
    return ctx
