# topmark:header:start
#
#   project      : Recode
#   file         : conftest.py
#   file_relpath : tests/pipeline/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Shared helpers for pipeline tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recode.pipeline.context import ProcessingContext
from recode.template.render import select_render_spec
from tests.conftest import make_config

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from recode.config import Config



def make_context(
    path: Path,
    label: str = "KINDS",
    *,
    row: str | None = None,
    col: str | None = None,
    sep: str | None = None,
    lines: Iterable[str] | None = None,
    input_path: Path | None = None,
    config: Config | None = None,
    **config_overrides: Any,
) -> ProcessingContext:
    """Build a fresh `ProcessingContext` for ``path``.

    Args:
        path (Path): The source file.
        label (str): The label to splice.
        row (str | None): Row-mode template.
        col (str | None): Column-mode template.
        sep (str | None): Column separator.
        lines (Iterable[str] | None): Input lines.
        input_path (Path | None): Input file (wins over ``lines``).
        config (Config | None): Frozen config; built from ``config_overrides`` when None.
        **config_overrides (Any): Overrides passed to `make_config`.

    Returns:
        ProcessingContext: The new context.
    """
    effective: Config = config or make_config(**config_overrides)
    return ProcessingContext(
        path=path,
        label=label,
        config=effective,
        render_spec=select_render_spec(row, col, sep),
        input_lines=lines,
        input_path=input_path,
    )
