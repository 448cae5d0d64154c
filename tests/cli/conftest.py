# topmark:header:start
#
#   project      : Recode
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Helpers for CLI tests.

`run_cli` invokes the command in-process with Click's `CliRunner`; stdout and
stderr are captured separately (Click 8.2+).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner

from recode.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from click.testing import Result


def run_cli(
    args: Sequence[str],
    *,
    input_text: str | None = None,
    env: Mapping[str, str | None] | None = None,
) -> Result:
    """Invoke ``recode`` with ``args`` and return the result.

    Args:
        args (Sequence[str]): Command line arguments.
        input_text (str | None): Text fed to STDIN.
        env (Mapping[str, str | None] | None): Environment overrides.

    Returns:
        Result: The captured result (``exit_code``, ``stdout``, ``stderr``).
    """
    runner = CliRunner()
    return runner.invoke(cli, list(args), input=input_text, env=env, catch_exceptions=False)
