# topmark:header:start
#
#   project      : Recode
#   file         : diff.py
#   file_relpath : src/recode/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Colorized rendering of unified diffs for logs and the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yachalk import chalk

from recode.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from recode.config.logging import RecodeLogger

logger: RecodeLogger = get_logger(__name__)


def render_patch(
    patch: Sequence[str] | str,
    show_line_numbers: bool = False,
    color: bool = True,
) -> str:
    """Render a preview of a unified diff.

    Control characters (``\\r``, ``\\n``) inside lines are shown escaped so that
    newline-style changes stay visible.

    Args:
        patch (Sequence[str] | str): A unified diff as a sequence of lines or a
            single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.
        color (bool): Whether to colorize the output.

    Returns:
        str: The formatted diff preview, one rendered line per diff line.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=True)
    else:
        lines = list(patch)

    def process_line(line: str) -> str:
        body: str = line.rstrip("\r\n")
        ending: str = line[len(body) :]
        content: str = body.replace("\r", "\\r") + (
            ending.replace("\r", "\\r").replace("\n", "\\n") if ending not in ("\n", "") else ""
        )
        if not color:
            return content
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return content

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
