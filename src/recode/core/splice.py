# topmark:header:start
#
#   project      : Recode
#   file         : splice.py
#   file_relpath : src/recode/core/splice.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Splice rendered text between the two marker comments of a label.

The replaced region is computed from explicit line boundaries:

* it starts right after the BEGIN comment, extended past the end of the BEGIN
  line (line terminator included) when only whitespace follows the comment;
* it ends at the start of the END comment's line when only whitespace precedes
  the comment on that line, otherwise right at the comment.

Both marker comments, the END line's indentation and everything outside the
region are preserved verbatim. The inserted text is the rendered block with one
trailing newline (none for an empty block), using the file's newline style.

Example:
    ```text
    // LBL-BEGIN            // LBL-BEGIN
    old line        ==>     item: a
    // LBL-END              item: b
                            // LBL-END
    ```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from recode.config.logging import get_logger

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.core.labels import LabelPair

logger: RecodeLogger = get_logger(__name__)

_RE_LONE_LF: Final[re.Pattern[str]] = re.compile(r"(?<!\r)\n")


@dataclass(frozen=True)
class SpliceResult:
    """Outcome of a splice.

    Attributes:
        content (str): The new full file content.
        start (int): Offset where the replaced region starts (in the original content).
        end (int): Offset where the replaced region ends (exclusive, original content).
        inserted (str): The text that replaced ``content[start:end]``.
        replaced (str): The original text of the region.
    """

    content: str
    start: int
    end: int
    inserted: str
    replaced: str

    @property
    def changed(self) -> bool:
        """Return True when the splice altered the region."""
        return self.inserted != self.replaced


def region_start(content: str, offset: int) -> int:
    """Return the splice start for a BEGIN comment ending at ``offset``.

    Skips trailing blanks and one line terminator if nothing else follows the
    comment on its line.
    """
    i: int = offset
    n: int = len(content)
    while i < n and content[i] in " \t":
        i += 1
    if content.startswith("\r\n", i):
        return i + 2
    if i < n and content[i] in "\r\n":
        return i + 1
    if i == n:
        return n
    return offset


def region_end(content: str, comment_start: int, line_start: int) -> int:
    """Return the splice end for an END comment starting at ``comment_start``.

    Returns the start of its line when only blanks precede the comment.
    """
    if content[line_start:comment_start].strip(" \t") == "":
        return line_start
    return comment_start


def to_newline_style(text: str, newline: str) -> str:
    """Convert the ``\\n`` line breaks of ``text`` to ``newline``."""
    if newline == "\n":
        return text
    return _RE_LONE_LF.sub(newline, text)


def splice(content: str, pair: LabelPair, rendered: str, newline: str = "\n") -> SpliceResult:
    """Replace the region between ``pair``'s markers with ``rendered``.

    Args:
        content (str): Full source text.
        pair (LabelPair): The located BEGIN/END markers.
        rendered (str): The rendered block (``\\n``-separated lines).
        newline (str): Newline style of the source, applied to the inserted text.

    Returns:
        SpliceResult: The new content and a description of the replaced region.
    """
    start: int = region_start(content, pair.begin.end)
    end: int = region_end(content, pair.end.start, pair.end.line_start)
    if end < start:
        # BEGIN and END share a line: splice strictly between the comments
        start, end = pair.begin.end, pair.end.start

    inserted: str = to_newline_style(rendered, newline)
    if inserted:
        inserted += newline

    logger.debug("Splice region for label '%s': [%d:%d]", pair.label, start, end)
    return SpliceResult(
        content=content[:start] + inserted + content[end:],
        start=start,
        end=end,
        inserted=inserted,
        replaced=content[start:end],
    )
