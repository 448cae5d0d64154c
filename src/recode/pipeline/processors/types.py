# topmark:header:start
#
#   project      : Recode
#   file         : types.py
#   file_relpath : src/recode/pipeline/processors/types.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Types shared by the comment indexers.

Offsets are *character* offsets into the decoded source text (Python ``str``
indices), so that slicing the text with them is always exact.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommentMarker:
    """One comment found in a source file.

    Attributes:
        text (str): Raw comment text, delimiters included (e.g. ``"// FOO-BEGIN"``).
        body (str): Comment text with delimiters and surrounding whitespace removed.
        start (int): Offset of the first character of the comment.
        end (int): Offset just past the last character of the comment.
        line_start (int): Offset of the first character of the line holding ``start``.
        line (int): 1-based line number of ``start``.
    """

    text: str
    body: str
    start: int
    end: int
    line_start: int
    line: int

    def __str__(self) -> str:
        return f"{self.text!r}@{self.line}[{self.start}:{self.end}]"
