# topmark:header:start
#
#   file         : base.py
#   file_relpath : src/recode/pipeline/processors/base.py
#   project      : Recode
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Comment indexer base module for Recode's source indexing step.

A *comment indexer* turns the decoded text of one source file into the ordered
list of its comments ([`CommentMarker`][recode.pipeline.processors.types.CommentMarker]),
each with exact start/end offsets. Indexers must understand enough of the
language's lexical grammar (string literals in particular) to avoid mistaking
``"// not a comment"`` for a comment.

The registry binds an indexer instance to a file type at registration time
(``indexer.file_type = ft``), mirroring how processors are paired with file types.

Extension points:
    Subclasses set the comment delimiters (``line_prefix``, ``block_prefix``,
    ``block_suffix``) and implement [`index`][recode.pipeline.processors.base.CommentIndexer.index].
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.pipeline.processors.types import CommentMarker

if TYPE_CHECKING:
    from collections.abc import Sequence

    from recode.config.logging import RecodeLogger
    from recode.filetypes import FileType

logger: RecodeLogger = get_logger(__name__)


class CommentIndexer:
    """Base class for comment indexers that handle specific file types.

    Attributes:
        file_type (FileType | None): The file type bound at registration time.
        line_prefix (str): Line comment introducer (e.g. ``//`` or ``#``).
        block_prefix (str): Block comment opener (e.g. ``/*``); empty if unsupported.
        block_suffix (str): Block comment closer (e.g. ``*/``).
    """

    file_type: FileType | None = None

    line_prefix: str = ""
    block_prefix: str = ""
    block_suffix: str = ""

    def __init__(self) -> None:
        self.file_type = None

    def index(self, text: str, *, path: str = "<source>") -> list[CommentMarker]:
        """Return all comments of ``text`` in document order.

        Args:
            text (str): Decoded source text.
            path (str): Display name used in syntax error messages.

        Returns:
            list[CommentMarker]: Comments in the order they appear.

        Raises:
            SourceSyntaxError: If the text cannot be tokenized.
        """
        raise NotImplementedError

    def comment_body(self, raw: str) -> str:
        """Strip the comment delimiters and surrounding whitespace from ``raw``."""
        body: str = raw
        if self.line_prefix and body.startswith(self.line_prefix):
            body = body[len(self.line_prefix) :]
        elif self.block_prefix and body.startswith(self.block_prefix):
            body = body[len(self.block_prefix) :]
            if self.block_suffix and body.endswith(self.block_suffix):
                body = body[: -len(self.block_suffix)]
        return body.strip()


class LineTable:
    """Offset-to-line lookup for one text.

    Recognizes ``\\n``, ``\\r\\n`` and lone ``\\r`` line terminators.
    """

    def __init__(self, text: str) -> None:
        starts: list[int] = [0]
        i: int = 0
        n: int = len(text)
        while i < n:
            ch: str = text[i]
            if ch == "\r":
                if i + 1 < n and text[i + 1] == "\n":
                    i += 1
                starts.append(i + 1)
            elif ch == "\n":
                starts.append(i + 1)
            i += 1
        self._starts: Sequence[int] = starts

    def line_of(self, offset: int) -> int:
        """Return the 1-based line number holding ``offset``."""
        return bisect_right(self._starts, offset)

    def line_start(self, line: int) -> int:
        """Return the offset of the first character of 1-based ``line``."""
        return self._starts[line - 1]

    def offset_of(self, line: int, column: int) -> int:
        """Return the offset for a 1-based ``line`` and 0-based ``column``."""
        return self._starts[line - 1] + column

    def marker(self, indexer: CommentIndexer, text: str, start: int, end: int) -> CommentMarker:
        """Build a `CommentMarker` for ``text[start:end]``."""
        raw: str = text[start:end]
        line: int = self.line_of(start)
        return CommentMarker(
            text=raw,
            body=indexer.comment_body(raw),
            start=start,
            end=end,
            line_start=self.line_start(line),
            line=line,
        )
