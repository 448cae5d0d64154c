# topmark:header:start
#
#   project      : Recode
#   file         : pound.py
#   file_relpath : src/recode/pipeline/processors/pound.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Comment indexer for Python sources (``#`` line comments).

Python is parsed with :mod:`ast` first so that a source that is not valid Python
is rejected before it is rewritten; comments are then collected with
:mod:`tokenize`, which knows about every string literal form.
"""

from __future__ import annotations

import ast
import io
import tokenize
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.core.errors import SourceSyntaxError
from recode.pipeline.processors.base import CommentIndexer, LineTable
from recode.pipeline.processors.registry import register_filetype

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.pipeline.processors.types import CommentMarker

logger: RecodeLogger = get_logger(__name__)


@register_filetype("python")
class PoundCommentIndexer(CommentIndexer):
    """Indexer for files that use ``#`` comments and Python's lexical grammar."""

    line_prefix = "#"

    def index(self, text: str, *, path: str = "<source>") -> list[CommentMarker]:
        """Return all comments of ``text`` in document order.

        Raises:
            SourceSyntaxError: If ``text`` is not valid Python.
        """
        try:
            ast.parse(text, filename=path)
        except SyntaxError as exc:
            raise SourceSyntaxError(path, exc.lineno or 0, exc.offset or 0, exc.msg) from exc

        table: LineTable = LineTable(text)
        comments: list[CommentMarker] = []
        # newline="" keeps \r\n intact so token rows line up with LineTable
        readline = io.StringIO(text, newline="").readline
        try:
            for tok in tokenize.generate_tokens(readline):
                if tok.type != tokenize.COMMENT:
                    continue
                start: int = table.offset_of(*tok.start)
                end: int = table.offset_of(*tok.end)
                comments.append(table.marker(self, text, start, end))
        except tokenize.TokenError as exc:
            msg, (row, col) = exc.args
            raise SourceSyntaxError(path, row, col + 1, msg) from exc

        logger.debug("Indexed %d comment(s) in %s", len(comments), path)
        return comments
