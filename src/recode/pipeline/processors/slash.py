# topmark:header:start
#
#   project      : Recode
#   file         : slash.py
#   file_relpath : src/recode/pipeline/processors/slash.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Comment indexer for C-style comment formats.

Sources are parsed with tree-sitter, using the grammar named by the bound file
type ([`FileType.grammar`][recode.filetypes.FileType]). Comments are the
grammar's own comment nodes (``comment``, ``line_comment``, ``block_comment``,
``multiline_comment``), so string, raw string, regex and character literals
never produce false comments.

A tree that holds an ``ERROR`` or ``MISSING`` node is rejected with
[`SourceSyntaxError`][recode.core.errors.SourceSyntaxError], located at the
innermost first error.

tree-sitter positions are UTF-8 byte offsets; they are converted to character
offsets into the decoded text.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Final, cast

from tree_sitter_language_pack import get_parser

from recode.config.logging import get_logger
from recode.core.errors import SourceSyntaxError
from recode.pipeline.processors.base import CommentIndexer, LineTable
from recode.pipeline.processors.registry import register_filetype

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tree_sitter import Node, Parser, Tree
    from tree_sitter_language_pack import SupportedLanguage

    from recode.config.logging import RecodeLogger
    from recode.pipeline.processors.types import CommentMarker

logger: RecodeLogger = get_logger(__name__)

# Some grammars end line comments on (or just past) the line terminator.
_LINE_TERMINATORS: Final[str] = "\r\n"


@lru_cache(maxsize=None)
def parser_for(grammar: str) -> Parser:
    """Return the (cached) tree-sitter parser for ``grammar``."""
    logger.debug("Loading tree-sitter grammar '%s'", grammar)
    return get_parser(cast("SupportedLanguage", grammar))


class ByteOffsets:
    """Map UTF-8 byte offsets of one text to character offsets.

    Lookups are cheapest when offsets are requested in increasing order, which
    is the order of a document walk.
    """

    def __init__(self, data: bytes) -> None:
        self._data: bytes = data
        self._ascii: bool = data.isascii()
        self._byte: int = 0
        self._char: int = 0

    def char_offset(self, byte_offset: int) -> int:
        """Return the character offset of ``byte_offset``."""
        if self._ascii:
            return byte_offset
        if byte_offset < self._byte:
            self._byte = self._char = 0
        self._char += len(self._data[self._byte : byte_offset].decode("utf-8"))
        self._byte = byte_offset
        return self._char


def iter_comment_nodes(root: Node) -> Iterator[Node]:
    """Yield the comment nodes below ``root`` in document order."""
    stack: list[Node] = [root]
    while stack:
        node: Node = stack.pop()
        if node.type.endswith("comment"):
            # Doc comment children (Rust) are part of their comment.
            yield node
            continue
        stack.extend(reversed(node.children))


def first_error_node(root: Node) -> Node:
    """Return the innermost node of the first parse error below ``root``."""
    node: Node = root
    while not node.is_missing:
        child: Node | None = next(
            (c for c in node.children if c.is_missing or c.has_error),
            None,
        )
        if child is None:
            break
        node = child
    return node


@register_filetype("c")
@register_filetype("cpp")
@register_filetype("cs")
@register_filetype("go")
@register_filetype("java")
@register_filetype("javascript")
@register_filetype("kotlin")
@register_filetype("rust")
@register_filetype("swift")
@register_filetype("tsx")
@register_filetype("typescript")
class SlashCommentIndexer(CommentIndexer):
    """Indexer for files that accept C-style comments."""

    line_prefix = "//"
    block_prefix = "/*"
    block_suffix = "*/"

    @property
    def grammar(self) -> str:
        """Name of the tree-sitter grammar of the bound file type."""
        if self.file_type is None or not self.file_type.grammar:
            raise RuntimeError(f"{type(self).__name__} is not bound to a file type with a grammar")
        return self.file_type.grammar

    def index(self, text: str, *, path: str = "<source>") -> list[CommentMarker]:
        """Return all comments of ``text`` in document order.

        Args:
            text (str): Decoded source text.
            path (str): Display name used in syntax error messages.

        Returns:
            list[CommentMarker]: Comments in the order they appear.

        Raises:
            SourceSyntaxError: If ``text`` does not parse with the grammar.
        """
        data: bytes = text.encode("utf-8")
        tree: Tree = parser_for(self.grammar).parse(data)
        table: LineTable = LineTable(text)
        offsets: ByteOffsets = ByteOffsets(data)

        if tree.root_node.has_error:
            raise self._error(tree.root_node, text, table, offsets, path)

        comments: list[CommentMarker] = []
        for node in iter_comment_nodes(tree.root_node):
            start: int = offsets.char_offset(node.start_byte)
            end: int = offsets.char_offset(node.end_byte)
            while end > start and text[end - 1] in _LINE_TERMINATORS:
                end -= 1
            comments.append(table.marker(self, text, start, end))

        logger.debug("Indexed %d comment(s) in %s", len(comments), path)
        return comments

    def _error(
        self,
        root: Node,
        text: str,
        table: LineTable,
        offsets: ByteOffsets,
        path: str,
    ) -> SourceSyntaxError:
        node: Node = first_error_node(root)
        start: int = min(offsets.char_offset(node.start_byte), len(text))
        line: int = table.line_of(start)
        reason: str = f"syntax error: missing {node.type!r}" if node.is_missing else "syntax error"
        logger.debug("%s: %s at %s (%s grammar)", path, reason, node.start_point, self.grammar)
        return SourceSyntaxError(path, line, start - table.line_start(line) + 1, reason)
