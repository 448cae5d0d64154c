# topmark:header:start
#
#   project      : Recode
#   file         : labels.py
#   file_relpath : src/recode/core/labels.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Locate the BEGIN/END marker comments of a label.

A label ``FOO`` is marked by two comments whose bodies (delimiters and
surrounding whitespace removed) are exactly ``FOO-BEGIN`` and ``FOO-END``.

Only the first BEGIN and the first END in document order are honored; later
duplicates are ignored. A pair whose BEGIN does not end strictly before the END
starts is not a splice target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.constants import BEGIN_SUFFIX, END_SUFFIX

if TYPE_CHECKING:
    from collections.abc import Iterable

    from recode.config.logging import RecodeLogger
    from recode.pipeline.processors.types import CommentMarker

logger: RecodeLogger = get_logger(__name__)


@dataclass(frozen=True)
class LabelPair:
    """The BEGIN and END markers delimiting a splice region."""

    label: str
    begin: CommentMarker
    end: CommentMarker


def begin_marker(label: str) -> str:
    """Return the comment body that opens ``label``'s region."""
    return f"{label}{BEGIN_SUFFIX}"


def end_marker(label: str) -> str:
    """Return the comment body that closes ``label``'s region."""
    return f"{label}{END_SUFFIX}"


def locate_markers(label: str, comments: Iterable[CommentMarker]) -> list[CommentMarker]:
    """Return every comment marking ``label`` (BEGIN or END), in document order."""
    wanted: set[str] = {begin_marker(label), end_marker(label)}
    found: list[CommentMarker] = []
    for comment in comments:
        logger.trace("comment: %s label: %s", comment, label)
        if comment.body in wanted:
            found.append(comment)
    logger.debug("Found %d marker(s) for label '%s'", len(found), label)
    return found


def find_label_pair(label: str, comments: Iterable[CommentMarker]) -> LabelPair | None:
    """Return the first BEGIN/END pair for ``label``, or None if there is no valid pair.

    Args:
        label (str): The label name.
        comments (Iterable[CommentMarker]): Comments of the source, in document order.

    Returns:
        LabelPair | None: The pair when both markers exist and BEGIN ends strictly
        before END starts; otherwise None.
    """
    begin: CommentMarker | None = None
    end: CommentMarker | None = None
    for marker in locate_markers(label, comments):
        if marker.body == begin_marker(label):
            begin = begin or marker
        else:
            end = end or marker

    if begin is None or end is None:
        logger.info(
            "Label '%s' incomplete: begin=%s end=%s",
            label,
            begin is not None,
            end is not None,
        )
        return None

    if not begin.end < end.start:
        logger.info("Label '%s' markers out of order: %s, %s", label, begin, end)
        return None

    return LabelPair(label=label, begin=begin, end=end)
