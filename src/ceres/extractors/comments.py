"""
Recognize and de-marker D documentation comments.

Four syntaxes are understood:
- ``/// text``               single-line doc comments, consecutive lines accumulate
- ``/** ... */``, ``/* ... */`` block comments, closed by the first ``*/``
- ``/++ ... +/``, ``/+ ... +/`` nesting comments, closed when the nesting count returns to zero
- ``/// ditto``              reuse the last attached doc comment of the same scope

Extraction is a pure function of ``(lines, start)`` returning the paragraph
lines and the index of the first line after the comment.
"""
from enum import Enum
from typing import Optional, Sequence

from ceres.constants import (
    BLOCK_CLOSE,
    BLOCK_DOC_MARKERS,
    LINE_DOC_MARKER,
    NESTED_CLOSE,
    NESTED_DOC_MARKERS,
    NESTED_OPEN,
)
from ceres.extractors.patterns import (
    DITTO_COMMENT,
    INTERIOR_LINE_PREFIX,
    NESTED_TRAILING_CLOSE,
)

__all__ = [
    "CommentStyle",
    "DocCommentState",
    "comment_style",
    "is_ditto",
    "extract_comment",
    "consume_doc_comment",
    "attach_comments",
]


class CommentStyle(Enum):
    """Syntax family of a documentation comment."""
    LINE = "line"
    BLOCK = "block"
    NESTED = "nested"


def is_ditto(line: str) -> bool:
    """True for a ``/// ditto`` marker line."""
    return DITTO_COMMENT.match(line.strip()) is not None


def comment_style(line: str) -> Optional[CommentStyle]:
    """
    Classify the doc comment opened by a trimmed line.

    Returns:
        The comment style, or None if the line does not open a doc comment
    """
    if line.startswith(LINE_DOC_MARKER):
        return CommentStyle.LINE
    if line.startswith(NESTED_DOC_MARKERS):
        return CommentStyle.NESTED
    if line.startswith(BLOCK_DOC_MARKERS):
        return CommentStyle.BLOCK
    return None


def _trim_blank(paragraphs: list[str]) -> list[str]:
    """Drop leading and trailing empty paragraph lines."""
    start = 0
    end = len(paragraphs)
    while start < end and not paragraphs[start]:
        start += 1
    while end > start and not paragraphs[end - 1]:
        end -= 1
    return paragraphs[start:end]


def _clean_line(text: str) -> str:
    """Strip a leading run of * or + from an interior comment line."""
    return INTERIOR_LINE_PREFIX.sub("", text.strip(), count=1).strip()


def _extract_block(lines: Sequence[str], start: int) -> tuple[list[str], int]:
    first = lines[start].strip()
    body = first[2:]
    # "/**" opens a doc block, but "/**/" is an empty comment
    if body.startswith("*") and not body.startswith(BLOCK_CLOSE):
        body = body[1:]

    paragraphs: list[str] = []
    index = start
    while True:
        close = body.find(BLOCK_CLOSE)
        if close != -1:
            paragraphs.append(_clean_line(body[:close]))
            return _trim_blank(paragraphs), index + 1

        paragraphs.append(_clean_line(body))
        index += 1
        if index >= len(lines):
            return _trim_blank(paragraphs), index
        body = lines[index].strip()


def _extract_nested(lines: Sequence[str], start: int) -> tuple[list[str], int]:
    line = lines[start].strip()
    text = line[2:]
    depth = 0

    paragraphs: list[str] = []
    index = start
    while True:
        depth += line.count(NESTED_OPEN) - line.count(NESTED_CLOSE)
        if depth <= 0:
            text = NESTED_TRAILING_CLOSE.sub("", text)
        paragraphs.append(_clean_line(text))

        if depth <= 0:
            return _trim_blank(paragraphs), index + 1

        index += 1
        if index >= len(lines):
            return _trim_blank(paragraphs), index
        line = lines[index].strip()
        text = line


def extract_comment(lines: Sequence[str], start: int) -> tuple[list[str], int]:
    """
    Extract the doc comment that opens at ``lines[start]``.

    Marker syntax and interior ``*``/``+`` prefixes are stripped from every
    line. An unterminated block consumes the rest of the input.

    Args:
        lines: All lines of the file
        start: Index of the line opening the comment

    Returns:
        Tuple of (paragraph lines, index of the first line after the comment)

    Raises:
        ValueError: If the line does not open a doc comment
    """
    first = lines[start].strip()
    style = comment_style(first)

    if style is CommentStyle.LINE:
        return [first.lstrip("/").strip()], start + 1
    if style is CommentStyle.BLOCK:
        return _extract_block(lines, start)
    if style is CommentStyle.NESTED:
        return _extract_nested(lines, start)

    raise ValueError(f"line {start + 1} does not open a doc comment: {first!r}")


class DocCommentState:
    """
    Pending doc comment and ditto register for one scope.

    The module driver owns one instance and every container scan creates a
    fresh one, so the two scopes never observe each other's comments.
    """

    def __init__(self) -> None:
        self._pending: list[str] = []
        self._last: tuple[str, ...] = ()

    @property
    def pending(self) -> tuple[str, ...]:
        """Comment waiting for the next declaration."""
        return tuple(_trim_blank(self._pending))

    @property
    def last(self) -> tuple[str, ...]:
        """Most recently attached non-empty comment."""
        return self._last

    def begin_block(self, paragraphs: Sequence[str]) -> None:
        """Start a new comment block, dropping anything pending."""
        self._pending = list(paragraphs)

    def extend(self, paragraphs: Sequence[str]) -> None:
        """Add single-line doc comment text to the pending block."""
        self._pending.extend(paragraphs)

    def ditto(self) -> None:
        """Make the last attached comment pending again."""
        self._pending = list(self._last)

    def attach(self) -> tuple[str, ...]:
        """
        Hand the pending comment to a recorded declaration.

        Non-empty comments become the ditto target for this scope.
        """
        comments = self.pending
        if comments:
            self._last = comments
        self._pending = []
        return comments

    def discard(self) -> None:
        """Drop the pending comment without recording it."""
        self._pending = []

    def reset(self) -> None:
        """Forget both the pending and the last comment."""
        self._pending = []
        self._last = ()


def consume_doc_comment(
    lines: Sequence[str],
    index: int,
    state: DocCommentState,
) -> Optional[int]:
    """
    Feed a ditto marker or doc comment at ``lines[index]`` into ``state``.

    Returns:
        Index of the next line to scan, or None if the line is not a doc comment
    """
    line = lines[index].strip()

    if is_ditto(line):
        state.ditto()
        return index + 1

    style = comment_style(line)
    if style is None:
        return None

    paragraphs, next_index = extract_comment(lines, index)
    if style is CommentStyle.LINE:
        state.extend(paragraphs)
    else:
        state.begin_block(paragraphs)
    return next_index


def attach_comments(state: DocCommentState, trailing: str = "") -> tuple[str, ...]:
    """
    Attach the pending comment, or a trailing ``///`` comment when none is pending.

    Args:
        state: Comment state of the current scope
        trailing: Text after ``//`` on the declaration line, as returned by
            split_line_comment() (starts with ``/`` for doc comments)
    """
    if not state.pending and trailing.startswith("/"):
        text = trailing.lstrip("/").strip()
        if text:
            state.begin_block([text])
    return state.attach()
