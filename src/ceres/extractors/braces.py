"""
Brace balance tracking for line-oriented D scanning.

Every function here looks at a single line (or a single statement) and is
pure: callers accumulate the running balance across lines themselves. String
literals ("..."), character literals ('...'), WYSIWYG strings (`...`), inline
block comments (/* ... */) and everything after a line comment (//) are inert.
"""
from typing import Sequence

__all__ = [
    "brace_delta",
    "opens_brace",
    "split_line_comment",
    "split_top_level",
    "find_closing",
    "skip_body",
    "is_filler",
]

_OPENERS = {'(': ')', '[': ']', '{': '}'}
_CLOSERS = frozenset(_OPENERS.values())


def _scan(line: str) -> tuple[str, int]:
    """
    Walk a line and separate structure from literals and comments.

    Returns:
        Tuple of (structural characters outside literals and comments,
        offset where a line comment starts or len(line) if none)
    """
    structure: list[str] = []
    in_string = False
    in_char = False
    in_wysiwyg = False
    in_block = False
    escape = False

    i = 0
    length = len(line)
    while i < length:
        c = line[i]

        if in_block:
            if line.startswith("*/", i):
                in_block = False
                i += 2
            else:
                i += 1
            continue

        if in_wysiwyg:
            if c == '`':
                in_wysiwyg = False
            i += 1
            continue

        if escape:
            escape = False
            i += 1
            continue

        if c == '\\':
            escape = True
        elif in_string:
            if c == '"':
                in_string = False
        elif in_char:
            if c == "'":
                in_char = False
        elif c == '"':
            in_string = True
        elif c == "'":
            in_char = True
        elif c == '`':
            in_wysiwyg = True
        elif line.startswith("//", i):
            return "".join(structure), i
        elif line.startswith("/*", i):
            in_block = True
            i += 2
            continue
        else:
            structure.append(c)
        i += 1

    return "".join(structure), length


def brace_delta(line: str) -> int:
    """
    Net change in brace nesting contributed by one line.

    Examples:
        'void f() {'                 -> 1
        'string s = "{ not a brace }";' -> 0
        'x(); // { } {'              -> 0
    """
    structure, _ = _scan(line)
    return structure.count('{') - structure.count('}')


def opens_brace(line: str) -> bool:
    """True if the line has a structural (non-literal) opening brace."""
    structure, _ = _scan(line)
    return '{' in structure


def split_line_comment(line: str) -> tuple[str, str]:
    """
    Split a line into its code and trailing line comment.

    Returns:
        Tuple of (code with trailing whitespace removed, text after '//').
        The comment text keeps a leading '/' for '///' doc comments.
    """
    _, cut = _scan(line)
    if cut >= len(line):
        return line.rstrip(), ""
    return line[:cut].rstrip(), line[cut + 2:]


def split_top_level(text: str, separator: str) -> list[str]:
    """
    Split text on a separator character that is not nested.

    Separators inside (), [], {} or any literal are ignored. Pieces are
    stripped; empty pieces are kept so callers can decide what they mean.
    """
    pieces: list[str] = []
    depth = 0
    quote: str | None = None
    escape = False
    start = 0

    for i, c in enumerate(text):
        if quote:
            if escape:
                escape = False
            elif c == '\\' and quote != '`':
                escape = True
            elif c == quote:
                quote = None
            continue

        if c in ('"', "'", '`'):
            quote = c
        elif c in _OPENERS:
            depth += 1
        elif c in _CLOSERS:
            depth = max(depth - 1, 0)
        elif c == separator and depth == 0:
            pieces.append(text[start:i].strip())
            start = i + 1

    pieces.append(text[start:].strip())
    return pieces


def find_closing(text: str, open_index: int) -> int:
    """
    Find the bracket that closes the one at ``open_index``.

    Returns:
        Index of the matching closer, or -1 if it is not on this line
    """
    opener = text[open_index]
    closer = _OPENERS[opener]
    depth = 0
    quote: str | None = None
    escape = False

    for i in range(open_index, len(text)):
        c = text[i]
        if quote:
            if escape:
                escape = False
            elif c == '\\' and quote != '`':
                escape = True
            elif c == quote:
                quote = None
            continue

        if c in ('"', "'", '`'):
            quote = c
        elif c == opener:
            depth += 1
        elif c == closer:
            depth -= 1
            if depth == 0:
                return i

    return -1


def skip_body(lines: Sequence[str], start: int) -> int:
    """
    Skip past the brace-delimited body that follows a declaration line.

    A declaration terminated by ';' before any brace has no body. Bodies that
    never close run to the end of input.

    Args:
        lines: All lines of the file
        start: Index of the declaration line

    Returns:
        Index of the first line after the body
    """
    first = lines[start].strip()
    balance = brace_delta(first)
    seen_open = opens_brace(first)

    if not seen_open and split_line_comment(first)[0].endswith(";"):
        return start + 1
    if seen_open and balance <= 0:
        return start + 1

    index = start + 1
    while index < len(lines):
        line = lines[index].strip()
        if not seen_open and split_line_comment(line)[0].endswith(";"):
            return index + 1

        balance += brace_delta(line)
        if opens_brace(line):
            seen_open = True
        index += 1

        if seen_open and balance <= 0:
            return index

    return index


def is_filler(code: str) -> bool:
    """
    True for lines that never carry a declaration.

    ``code`` is a line with its line comment already removed: blank lines,
    pure comments and brace-only lines (``{``, ``}``, ``};``) qualify.
    """
    return not code.strip("{}; \t")
