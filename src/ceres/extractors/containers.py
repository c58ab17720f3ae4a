"""
Scan the bodies of classes, structs, interfaces and enums.

Each scan starts at a header line and returns the container together with the
index of the first line after its body. Members are collected only at the
container's own depth; nested types and method bodies are walked past.
"""
import re
from typing import Optional, Sequence

from ceres.constants import ENUM_KEYWORD
from ceres.extractors.braces import (
    brace_delta,
    is_filler,
    opens_brace,
    split_line_comment,
    split_top_level,
)
from ceres.extractors.comments import (
    DocCommentState,
    attach_comments,
    consume_doc_comment,
)
from ceres.extractors.declarations import (
    is_function,
    is_private_declaration,
    parse_function,
)
from ceres.extractors.patterns import CONTAINER_HEADER
from ceres.models import (
    ClassDoc,
    ContainerKind,
    EnumDoc,
    EnumMemberDoc,
    FieldDoc,
    FunctionDoc,
)

__all__ = [
    "match_container_header",
    "parse_header",
    "parse_enum_members",
    "scan_class",
    "scan_enum",
]

_NAME_TERMINATORS = ("{", ":", "(", ";")


def match_container_header(line: str) -> Optional[re.Match]:
    """
    Match a class, struct, interface or enum header.

    Leading attributes (``final``, ``public``, ``@safe``, ``extern(C)``...) are
    allowed. ``enum NAME = value;`` declares a constant, not a container.

    Returns:
        The match (groups ``kind`` and ``header``), or None
    """
    code, _ = split_line_comment(line.strip())
    match = CONTAINER_HEADER.match(code)
    if match is None:
        return None
    if match.group("kind") == ENUM_KEYWORD and "{" not in code and "=" in code:
        return None
    return match


def parse_header(match: re.Match) -> tuple[str, str]:
    """
    Extract ``(kind, name)`` from a matched header.

    The name is cut at the first ``{``, ``:``, ``(`` or ``;`` so inline bodies,
    base lists and template parameters are dropped. Anonymous containers
    yield an empty name.

    Examples:
        'class Widget : Base {' -> ('class', 'Widget')
        'struct Pair(T) {'      -> ('struct', 'Pair')
        'enum : int {'          -> ('enum', '')
    """
    kind = match.group("kind")
    rest = match.group("header")[len(kind):].split()
    if not rest:
        return kind, ""

    name = rest[0]
    for terminator in _NAME_TERMINATORS:
        cut = name.find(terminator)
        if cut != -1:
            name = name[:cut]
    return kind, name.strip()


def _body_segment(code: str, opened_here: bool, closed_here: bool) -> str:
    """Text of a line that lies inside the container body."""
    segment = code
    if opened_here:
        segment = segment[segment.find("{") + 1:]
    if closed_here:
        cut = segment.rfind("}")
        if cut != -1:
            segment = segment[:cut]
    return segment.strip()


def _split_member(piece: str) -> tuple[str, str]:
    """Split ``Name = value`` on the first top-level ``=``."""
    parts = split_top_level(piece, "=")
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], piece[piece.find("=") + 1:].strip()


def parse_enum_members(
    segment: str,
    line_number: int,
    comments: Sequence[str] = (),
) -> list[EnumMemberDoc]:
    """
    Parse the enum members written on one line.

    Examples:
        'Red, Green = 5, Blue' -> Red, Green (value '5'), Blue
        'Alpha,'               -> Alpha
    """
    members: list[EnumMemberDoc] = []
    for piece in split_top_level(segment, ","):
        if not piece:
            continue
        name, value = _split_member(piece)
        if not name:
            continue
        members.append(EnumMemberDoc(
            name=name,
            value=value,
            comments=tuple(comments),
            line_number=line_number,
        ))
    return members


def _inline_members(
    segment: str,
    line_number: int,
) -> tuple[list[FunctionDoc], list[FieldDoc]]:
    """Members of a body written on the same line as its braces."""
    methods: list[FunctionDoc] = []
    fields: list[FieldDoc] = []

    pieces = split_top_level(segment, ";")
    terminated = pieces[:-1]
    for piece in terminated:
        if not piece:
            continue
        statement = piece + ";"
        if is_function(statement):
            func = parse_function(statement, line_number=line_number)
            if func is not None:
                methods.append(func)
                continue
        fields.append(FieldDoc(
            declaration=statement,
            line_number=line_number,
            is_private=is_private_declaration(statement),
        ))

    # An unterminated last piece can still be a method with a body
    last = pieces[-1]
    if last and is_function(last):
        func = parse_function(last, line_number=line_number)
        if func is not None:
            methods.append(func)

    return methods, fields


def scan_class(
    lines: Sequence[str],
    start: int,
    comments: Sequence[str] = (),
) -> tuple[Optional[ClassDoc], int]:
    """
    Scan a class, struct or interface starting at its header line.

    Args:
        lines: All lines of the file
        start: Index of the header line
        comments: Doc comment attached to the container itself

    Returns:
        Tuple of (ClassDoc, or None for anonymous containers,
        index of the first line after the body)

    Raises:
        ValueError: If ``lines[start]`` is not a class-like header
    """
    header = lines[start].strip()
    match = match_container_header(header)
    if match is None or match.group("kind") == ENUM_KEYWORD:
        raise ValueError(f"line {start + 1} is not a class header: {header!r}")

    kind, name = parse_header(match)
    code, _ = split_line_comment(header)

    methods: list[FunctionDoc] = []
    fields: list[FieldDoc] = []

    def build() -> Optional[ClassDoc]:
        if not name:
            return None
        return ClassDoc(
            name=name,
            type=ContainerKind(kind),
            comments=tuple(comments),
            methods=tuple(methods),
            fields=tuple(fields),
            line_number=start + 1,
        )

    balance = brace_delta(code)
    seen_open = opens_brace(code)

    # Forward declaration
    if not seen_open and code.endswith(";"):
        return build(), start + 1

    if seen_open:
        closed = balance <= 0
        segment = _body_segment(code, True, closed)
        if segment:
            inline_methods, inline_fields = _inline_members(segment, start + 1)
            methods.extend(inline_methods)
            fields.extend(inline_fields)
        if closed:
            return build(), start + 1

    state = DocCommentState()
    index = start + 1
    while index < len(lines):
        line = lines[index].strip()

        if seen_open:
            next_index = consume_doc_comment(lines, index, state)
            if next_index is not None:
                index = next_index
                continue

        code, trailing = split_line_comment(line)
        delta = brace_delta(code)
        before = balance
        balance += delta
        line_number = index + 1
        index += 1

        if not seen_open:
            if opens_brace(code):
                seen_open = True
                segment = _body_segment(code, True, balance <= 0)
                if segment:
                    inline_methods, inline_fields = _inline_members(segment, line_number)
                    methods.extend(inline_methods)
                    fields.extend(inline_fields)
                if balance <= 0:
                    return build(), index
            elif code.endswith(";"):
                return build(), index
            continue

        if balance <= 0 and (delta < 0 or "}" in code):
            if before == 1:
                segment = _body_segment(code, False, True)
                if segment:
                    inline_methods, inline_fields = _inline_members(segment, line_number)
                    methods.extend(inline_methods)
                    fields.extend(inline_fields)
            return build(), index

        if is_filler(code):
            continue

        if match_container_header(code):
            state.reset()
        elif is_function(code):
            if before == 1:
                func = parse_function(code, attach_comments(state, trailing), line_number)
                if func is not None:
                    methods.append(func)
            else:
                state.discard()
        elif balance == 1 and code.endswith(";"):
            fields.append(FieldDoc(
                declaration=code,
                comments=attach_comments(state, trailing),
                line_number=line_number,
                is_private=is_private_declaration(code),
            ))
        else:
            state.discard()

    return build(), index


def scan_enum(
    lines: Sequence[str],
    start: int,
    comments: Sequence[str] = (),
) -> tuple[Optional[EnumDoc], int]:
    """
    Scan an enum starting at its header line.

    Every body line is split on top-level commas into members; ``Name = value``
    members keep the text after the first ``=`` as their value. Members on one
    line share the pending comment, or the line's trailing ``///`` comment.

    Returns:
        Tuple of (EnumDoc, or None for anonymous enums,
        index of the first line after the body)

    Raises:
        ValueError: If ``lines[start]`` is not an enum header
    """
    header = lines[start].strip()
    match = match_container_header(header)
    if match is None or match.group("kind") != ENUM_KEYWORD:
        raise ValueError(f"line {start + 1} is not an enum header: {header!r}")

    _, name = parse_header(match)
    code, trailing = split_line_comment(header)
    members: list[EnumMemberDoc] = []

    def build() -> Optional[EnumDoc]:
        if not name:
            return None
        return EnumDoc(
            name=name,
            comments=tuple(comments),
            members=tuple(members),
            line_number=start + 1,
        )

    balance = brace_delta(code)
    seen_open = opens_brace(code)

    if not seen_open and code.endswith(";"):
        return build(), start + 1

    state = DocCommentState()

    if seen_open:
        closed = balance <= 0
        segment = _body_segment(code, True, closed)
        if segment:
            members.extend(parse_enum_members(
                segment, start + 1, attach_comments(state, trailing),
            ))
        if closed:
            return build(), start + 1

    index = start + 1
    while index < len(lines):
        line = lines[index].strip()

        if seen_open:
            next_index = consume_doc_comment(lines, index, state)
            if next_index is not None:
                index = next_index
                continue

        code, trailing = split_line_comment(line)
        delta = brace_delta(code)
        before = balance
        balance += delta
        line_number = index + 1
        index += 1

        opened_here = not seen_open and opens_brace(code)
        if not seen_open:
            if not opened_here:
                if code.endswith(";"):
                    return build(), index
                continue
            seen_open = True

        closed_here = balance <= 0 and (delta < 0 or "}" in code)
        if before > 1 and not closed_here:
            # Inside a member initializer that spans lines
            continue

        segment = _body_segment(code, opened_here, closed_here)
        if segment.strip("; \t"):
            members.extend(parse_enum_members(
                segment, line_number, attach_comments(state, trailing),
            ))

        if closed_here:
            return build(), index

    return build(), index
