"""
Classify D lines as function signatures and parse them.

The decision is made by an ordered list of checks. Each check returns True
(accept), False (reject) or None (no opinion, ask the next check), which keeps
the precedence explicit and lets every rule be tested on its own.
"""
from typing import Callable, Optional, Sequence

from ceres.constants import (
    CONSTRUCTOR_NAME,
    CONTROL_FLOW_KEYWORDS,
    DECLARATION_KEYWORDS,
    DESTRUCTOR_NAME,
    GUARDED_CONTROL_KEYWORDS,
    INITIALIZER_KEYWORDS,
    LINKAGE_KEYWORD,
    PRIVATE_KEYWORD,
    SIGNATURE_KEYWORDS,
    STATIC_CONTROL_KEYWORDS,
)
from ceres.extractors.braces import find_closing, split_line_comment, split_top_level
from ceres.extractors.patterns import (
    CONSTRUCTOR_SIGNATURE,
    IDENTIFIER,
    LEADING_WORDS,
    TYPE_SUFFIX,
)
from ceres.models import FunctionDoc

__all__ = [
    "SIGNATURE_CHECKS",
    "is_function",
    "is_valid_identifier",
    "is_private_declaration",
    "find_parameter_paren",
    "parse_function",
    "check_parentheses",
    "check_constructor",
    "check_control_flow",
    "check_assignment",
    "check_signature_shape",
]

Verdict = Optional[bool]


def is_valid_identifier(ident: str) -> bool:
    """A letter or underscore followed by letters, digits or underscores."""
    return IDENTIFIER.fullmatch(ident) is not None


def is_private_declaration(line: str) -> bool:
    """
    True if the declaration starts with the ``private`` access modifier.

    ``private(...)`` package-scoped protection is not treated as private.
    """
    words = line.strip().split(maxsplit=1)
    return bool(words) and words[0] == PRIVATE_KEYWORD


def find_parameter_paren(line: str) -> int:
    """
    Find the parenthesis that opens the parameter list.

    Skips the argument of a leading linkage attribute, so for
    ``extern(C) int f(int x)`` the parenthesis after ``f`` is returned.

    Returns:
        Index of the opening parenthesis, or -1 if there is none
    """
    first = line.find("(")
    if first == -1:
        return -1

    linkage = line.find(LINKAGE_KEYWORD)
    if linkage != -1 and linkage < first:
        between = line[linkage + len(LINKAGE_KEYWORD):first].strip()
        if not between:
            close = line.find(")", first)
            if close != -1:
                return line.find("(", close)
    return first


# =============================================================================
# Signature Checks (evaluated in order)
# =============================================================================

def check_parentheses(line: str) -> Verdict:
    """Reject lines without an opening and a later closing parenthesis."""
    open_pos = line.find("(")
    if open_pos == -1 or line.find(")", open_pos) == -1:
        return False
    return None


def check_constructor(line: str) -> Verdict:
    """Accept ``this(...)`` and ``~this(...)``, optionally with an access modifier."""
    if CONSTRUCTOR_SIGNATURE.match(line):
        return True
    return None


def check_control_flow(line: str) -> Verdict:
    """Reject statements and other declarations that also use parentheses."""
    # "} else if (x) {" closes a block before the keyword
    text = line.lstrip("} \t")
    match = LEADING_WORDS.match(text)
    if match is None:
        return None

    first, second = match.group(1), match.group(2)
    if first in CONTROL_FLOW_KEYWORDS or first in DECLARATION_KEYWORDS:
        return False
    if first == "static" and second in STATIC_CONTROL_KEYWORDS:
        return False
    if first in GUARDED_CONTROL_KEYWORDS and text[match.end(1):].lstrip().startswith("("):
        return False
    return None


def check_assignment(line: str) -> Verdict:
    """
    Reject assignments whose right-hand side calls something.

    ``x = bar(1, 2);`` is rejected here. Lines opening with a type keyword and
    a name (``int x = f(y);``) are left to the shape check.
    """
    assign = line.find("=")
    if assign == -1 or assign > line.find("("):
        return None

    words = line.split()
    if (
        len(words) >= 2
        and words[0] in INITIALIZER_KEYWORDS
        and IDENTIFIER.match(words[1])
    ):
        return None
    return False


def check_signature_shape(line: str) -> Verdict:
    """Decide from the tokens before the parameter list."""
    paren = find_parameter_paren(line)
    if paren <= 0:
        return False

    words = line[:paren].split()
    if not words:
        return False
    if any("." in word or "=" in word for word in words):
        return False

    if len(words) == 1:
        return is_valid_identifier(words[0])

    return_type = TYPE_SUFFIX.sub("", words[-2])
    name = words[-1]

    if return_type in SIGNATURE_KEYWORDS or return_type.startswith("@"):
        if is_valid_identifier(name) or name == DESTRUCTOR_NAME:
            return True

    return is_valid_identifier(return_type) and return_type not in SIGNATURE_KEYWORDS


SIGNATURE_CHECKS: tuple[tuple[str, Callable[[str], Verdict]], ...] = (
    ("parentheses", check_parentheses),
    ("constructor", check_constructor),
    ("control_flow", check_control_flow),
    ("assignment", check_assignment),
    ("signature_shape", check_signature_shape),
)


def is_function(line: str) -> bool:
    """
    Check whether a line is a function or method signature.

    Examples:
        'public int compute(int a, int b)' -> True
        'auto run()'                       -> True
        'this(string s)'                   -> True
        'if (x > 0)'                       -> False
        'return foo();'                    -> False
        'x = bar(1,2);'                    -> False
    """
    code, _ = split_line_comment(line.strip())
    for _name, check in SIGNATURE_CHECKS:
        verdict = check(code)
        if verdict is not None:
            return verdict
    return False


def _parameter_text(code: str, paren: int) -> Optional[str]:
    """Text of the parameter list opening at ``paren``."""
    close = find_closing(code, paren)
    if close == -1:
        close = code.find(")", paren)
        if close == -1:
            return None
        return code[paren + 1:close]

    # Template functions carry the runtime parameters in a second group
    rest = code[close + 1:]
    if rest.lstrip().startswith("("):
        second = close + 1 + (len(rest) - len(rest.lstrip()))
        second_close = find_closing(code, second)
        if second_close != -1:
            return code[second + 1:second_close]

    return code[paren + 1:close]


def parse_function(
    line: str,
    comments: Sequence[str] = (),
    line_number: int = 0,
) -> Optional[FunctionDoc]:
    """
    Parse a signature line into a FunctionDoc.

    Args:
        line: A line accepted by is_function()
        comments: Doc comment paragraphs to attach
        line_number: 1-based line of the signature

    Returns:
        FunctionDoc, or None if no name or parameter list can be found
    """
    code, _ = split_line_comment(line.strip())
    paren = find_parameter_paren(code)
    if paren == -1:
        return None

    params_text = _parameter_text(code, paren)
    if params_text is None:
        return None

    words = code[:paren].split()
    if not words:
        return None

    name = words[-1]
    if name in (CONSTRUCTOR_NAME, DESTRUCTOR_NAME):
        return_type = ""
    elif len(words) >= 2:
        return_type = " ".join(words[:-1])
    else:
        return_type = "void"

    parameters = tuple(p for p in split_top_level(params_text, ",") if p)

    return FunctionDoc(
        name=name,
        return_type=return_type,
        parameters=parameters,
        comments=tuple(comments),
        line_number=line_number,
        is_private=is_private_declaration(code),
    )
