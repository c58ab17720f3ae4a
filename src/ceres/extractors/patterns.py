"""
Compiled regex patterns for D source extraction.

All patterns use re.VERBOSE for readability and are pre-compiled for performance.
Patterns are grouped by the extractor that uses them.
"""
import re

# =============================================================================
# Comment Patterns
# =============================================================================

DITTO_COMMENT = re.compile(
    r"""
    ^ ///               # line doc marker
    \s* ditto \s*       # the ditto keyword alone
    $
    """,
    re.VERBOSE | re.IGNORECASE,
)

# Interior line prefix of either block form (" * text", " + text")
INTERIOR_LINE_PREFIX = re.compile(r"^[*+]+")

NESTED_TRAILING_CLOSE = re.compile(
    r"""
    \+*                 # any run of plus signs
    \+/                 # closing token
    \s* $
    """,
    re.VERBOSE,
)

# =============================================================================
# Module-Level Declaration Patterns
# =============================================================================

MODULE_DECLARATION = re.compile(
    r"""
    ^ module \s+        # 'module' keyword
    ([\w.]+)            # dotted module name (captured)
    \s* ;?              # optional terminator
    """,
    re.VERBOSE,
)

IMPORT_DECLARATION = re.compile(
    r"""
    ^ (?:(?:public|private|package|static) \s+)*   # optional protection/static
    import \s                                       # 'import' keyword
    """,
    re.VERBOSE,
)

CONTAINER_HEADER = re.compile(
    r"""
    ^ (?:                                          # optional leading attributes
        (?: public | private | protected | package | export
          | final | abstract | static | shared | immutable | const
          | synchronized | deprecated
          | extern \s* \( [^)]* \)
          | @ \w+ (?: \( [^)]* \) )?
        ) \s+
    )*
    (?P<header>
        (?P<kind> class | struct | interface | enum ) \b
        .*
    )
    """,
    re.VERBOSE,
)

SKIPPED_BLOCK = re.compile(
    r"""
    ^ (?: unittest | invariant )   # blocks without documented members
    \b
    """,
    re.VERBOSE,
)

# =============================================================================
# Signature Patterns
# =============================================================================

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)

LEADING_WORDS = re.compile(
    r"""
    ^ ([A-Za-z_]\w*)            # first word (captured)
    (?: \s* ([A-Za-z_]\w*) )?   # optional second word (captured)
    """,
    re.VERBOSE,
)

CONSTRUCTOR_SIGNATURE = re.compile(
    r"""
    ^ (?:(?:public|private|protected|package|export) \s+)?   # optional access modifier
    ~? this                                                   # constructor or destructor
    \s* \(                                                    # parameter list
    """,
    re.VERBOSE,
)

# Array brackets and pointer stars trailing a return type ("string[]", "int*")
TYPE_SUFFIX = re.compile(r"(?:\[\]|\*)+$")
