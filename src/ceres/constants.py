"""
Centralized constants for the ceres package.

This module contains:
- Keyword sets used to classify D declarations
- Documentation comment markers
- File extension and directory rules for scanning
- Project detection and rendering settings
"""

# =============================================================================
# Documentation Comment Markers
# =============================================================================

LINE_DOC_MARKER = "///"
BLOCK_DOC_MARKERS: tuple[str, ...] = ("/**", "/*")
NESTED_DOC_MARKERS: tuple[str, ...] = ("/++", "/+")

BLOCK_CLOSE = "*/"
NESTED_OPEN = "/+"
NESTED_CLOSE = "+/"

# =============================================================================
# Declaration Keywords
# =============================================================================

ENUM_KEYWORD = 'enum'

# Leading tokens of lines that look like calls but are never signatures
CONTROL_FLOW_KEYWORDS: frozenset[str] = frozenset({
    'if', 'else', 'while', 'do', 'for', 'foreach', 'foreach_reverse',
    'switch', 'case', 'default', 'try', 'catch', 'finally',
    'assert', 'throw', 'return', 'break', 'continue', 'goto',
    'with', 'version', 'debug',
    'mixin', 'pragma', 'new', 'delete',
})

# Statements only when a parenthesis follows ("synchronized (m) {", "scope(exit)")
GUARDED_CONTROL_KEYWORDS: frozenset[str] = frozenset({'synchronized', 'scope'})

# Other declaration introducers that take parentheses
DECLARATION_KEYWORDS: frozenset[str] = frozenset({
    'import', 'module', 'struct', 'class', 'interface', 'enum', 'union',
    'template', 'alias',
})

# "static if (...)" and friends are compile-time control flow
STATIC_CONTROL_KEYWORDS: frozenset[str] = frozenset({'if', 'assert', 'foreach'})

ACCESS_MODIFIERS: frozenset[str] = frozenset({
    'public', 'private', 'protected', 'package', 'export',
})

PRIVATE_KEYWORD = 'private'

STORAGE_MODIFIERS: frozenset[str] = frozenset({
    'static', 'final', 'override', 'abstract', 'const', 'immutable',
    'shared', 'pure', 'nothrow', 'ref', 'inout', 'scope', 'extern',
    '__gshared', 'synchronized', 'deprecated',
})

PRIMITIVE_TYPES: frozenset[str] = frozenset({
    'void', 'bool', 'byte', 'ubyte', 'short', 'ushort', 'int', 'uint',
    'long', 'ulong', 'float', 'double', 'real', 'char', 'wchar', 'dchar',
    'string', 'wstring', 'dstring', 'size_t', 'ptrdiff_t',
})

# Keywords that may start a variable initialization ("int x = f(y);")
INITIALIZER_KEYWORDS: frozenset[str] = PRIMITIVE_TYPES | {'auto'}

# Tokens accepted in the return-type position of a signature
SIGNATURE_KEYWORDS: frozenset[str] = (
    ACCESS_MODIFIERS | STORAGE_MODIFIERS | PRIMITIVE_TYPES | {'auto'}
)

CONSTRUCTOR_NAME = 'this'
DESTRUCTOR_NAME = '~this'

# Linkage attribute whose parenthesized argument precedes the parameter list
LINKAGE_KEYWORD = 'extern'

# =============================================================================
# File Scanner Constants
# =============================================================================

SOURCE_EXTENSIONS: frozenset[str] = frozenset({'.d', '.di'})

# Directory names skipped when scanning (dot-directories are always skipped)
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({'.dub', 'docs'})

# =============================================================================
# Project Detection
# =============================================================================

DEFAULT_SOURCE_DIRS: tuple[str, ...] = ("source", "src")

DUB_JSON = "dub.json"
DUB_SDL = "dub.sdl"

LICENSE_FILES: tuple[str, ...] = ("LICENSE", "LICENSE.md", "LICENSE.txt")

# (marker phrases, license label), checked in order
LICENSE_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("MIT License",), "MIT"),
    (("Apache License 2.0", "Apache-2.0", "Apache License, Version 2.0"), "Apache 2.0"),
    (("GNU General Public License", "GPL"), "GNU General Public License"),
    (("BSD 3-Clause",), "BSD 3-Clause"),
    (("BSD 2-Clause",), "BSD 2-Clause"),
    (("ISC License",), "ISC"),
    (("Mozilla Public License 2.0",), "MPL 2.0"),
    (("The Unlicense",), "Unlicense"),
)
CUSTOM_LICENSE = "Custom License / Proprietary"

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_OUTPUT_DIR = "docs"
DEFAULT_PROJECT_NAME = "Project"

SEARCH_INDEX_FILE = "search_index.js"
INDEX_PAGE = "index.html"

# Built-in types linked to the language reference
BUILTIN_TYPE_LINKS: dict[str, str] = {
    'string': 'https://dlang.org/phobos/std_string.html',
    'int': 'https://dlang.org/spec/type.html#int',
    'bool': 'https://dlang.org/spec/type.html#bool',
    'void': 'https://dlang.org/spec/type.html#void',
    'float': 'https://dlang.org/spec/type.html#float',
    'double': 'https://dlang.org/spec/type.html#double',
    'size_t': 'https://dlang.org/spec/type.html#size_t',
    'Object': 'https://dlang.org/spec/type.html#Object',
}

# Standard ddoc section headings rendered as headings
DDOC_SECTIONS: frozenset[str] = frozenset({
    'Authors', 'Bugs', 'Date', 'Deprecated', 'Examples', 'Example',
    'History', 'License', 'See_Also', 'Standards', 'Throws', 'Version',
    'Note', 'Notes',
})

# Fence line delimiting ddoc code examples
DDOC_CODE_FENCE = '---'

# =============================================================================
# Serialization
# =============================================================================

# Version string for saved module index files (for format compatibility)
MODULE_INDEX_VERSION = "1.0"
