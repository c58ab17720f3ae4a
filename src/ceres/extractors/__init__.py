"""
Line-oriented extraction of documentation from D source.

Parsing core:
- comments: doc comment recognition and the per-scope ditto register
- braces: brace balance and literal-aware line splitting
- declarations: function signature classification and parsing
- containers: class/struct/interface and enum body scanning
- d_extractor: module driver producing one ModuleDoc per file
"""

from ceres.extractors import braces
from ceres.extractors import comments
from ceres.extractors import declarations
from ceres.extractors import containers
from ceres.extractors import d_extractor

__all__ = [
    "braces",
    "comments",
    "declarations",
    "containers",
    "d_extractor",
]
