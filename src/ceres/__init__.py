"""
ceres - HTML documentation generator for D projects.

Recovers modules, classes, enums, functions and their doc comments from D
source with line-oriented heuristics, then renders a static site.
"""

__version__ = "0.0.1"

# Models
from ceres.models import (
    ContainerKind,
    FunctionDoc,
    FieldDoc,
    ClassDoc,
    EnumMemberDoc,
    EnumDoc,
    ModuleDoc,
)

# Core functionality
from ceres.extractors.d_extractor import DModuleExtractor, extract_from_source
from ceres.extractor import extract_module_file, process_files
from ceres.scanner import NoSourceFilesError, collect_source_files, find_source_files
from ceres.project import ProjectInfo, detect_project

# Output
from ceres.serializer import save_modules, load_modules, build_search_index
from ceres.generator import HTMLGenerator

# File readers
from ceres.readers import read_source_file

__all__ = [
    # Version
    "__version__",
    # Enums
    "ContainerKind",
    # Models
    "FunctionDoc",
    "FieldDoc",
    "ClassDoc",
    "EnumMemberDoc",
    "EnumDoc",
    "ModuleDoc",
    # Extraction
    "DModuleExtractor",
    "extract_from_source",
    "extract_module_file",
    "process_files",
    # Scanner
    "NoSourceFilesError",
    "collect_source_files",
    "find_source_files",
    # Project
    "ProjectInfo",
    "detect_project",
    # Output
    "save_modules",
    "load_modules",
    "build_search_index",
    "HTMLGenerator",
    # Readers
    "read_source_file",
]
