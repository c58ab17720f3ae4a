"""
Extraction pipeline for parsing D source files.

This module converts files on disk into ModuleDoc trees. Files that cannot
be read are reported and skipped; the rest of the run continues.
"""
import logging
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

from ceres.extractors.d_extractor import DModuleExtractor
from ceres.models import ModuleDoc
from ceres.readers import read_source_file

logger = logging.getLogger(__name__)

__all__ = [
    "extract_module_file",
    "process_files",
]


def extract_module_file(filepath: Path) -> Optional[ModuleDoc]:
    """
    Parse a D file into its documentation tree.

    Args:
        filepath: Path to the .d or .di file

    Returns:
        ModuleDoc, or None if unreadable
    """
    logger.info("Parsing %s", filepath)

    content = read_source_file(filepath)
    if content is None:
        logger.warning("Failed to read source file: %s", filepath)
        return None

    return DModuleExtractor(Path(filepath)).extract(content)


def process_files(paths: Iterable[Path], jobs: int = 1) -> list[ModuleDoc]:
    """
    Parse every file, keeping input order.

    Args:
        paths: Source files to parse
        jobs: Worker processes; 1 parses in this process

    Returns:
        ModuleDoc per readable file, in the order of ``paths``
    """
    paths = [Path(p) for p in paths]

    if jobs > 1 and len(paths) > 1:
        with ProcessPoolExecutor(max_workers=jobs) as executor:
            results = list(executor.map(extract_module_file, paths))
    else:
        results = [extract_module_file(p) for p in paths]

    modules = [module for module in results if module is not None]

    skipped = len(paths) - len(modules)
    if skipped:
        logger.warning("Skipped %d unreadable file(s)", skipped)

    return modules
