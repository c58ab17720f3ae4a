"""
File scanner for locating D source files.

Provides utilities for:
- Recursively scanning directories for .d/.di files
- Collecting the sources of a dub project from its declared source paths
"""
import logging
from pathlib import Path
from typing import Iterator, Optional

from rich.console import Console

from ceres.constants import DEFAULT_IGNORE_DIRS, DUB_JSON, DUB_SDL, SOURCE_EXTENSIONS
from ceres.project import ProjectInfo, detect_project

logger = logging.getLogger(__name__)

console = Console(stderr=True)

__all__ = [
    "NoSourceFilesError",
    "is_source_file",
    "should_ignore",
    "iter_source_files",
    "find_source_files",
    "collect_source_files",
]


class NoSourceFilesError(Exception):
    """Raised when a target contains no D source files."""

    def __init__(self, target: Path):
        self.target = target
        super().__init__(f"No .d files found in {target}")


def is_source_file(filepath: Path | str) -> bool:
    """
    Check if a file is a D source or interface file based on its extension.

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        True if file has a D extension, False otherwise
    """
    return Path(filepath).suffix.lower() in SOURCE_EXTENSIONS


def should_ignore(name: str, ignore_dirs: frozenset[str]) -> bool:
    """
    Check if a directory should be skipped.

    Args:
        name: Directory name (not a full path)
        ignore_dirs: Set of directory names to ignore

    Returns:
        True for ignored names and for hidden (dot) directories
    """
    return name in ignore_dirs or name.startswith('.')


def iter_source_files(
    directory: Path,
    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS,
) -> Iterator[Path]:
    """
    Walk a directory tree and yield D files, pruning ignored directories.

    Yields:
        Path objects pointing to source files, in directory order
    """
    try:
        entries = sorted(directory.iterdir())
    except PermissionError:
        console.print(f"[yellow]Warning:[/] Permission denied for {directory}", style="dim")
        return

    for entry in entries:
        try:
            if entry.is_dir():
                if not should_ignore(entry.name, ignore_dirs):
                    yield from iter_source_files(entry, ignore_dirs)
            elif entry.is_file() and is_source_file(entry):
                yield entry
        except PermissionError:
            console.print(f"[yellow]Warning:[/] Permission denied for {entry}", style="dim")
            continue


def find_source_files(
    root: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> list[Path]:
    """
    Find D files under a path.

    Args:
        root: A D file or a directory
        ignore_dirs: Directory names to skip (default: DEFAULT_IGNORE_DIRS)

    Returns:
        ``[root]`` for a D file, the sorted sources of a directory, otherwise
        an empty list
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    path = Path(root)
    if path.is_file():
        return [path] if is_source_file(path) else []
    if not path.is_dir():
        return []
    return sorted(iter_source_files(path, ignore_dirs))


def collect_source_files(target: Path | str) -> tuple[Optional[ProjectInfo], list[Path]]:
    """
    Collect the files to document for a command-line target.

    A single file is documented on its own. A dub project contributes the
    files under each of its existing source directories; any other directory
    is scanned as a whole.

    Args:
        target: File or directory

    Returns:
        Tuple of (ProjectInfo or None for single files, source files)

    Raises:
        FileNotFoundError: If the target does not exist
        NoSourceFilesError: If no D files are found
    """
    path = Path(target)
    if not path.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")

    if path.is_file():
        files = find_source_files(path)
        if not files:
            raise NoSourceFilesError(path)
        return None, files

    project = detect_project(path)
    files = []

    if project.is_dub_project:
        seen: set[Path] = set()
        for source_dir in project.source_directories:
            full_path = path / source_dir
            if not full_path.exists():
                logger.debug("Declared source path %s does not exist", full_path)
                continue
            for filepath in find_source_files(full_path):
                if filepath not in seen:
                    seen.add(filepath)
                    files.append(filepath)
    else:
        logger.warning("No %s or %s found in %s, scanning for .d files", DUB_JSON, DUB_SDL, path)
        files = find_source_files(path)

    if not files:
        raise NoSourceFilesError(path)

    return project, files
