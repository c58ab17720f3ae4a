"""
Detect dub project metadata: name, source directories and license.

``dub.json`` takes precedence over ``dub.sdl``. Only the fields needed to
locate sources and title the documentation are read.
"""
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from ceres.constants import (
    CUSTOM_LICENSE,
    DEFAULT_SOURCE_DIRS,
    DUB_JSON,
    DUB_SDL,
    LICENSE_FILES,
    LICENSE_MARKERS,
)
from ceres.readers import read_source_file

logger = logging.getLogger(__name__)

__all__ = [
    "ProjectInfo",
    "detect_project",
    "detect_license",
    "parse_dub_json",
    "parse_dub_sdl",
]

# Quoted SDL value ("name", "path with \"quotes\"")
_SDL_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')


@dataclass(frozen=True)
class ProjectInfo:
    """What was learned about a project directory."""
    is_dub_project: bool = False
    project_name: str = ""
    source_directories: tuple[str, ...] = DEFAULT_SOURCE_DIRS
    license_type: str = ""


def detect_license(text: str) -> str:
    """
    Classify license text by its marker phrases.

    Returns:
        License label, or CUSTOM_LICENSE when no marker matches
    """
    for markers, label in LICENSE_MARKERS:
        if any(marker in text for marker in markers):
            return label
    return CUSTOM_LICENSE


def _read_license(directory: Path) -> str:
    for filename in LICENSE_FILES:
        path = directory / filename
        if not path.is_file():
            continue
        text = read_source_file(path)
        if text is None:
            logger.warning("Failed to read %s", path)
            return ""
        return detect_license(text)
    return ""


def parse_dub_json(path: Path) -> tuple[str, tuple[str, ...]]:
    """
    Read ``name`` and ``sourcePaths`` from a dub.json file.

    Returns:
        Tuple of (project name, source directories). Missing or malformed
        fields keep their defaults.
    """
    name = ""
    source_dirs = DEFAULT_SOURCE_DIRS

    text = read_source_file(path)
    if text is None:
        return name, source_dirs

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse %s: %s", path, e)
        return name, source_dirs

    if not isinstance(data, dict):
        logger.warning("Failed to parse %s: top level is not an object", path)
        return name, source_dirs

    if isinstance(data.get("name"), str):
        name = data["name"]

    paths = data.get("sourcePaths")
    if isinstance(paths, list):
        source_dirs = tuple(p for p in paths if isinstance(p, str))
    elif paths is not None:
        logger.warning("Ignoring non-list sourcePaths in %s", path)

    return name, source_dirs


def parse_dub_sdl(path: Path) -> tuple[str, tuple[str, ...]]:
    """
    Read ``name`` and ``sourcePaths`` from a dub.sdl file.

    SDL is read line by line; only top-level ``name "x"`` and
    ``sourcePaths "a" "b"`` directives are understood.
    """
    name = ""
    source_dirs = DEFAULT_SOURCE_DIRS

    text = read_source_file(path) or ""
    for line in text.splitlines():
        words = line.strip().split(maxsplit=1)
        if len(words) < 2:
            continue
        directive, rest = words
        values = _SDL_STRING.findall(rest)
        if directive == "name" and values:
            name = values[0]
        elif directive == "sourcePaths" and values:
            source_dirs = tuple(values)

    return name, source_dirs


def detect_project(path: Path | str) -> ProjectInfo:
    """
    Inspect a directory for dub manifests and a license file.

    Args:
        path: Project root directory

    Returns:
        ProjectInfo; ``is_dub_project`` is False when neither manifest exists
    """
    directory = Path(path)
    license_type = _read_license(directory)

    dub_json = directory / DUB_JSON
    dub_sdl = directory / DUB_SDL

    if dub_json.is_file():
        name, source_dirs = parse_dub_json(dub_json)
    elif dub_sdl.is_file():
        name, source_dirs = parse_dub_sdl(dub_sdl)
    else:
        return ProjectInfo(license_type=license_type)

    return ProjectInfo(
        is_dub_project=True,
        project_name=name,
        source_directories=source_dirs,
        license_type=license_type,
    )
