"""
Serialization for extracted documentation.

This module handles saving and loading module trees to/from JSON files and
emitting the search index consumed by the generated site.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from ceres.constants import MODULE_INDEX_VERSION, SEARCH_INDEX_FILE
from ceres.models import ModuleDoc

__all__ = [
    "ModuleIndexError",
    "page_filename",
    "save_modules",
    "load_modules",
    "build_search_index",
    "write_search_index",
]


class ModuleIndexError(ValueError):
    """Raised when a saved module index has an unsupported version or shape."""
    pass


def page_filename(module_name: str) -> str:
    """
    File name of a module's documentation page.

    Examples:
        'app.core.widget' -> 'app_core_widget.html'
    """
    sanitized = module_name.replace(".", "_").replace("/", "_").replace("\\", "_")
    return f"{sanitized}.html"


def save_modules(modules: Iterable[ModuleDoc], filepath: Path | str) -> None:
    """
    Save module trees to a JSON file.

    Args:
        modules: Modules in processing order
        filepath: Path to save the JSON file
    """
    data = {
        "version": MODULE_INDEX_VERSION,
        "created_at": datetime.now().isoformat(),
        "modules": [module.to_dict() for module in modules],
    }

    filepath = Path(filepath)
    with filepath.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_modules(filepath: Path | str) -> list[ModuleDoc]:
    """
    Load module trees saved by save_modules().

    Args:
        filepath: Path to the JSON file

    Returns:
        Modules in their saved order

    Raises:
        ModuleIndexError: If the file has an unknown version or is malformed
        json.JSONDecodeError: If the file is not JSON
    """
    filepath = Path(filepath)
    with filepath.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ModuleIndexError(f"{filepath}: expected a JSON object")

    version = data.get("version")
    if version != MODULE_INDEX_VERSION:
        raise ModuleIndexError(
            f"{filepath}: unsupported module index version {version!r} "
            f"(expected {MODULE_INDEX_VERSION!r})"
        )

    try:
        return [ModuleDoc.from_dict(m) for m in data.get("modules", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise ModuleIndexError(f"{filepath}: malformed module entry: {e}") from e


def build_search_index(modules: Sequence[ModuleDoc]) -> list[dict]:
    """
    Build the entries of the client-side search index.

    Every module, class, method, enum and module-level function gets one
    entry with a link into its module page.

    Returns:
        List of entry dicts in module order
    """
    items: list[dict] = []

    for module in modules:
        page = page_filename(module.name)
        items.append({"name": module.name, "type": "module", "link": page})

        for cls in module.classes:
            items.append({
                "name": cls.name,
                "type": cls.type.value,
                "link": f"{page}#{cls.name}",
                "module": module.name,
            })
            for method in cls.methods:
                items.append({
                    "name": method.name,
                    "type": "method",
                    "parent": cls.name,
                    "link": f"{page}#{cls.name}.{method.name}",
                    "module": module.name,
                })

        for enum in module.enums:
            items.append({
                "name": enum.name,
                "type": "enum",
                "link": f"{page}#{enum.name}",
                "module": module.name,
            })

        for func in module.functions:
            items.append({
                "name": func.name,
                "type": "function",
                "link": f"{page}#{func.name}",
                "module": module.name,
            })

    return items


def write_search_index(modules: Sequence[ModuleDoc], output_dir: Path | str) -> Path:
    """
    Write ``search_index.js`` defining the ``searchIndex`` constant.

    Returns:
        Path of the written file
    """
    path = Path(output_dir) / SEARCH_INDEX_FILE
    payload = json.dumps(build_search_index(modules))
    path.write_text(f"const searchIndex = {payload};", encoding="utf-8")
    return path
