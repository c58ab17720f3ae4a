"""
Tests for saving and loading module trees and the search index.
"""
import json
from pathlib import Path

import pytest

from ceres.constants import MODULE_INDEX_VERSION
from ceres.extractors.d_extractor import extract_from_source
from ceres.serializer import (
    ModuleIndexError,
    build_search_index,
    load_modules,
    page_filename,
    save_modules,
    write_search_index,
)

SOURCE = """\
module app.shapes;

/// Colors.
enum Color { Red, Blue }

/// A circle.
class Circle {
    double radius;
    double area() const { return radius * radius * 3.14; }
}

/// Makes a circle.
Circle make(double r);
"""


@pytest.fixture
def modules():
    return [extract_from_source(SOURCE, "source/app/shapes.d")]


class TestSaveLoad:
    """Tests for the JSON module index."""

    def test_round_trip(self, modules, tmp_path):
        """Saved modules load back equal."""
        path = tmp_path / "modules.json"
        save_modules(modules, path)
        assert load_modules(path) == modules

    def test_file_layout(self, modules, tmp_path):
        """The file records its format version."""
        path = tmp_path / "modules.json"
        save_modules(modules, path)
        data = json.loads(path.read_text())
        assert data["version"] == MODULE_INDEX_VERSION
        assert "created_at" in data
        assert data["modules"][0]["name"] == "app.shapes"

    def test_version_mismatch(self, tmp_path):
        """Unknown versions are rejected."""
        path = tmp_path / "old.json"
        path.write_text(json.dumps({"version": "0.1", "modules": []}))
        with pytest.raises(ModuleIndexError, match="unsupported"):
            load_modules(path)

    def test_not_an_object(self, tmp_path):
        """A JSON list is not a module index."""
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ModuleIndexError):
            load_modules(path)

    def test_malformed_entry(self, tmp_path):
        """Entries missing required keys are reported."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"version": MODULE_INDEX_VERSION, "modules": [{"name": "x"}]}))
        with pytest.raises(ModuleIndexError, match="malformed"):
            load_modules(path)

    def test_not_json(self, tmp_path):
        """Non-JSON input propagates the decode error."""
        path = tmp_path / "text.json"
        path.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            load_modules(path)


class TestSearchIndex:
    """Tests for client-side search entries."""

    def test_page_filename(self):
        """Dots and separators become underscores."""
        assert page_filename("app.core.widget") == "app_core_widget.html"
        assert page_filename("main") == "main.html"

    def test_entries(self, modules):
        """Every documented entity gets an entry with a link."""
        items = build_search_index(modules)
        assert [(i["name"], i["type"]) for i in items] == [
            ("app.shapes", "module"),
            ("Circle", "class"),
            ("area", "method"),
            ("Color", "enum"),
            ("make", "function"),
        ]
        method = items[2]
        assert method["parent"] == "Circle"
        assert method["link"] == "app_shapes.html#Circle.area"
        assert items[0]["link"] == "app_shapes.html"

    def test_write_search_index(self, modules, tmp_path):
        """The index is a JavaScript constant wrapping JSON."""
        path = write_search_index(modules, tmp_path)
        assert path == tmp_path / "search_index.js"
        text = path.read_text()
        assert text.startswith("const searchIndex = ")
        assert text.endswith(";")
        payload = json.loads(text[len("const searchIndex = "):-1])
        assert payload == build_search_index(modules)
