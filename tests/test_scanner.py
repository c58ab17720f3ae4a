"""
Tests for locating D source files.
"""
import json
from pathlib import Path

import pytest

from ceres.scanner import (
    NoSourceFilesError,
    collect_source_files,
    find_source_files,
    is_source_file,
    should_ignore,
)


def touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestFileFilters:
    """Tests for extension and directory filters."""

    @pytest.mark.parametrize("name, expected", [
        ("app.d", True),
        ("api.di", True),
        ("APP.D", True),
        ("notes.md", False),
        ("dub.json", False),
    ])
    def test_is_source_file(self, name, expected):
        """D sources and interface files are accepted."""
        assert is_source_file(name) is expected

    def test_should_ignore(self):
        """Ignored names and dot-directories are skipped."""
        ignore = frozenset({"docs"})
        assert should_ignore("docs", ignore)
        assert should_ignore(".git", ignore)
        assert not should_ignore("source", ignore)


class TestFindSourceFiles:
    """Tests for recursive discovery."""

    def test_recursive_and_sorted(self, tmp_path):
        """Nested sources are found in sorted order."""
        b = touch(tmp_path / "pkg" / "b.d")
        a = touch(tmp_path / "a.d")
        touch(tmp_path / "readme.txt")
        assert find_source_files(tmp_path) == sorted([a, b])

    def test_ignored_directories(self, tmp_path):
        """Default ignores and hidden directories are pruned."""
        kept = touch(tmp_path / "lib" / "kept.d")
        touch(tmp_path / ".dub" / "cache.d")
        touch(tmp_path / "docs" / "old.d")
        touch(tmp_path / ".hidden" / "x.d")
        assert find_source_files(tmp_path) == [kept]

    def test_custom_ignore(self, tmp_path):
        """Callers may override the ignore set."""
        touch(tmp_path / "gen" / "g.d")
        assert find_source_files(tmp_path, frozenset({"gen"})) == []

    def test_single_file(self, tmp_path):
        """A file root yields itself when it is a source."""
        src = touch(tmp_path / "one.d")
        assert find_source_files(src) == [src]
        assert find_source_files(touch(tmp_path / "x.txt")) == []

    def test_missing_root(self, tmp_path):
        """A missing root yields nothing."""
        assert find_source_files(tmp_path / "nope") == []


class TestCollectSourceFiles:
    """Tests for resolving a command-line target."""

    def test_single_file(self, tmp_path):
        """A file target has no project information."""
        src = touch(tmp_path / "main.d")
        project, files = collect_source_files(src)
        assert project is None
        assert files == [src]

    def test_non_source_file(self, tmp_path):
        """A non-D file target has nothing to document."""
        with pytest.raises(NoSourceFilesError):
            collect_source_files(touch(tmp_path / "notes.txt"))

    def test_missing_target(self, tmp_path):
        """A missing target is an error."""
        with pytest.raises(FileNotFoundError):
            collect_source_files(tmp_path / "missing")

    def test_dub_project_uses_source_paths(self, tmp_path):
        """Only declared source directories are scanned."""
        (tmp_path / "dub.json").write_text(json.dumps({"name": "geo", "sourcePaths": ["lib"]}))
        inside = touch(tmp_path / "lib" / "geo.d")
        touch(tmp_path / "examples" / "demo.d")

        project, files = collect_source_files(tmp_path)
        assert project.is_dub_project
        assert project.project_name == "geo"
        assert files == [inside]

    def test_dub_project_default_directories(self, tmp_path):
        """source/ and src/ are both collected when they exist."""
        (tmp_path / "dub.sdl").write_text('name "geo"\n')
        first = touch(tmp_path / "source" / "a.d")
        second = touch(tmp_path / "src" / "b.d")
        _, files = collect_source_files(tmp_path)
        assert files == [first, second]

    def test_overlapping_source_paths(self, tmp_path):
        """A file reachable from two source paths is listed once."""
        (tmp_path / "dub.json").write_text(json.dumps({"sourcePaths": ["lib", "lib/sub"]}))
        touch(tmp_path / "lib" / "sub" / "x.d")
        _, files = collect_source_files(tmp_path)
        assert len(files) == 1

    def test_plain_directory_scans_everything(self, tmp_path):
        """Without a manifest the whole tree is scanned."""
        src = touch(tmp_path / "anywhere" / "mod.d")
        project, files = collect_source_files(tmp_path)
        assert not project.is_dub_project
        assert files == [src]

    def test_no_sources(self, tmp_path):
        """An empty project raises NoSourceFilesError."""
        (tmp_path / "dub.json").write_text("{}")
        with pytest.raises(NoSourceFilesError) as exc_info:
            collect_source_files(tmp_path)
        assert exc_info.value.target == tmp_path
        assert "No .d files found" in str(exc_info.value)
