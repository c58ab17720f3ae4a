"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest

from ceres import __version__
from ceres.cli import build_parser, main, title_case
from ceres.serializer import load_modules


@pytest.fixture
def dub_project(tmp_path):
    """A small dub project with one module and a license."""
    (tmp_path / "dub.json").write_text(json.dumps({"name": "geo tools"}))
    (tmp_path / "LICENSE").write_text("MIT License\n")
    source = tmp_path / "source" / "geo"
    source.mkdir(parents=True)
    (source / "point.d").write_text(
        "/// Points.\n"
        "module geo.point;\n"
        "\n"
        "/// A point.\n"
        "struct Point {\n"
        "    double x;\n"
        "}\n"
    )
    return tmp_path


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Path and output directory have defaults."""
        args = build_parser().parse_args([])
        assert args.path == Path(".")
        assert args.output == Path("docs")
        assert args.json is None
        assert args.jobs == 1
        assert not args.no_html

    def test_version(self, capsys):
        """--version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_title_case(self):
        """Project names are title-cased for page headings."""
        assert title_case("geo tools") == "Geo Tools"
        assert title_case("") == ""


class TestMain:
    """End-to-end runs of the CLI."""

    def test_generates_site(self, dub_project, tmp_path):
        """A dub project produces index, search index and module pages."""
        out = tmp_path / "site"
        assert main([str(dub_project), "-o", str(out)]) == 0

        index = (out / "index.html").read_text(encoding="utf-8")
        assert "Geo Tools" in index
        assert "MIT" in index
        assert (out / "search_index.js").is_file()
        assert (out / "geo_point.html").is_file()

    def test_json_only(self, dub_project, tmp_path):
        """--json with --no-html saves the tree and writes no pages."""
        out = tmp_path / "site"
        saved = tmp_path / "modules.json"
        assert main([str(dub_project), "-o", str(out), "--json", str(saved), "--no-html"]) == 0

        assert not out.exists()
        modules = load_modules(saved)
        assert [m.name for m in modules] == ["geo.point"]
        assert modules[0].comments == ("Points.",)

    def test_single_file(self, dub_project, tmp_path):
        """A single file target uses the default project name."""
        out = tmp_path / "single"
        target = dub_project / "source" / "geo" / "point.d"
        assert main([str(target), "-o", str(out)]) == 0
        assert "Project" in (out / "index.html").read_text(encoding="utf-8")

    def test_missing_path(self, tmp_path):
        """A missing target exits with status 1."""
        assert main([str(tmp_path / "missing"), "--no-html"]) == 1

    def test_no_sources(self, tmp_path):
        """A directory without D files exits with status 1."""
        (tmp_path / "readme.txt").write_text("nothing here")
        assert main([str(tmp_path), "--no-html"]) == 1

    def test_all_files_unreadable(self, dub_project, tmp_path, monkeypatch):
        """When every source file is skipped no site is written and the exit status is 1."""
        monkeypatch.setattr("ceres.cli.process_files", lambda files, jobs=1: [])
        out = tmp_path / "site"
        assert main([str(dub_project), "-o", str(out)]) == 1
        assert not out.exists()

    def test_invalid_jobs(self, dub_project):
        """--jobs below one is rejected."""
        assert main([str(dub_project), "--jobs", "0", "--no-html"]) == 1
