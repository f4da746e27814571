"""Tests for pagemill.templating.store — filesystem and in-memory stores."""

from pathlib import Path

import pytest

from pagemill.errors import TemplateNotFound
from pagemill.templating.store import DictStore, FileSystemStore, is_page_template, normalize_name


class TestNormalizeName:
    def test_plain(self) -> None:
        assert normalize_name("index.html") == "index.html"

    def test_dot_segments(self) -> None:
        assert normalize_name("./partials/../partials/nav.html") == "partials/nav.html"

    def test_backslashes(self) -> None:
        assert normalize_name("partials\\nav.html") == "partials/nav.html"

    def test_escaping_root(self) -> None:
        with pytest.raises(TemplateNotFound):
            normalize_name("../secret.html")

    def test_empty(self) -> None:
        with pytest.raises(TemplateNotFound):
            normalize_name("")


class TestIsPageTemplate:
    def test_page(self) -> None:
        assert is_page_template("index.html")
        assert is_page_template("blog/post.html")

    def test_partials_and_hidden(self) -> None:
        assert not is_page_template("_base.html")
        assert not is_page_template("_partials/nav.html")
        assert not is_page_template(".cache/x.html")

    def test_non_html(self) -> None:
        assert not is_page_template("notes.txt")


class TestFileSystemStore:
    def test_reads_source(self, tmp_path: Path) -> None:
        (tmp_path / "index.html").write_text("<h1>Hi</h1>", encoding="utf-8")
        store = FileSystemStore(tmp_path)
        assert store.get_source("index.html") == "<h1>Hi</h1>"

    def test_caches_within_store(self, tmp_path: Path) -> None:
        page = tmp_path / "index.html"
        page.write_text("first", encoding="utf-8")
        store = FileSystemStore(tmp_path)
        assert store.get_source("index.html") == "first"
        page.write_text("second", encoding="utf-8")
        assert store.get_source("index.html") == "first"
        assert FileSystemStore(tmp_path).get_source("index.html") == "second"

    def test_missing(self, tmp_path: Path) -> None:
        store = FileSystemStore(tmp_path)
        with pytest.raises(TemplateNotFound):
            store.get_source("nope.html")
        assert store.exists("nope.html") is False

    def test_traversal_is_not_found(self, tmp_path: Path) -> None:
        root = tmp_path / "templates"
        root.mkdir()
        (tmp_path / "secret.html").write_text("x", encoding="utf-8")
        store = FileSystemStore(root)
        assert store.exists("../secret.html") is False
        with pytest.raises(TemplateNotFound):
            store.get_source("../secret.html")

    def test_list_templates_skips_partials(self, tmp_path: Path) -> None:
        (tmp_path / "blog").mkdir()
        (tmp_path / "_partials").mkdir()
        for name in ("service.html", "index.html", "_base.html", "blog/post.html", "_partials/nav.html"):
            (tmp_path / name).write_text("", encoding="utf-8")
        (tmp_path / "readme.txt").write_text("", encoding="utf-8")
        store = FileSystemStore(tmp_path)
        assert store.list_templates() == ["blog/post.html", "index.html", "service.html"]

    def test_list_templates_missing_root(self, tmp_path: Path) -> None:
        assert FileSystemStore(tmp_path / "absent").list_templates() == []


class TestDictStore:
    def test_reads_normalized_names(self) -> None:
        store = DictStore({"./partials/nav.html": "<nav/>"})
        assert store.get_source("partials/nav.html") == "<nav/>"
        assert store.exists("partials/nav.html")

    def test_missing(self) -> None:
        with pytest.raises(TemplateNotFound):
            DictStore({}).get_source("index.html")

    def test_list_templates(self) -> None:
        store = DictStore({"b.html": "", "a.html": "", "_base.html": ""})
        assert store.list_templates() == ["a.html", "b.html"]
