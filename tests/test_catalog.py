"""Tests for pagemill.i18n.catalog — loading and dotted-path lookup."""

import json
from pathlib import Path

import pytest

from pagemill.errors import CatalogError
from pagemill.i18n.catalog import load_catalog, load_catalogs, lookup

CATALOG = {"nav": {"home": "Home", "about": {"title": "About us"}}, "footer": "Contacts"}


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


class TestLookup:
    def test_top_level_leaf(self) -> None:
        assert lookup(CATALOG, "footer") == "Contacts"

    def test_nested_leaf(self) -> None:
        assert lookup(CATALOG, "nav.about.title") == "About us"

    def test_missing_leaf(self) -> None:
        assert lookup(CATALOG, "nav.blog") is None

    def test_missing_intermediate(self) -> None:
        assert lookup(CATALOG, "header.title") is None

    def test_path_ending_on_node(self) -> None:
        assert lookup(CATALOG, "nav") is None

    def test_path_through_leaf(self) -> None:
        assert lookup(CATALOG, "footer.more") is None


class TestLoadCatalog:
    def test_loads_nested_strings(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "ru.json", {"nav": {"home": "Главная"}})
        catalog = load_catalog(path, "ru")
        assert lookup(catalog, "nav.home") == "Главная"

    def test_catalog_is_read_only(self, tmp_path: Path) -> None:
        catalog = load_catalog(_write(tmp_path / "en.json", {"a": {"b": "x"}}), "en")
        with pytest.raises(TypeError):
            catalog["a"] = "y"  # type: ignore[index]
        with pytest.raises(TypeError):
            catalog["a"]["b"] = "y"  # type: ignore[index]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="file not found") as exc_info:
            load_catalog(tmp_path / "ua.json", "ua")
        assert exc_info.value.language == "ua"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "en.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="cannot parse"):
            load_catalog(path, "en")

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="must be an object"):
            load_catalog(_write(tmp_path / "en.json", ["a", "b"]), "en")

    def test_rejects_non_string_leaf(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "en.json", {"nav": {"count": 3}})
        with pytest.raises(CatalogError, match="'nav.count'"):
            load_catalog(path, "en")


class TestLoadCatalogs:
    def test_loads_every_language(self, tmp_path: Path) -> None:
        _write(tmp_path / "ru.json", {"a": "Привет"})
        _write(tmp_path / "en.json", {"a": "Hello"})
        catalogs = load_catalogs(tmp_path, ["ru", "en"])
        assert list(catalogs) == ["ru", "en"]
        assert lookup(catalogs["en"], "a") == "Hello"

    def test_missing_language_aborts(self, tmp_path: Path) -> None:
        _write(tmp_path / "ru.json", {"a": "Привет"})
        with pytest.raises(CatalogError) as exc_info:
            load_catalogs(tmp_path, ["ru", "ua"])
        assert exc_info.value.language == "ua"
