"""Tests for pagemill.i18n.reverse — base-language text to key path."""

from pagemill.i18n.reverse import build_reverse_index


class TestBuildReverseIndex:
    def test_nested_and_top_level(self) -> None:
        index = build_reverse_index({"a": {"b": "Hello"}, "c": "World"})
        assert index == {"Hello": "a.b", "World": "c"}

    def test_deep_nesting(self) -> None:
        index = build_reverse_index({"x": {"y": {"z": "Deep"}}})
        assert index["Deep"] == "x.y.z"

    def test_duplicate_text_keeps_last_path(self) -> None:
        index = build_reverse_index({"first": "Same", "group": {"second": "Same"}})
        assert index == {"Same": "group.second"}

    def test_empty_catalog(self) -> None:
        assert build_reverse_index({}) == {}
