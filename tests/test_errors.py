"""Tests for pagemill.errors — exception hierarchy and error messages."""

from pagemill.errors import (
    CatalogError,
    ConfigurationError,
    CyclicTemplateError,
    PagemillError,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)


class TestHierarchy:
    def test_configuration_error_is_pagemill_error(self) -> None:
        assert issubclass(ConfigurationError, PagemillError)

    def test_catalog_error_is_pagemill_error(self) -> None:
        assert issubclass(CatalogError, PagemillError)

    def test_template_errors_share_a_base(self) -> None:
        assert issubclass(TemplateNotFound, TemplateError)
        assert issubclass(TemplateSyntaxError, TemplateError)
        assert issubclass(CyclicTemplateError, TemplateError)
        assert issubclass(TemplateError, PagemillError)


class TestMessages:
    def test_catalog_error(self) -> None:
        err = CatalogError("ua", "file not found: ua.json")
        assert err.language == "ua"
        assert str(err) == "Catalog 'ua': file not found: ua.json"

    def test_template_not_found(self) -> None:
        err = TemplateNotFound("index.html")
        assert err.name == "index.html"
        assert str(err) == "index.html: template not found"

    def test_syntax_error_with_line(self) -> None:
        err = TemplateSyntaxError("base.html", "block 'x' is never closed", 3)
        assert err.lineno == 3
        assert str(err) == "base.html: block 'x' is never closed (line 3)"

    def test_syntax_error_without_line(self) -> None:
        err = TemplateSyntaxError("base.html", "bad")
        assert err.lineno is None
        assert str(err) == "base.html: bad"

    def test_cyclic_error_names_chain(self) -> None:
        err = CyclicTemplateError(("a.html", "b.html", "a.html"), kind="include")
        assert err.chain == ("a.html", "b.html", "a.html")
        assert err.kind == "include"
        assert str(err) == "a.html: cyclic include chain: a.html -> b.html -> a.html"
