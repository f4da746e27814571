"""Tests for pagemill.templating.protect — hiding template syntax in comments."""

from pagemill.templating.protect import protect, restore


class TestProtect:
    def test_hides_every_token(self) -> None:
        html = '<p>{{ title }}</p>{% include "nav.html" %}'
        protected = protect(html)
        assert "{{" not in protected
        assert "{%" not in protected
        assert protected.count("<!--template:") == 2

    def test_restore_round_trip(self) -> None:
        html = "<h1>{% translations.get('Привет') %}</h1><p>{{ name }}</p>"
        assert restore(protect(html)) == html

    def test_plain_html_untouched(self) -> None:
        assert protect("<p>hi</p>") == "<p>hi</p>"

    def test_restore_ignores_invalid_payload(self) -> None:
        html = "<!--template:!!!-->"
        assert restore(html) == html

    def test_restore_leaves_other_comments(self) -> None:
        assert restore("<!-- note -->") == "<!-- note -->"
