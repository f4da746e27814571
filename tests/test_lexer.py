"""Tests for pagemill.templating.lexer — directive scanning and parsing."""

import pytest

from pagemill.errors import TemplateSyntaxError
from pagemill.templating.lexer import (
    Block,
    Extends,
    Include,
    Raw,
    Text,
    TokenKind,
    collect_blocks,
    find_extends,
    parse,
    render,
    tokenize,
)


class TestTokenize:
    def test_text_only(self) -> None:
        tokens = tokenize("<p>{{ name }}</p>")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.TEXT
        assert tokens[0].raw == "<p>{{ name }}</p>"

    def test_directive_tag_and_args(self) -> None:
        tokens = tokenize('a{% include "nav.html" %}b')
        assert [t.kind for t in tokens] == [TokenKind.TEXT, TokenKind.DIRECTIVE, TokenKind.TEXT]
        assert tokens[1].tag == "include"
        assert tokens[1].args == '"nav.html"'
        assert tokens[1].raw == '{% include "nav.html" %}'

    def test_dotted_tag(self) -> None:
        (token,) = tokenize("{% translations.get('Hi') %}")
        assert token.tag == "translations.get"
        assert token.args == "('Hi')"

    def test_line_numbers(self) -> None:
        tokens = tokenize("one\ntwo\n{% block a %}\n{% endblock %}")
        directives = [t for t in tokens if t.kind is TokenKind.DIRECTIVE]
        assert [t.lineno for t in directives] == [3, 4]

    def test_unterminated_directive_passes_through(self) -> None:
        tokens = tokenize("<p>{% block oops</p>")
        assert [(t.kind, t.raw) for t in tokens] == [(TokenKind.TEXT, "<p>{% block oops</p>")]

    def test_round_trip(self) -> None:
        source = '{% extends "b.html" %}\n{% block x %}hi {{ y }}{% endblock %}'
        assert "".join(t.raw for t in tokenize(source)) == source


class TestParse:
    def test_nested_blocks(self) -> None:
        nodes = parse("{% block outer %}a{% block inner %}b{% endblock %}c{% endblock %}")
        assert len(nodes) == 1
        outer = nodes[0]
        assert isinstance(outer, Block)
        assert outer.name == "outer"
        assert outer.body[0] == Text("a")
        inner = outer.body[1]
        assert isinstance(inner, Block)
        assert inner.name == "inner"
        assert inner.body == (Text("b"),)
        assert outer.body[2] == Text("c")

    def test_named_endblock(self) -> None:
        nodes = parse("{% block a %}x{% endblock a %}")
        assert nodes == (Block("a", (Text("x"),), 1),)

    def test_extends_and_include(self) -> None:
        nodes = parse("{% extends 'base.html' %}{% include \"nav.html\" %}")
        assert isinstance(nodes[0], Extends)
        assert nodes[0].parent == "base.html"
        assert isinstance(nodes[1], Include)
        assert nodes[1].path == "nav.html"

    def test_unknown_directive_is_raw(self) -> None:
        (node,) = parse("{% translations.get('Hi') %}")
        assert isinstance(node, Raw)

    def test_extends_without_path_is_raw(self) -> None:
        (node,) = parse("{% extends base %}")
        assert isinstance(node, Raw)

    def test_unclosed_block(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="never closed") as exc_info:
            parse("\n{% block a %}x", "page.html")
        assert exc_info.value.lineno == 2
        assert exc_info.value.name == "page.html"

    def test_stray_endblock(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="without an open block"):
            parse("x{% endblock %}")

    def test_mismatched_endblock_name(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="closes block 'a'"):
            parse("{% block a %}{% endblock b %}")

    def test_invalid_block_name(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="invalid block name"):
            parse("{% block %}{% endblock %}")


class TestHelpers:
    def test_find_first_extends(self) -> None:
        nodes = parse('{% extends "a.html" %}{% extends "b.html" %}')
        extends = find_extends(nodes)
        assert extends is not None
        assert extends.parent == "a.html"

    def test_find_extends_none(self) -> None:
        assert find_extends(parse("plain")) is None

    def test_collect_blocks_last_wins(self) -> None:
        blocks = collect_blocks(parse("{% block a %}1{% endblock %}{% block a %}2{% endblock %}"))
        assert blocks["a"].body == (Text("2"),)

    def test_collect_nested_blocks(self) -> None:
        blocks = collect_blocks(parse("{% block a %}{% block b %}x{% endblock %}{% endblock %}"))
        assert set(blocks) == {"a", "b"}

    def test_render_strips_structure_keeps_others(self) -> None:
        source = (
            '{% extends "base.html" %}{% block a %}<p>{{ x }}</p>'
            '{% include "nav.html" %}{% translations.get(\'Hi\') %}{% endblock %}'
        )
        assert render(parse(source)) == "<p>{{ x }}</p>{% include \"nav.html\" %}{% translations.get('Hi') %}"
