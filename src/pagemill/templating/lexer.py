"""Directive scanner and parser for the ``{% ... %}`` mini-language.

The scanner makes a single pass over the source and splits it into text
and directive tokens. The parser then builds a small node tree, tracking
block nesting depth explicitly so nested blocks pair with the right
``endblock``::

    {% block page %}
      <main>{% block content %}default{% endblock %}</main>
    {% endblock page %}

Only the structural directives are interpreted here:

- ``{% extends "base.html" %}``
- ``{% block NAME %}`` ... ``{% endblock %}`` / ``{% endblock NAME %}``
- ``{% include "partials/nav.html" %}``

Every other directive (translation markers, unknown tags) is kept as raw
text for later stages. ``{{ ... }}`` variables are ordinary text here.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from pagemill.errors import TemplateSyntaxError

logger = logging.getLogger("pagemill.templating")

_TAG_RE = re.compile(r"([A-Za-z_][\w.]*)\s*(.*)", re.DOTALL)
_NAME_RE = re.compile(r"\w+")
_QUOTED_RE = re.compile(r"""(['"])(.+?)\1""")

STRUCTURAL_TAGS = frozenset({"extends", "block", "endblock"})


class TokenKind(Enum):
    TEXT = "text"
    DIRECTIVE = "directive"


@dataclass(frozen=True, slots=True)
class Token:
    """A run of text or one ``{% ... %}`` directive.

    Attributes:
        kind: Text or directive.
        raw: The exact source text of the token.
        lineno: 1-based line the token starts on.
        tag: Directive name (``"block"``, ``"include"``, ...). Empty for text.
        args: Everything after the tag, stripped.
    """

    kind: TokenKind
    raw: str
    lineno: int
    tag: str = ""
    args: str = ""


def tokenize(source: str, name: str = "<string>") -> list[Token]:
    """Split *source* into text and directive tokens in one pass.

    An unterminated ``{%`` cannot be parsed into a directive; it and the
    rest of the source are passed through as text.
    """
    tokens: list[Token] = []
    pos = 0
    lineno = 1
    length = len(source)

    while pos < length:
        start = source.find("{%", pos)
        if start == -1:
            tokens.append(Token(TokenKind.TEXT, source[pos:], lineno))
            break
        end = source.find("%}", start + 2)
        if end == -1:
            logger.warning("%s:%d: unterminated '{%%', passing through as text", name, lineno)
            tokens.append(Token(TokenKind.TEXT, source[pos:], lineno))
            break

        if start > pos:
            text = source[pos:start]
            tokens.append(Token(TokenKind.TEXT, text, lineno))
            lineno += text.count("\n")

        raw = source[start : end + 2]
        body = source[start + 2 : end].strip("-").strip()
        tag_match = _TAG_RE.match(body)
        tag, args = (tag_match.group(1), tag_match.group(2).strip()) if tag_match else ("", body)
        tokens.append(Token(TokenKind.DIRECTIVE, raw, lineno, tag, args))
        lineno += raw.count("\n")
        pos = end + 2

    return tokens


def quoted_argument(args: str) -> str | None:
    """Extract the quoted path from ``"path"`` or ``'path'``."""
    match = _QUOTED_RE.match(args)
    return match.group(2) if match else None


# ---------------------------------------------------------------------------
# Node tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Raw:
    """A directive this layer does not interpret, kept verbatim."""

    token: Token


@dataclass(frozen=True, slots=True)
class Extends:
    parent: str
    token: Token


@dataclass(frozen=True, slots=True)
class Include:
    path: str
    token: Token


@dataclass(frozen=True, slots=True)
class Block:
    name: str
    body: tuple["Node", ...]
    lineno: int = 0


type Node = Text | Raw | Extends | Include | Block


def parse(source: str, name: str = "<string>") -> tuple[Node, ...]:
    """Parse *source* into a node tree.

    Raises:
        TemplateSyntaxError: For a block without a name, an ``endblock``
            with no open block or naming a different block, or a block
            left open at the end of the template.
    """
    root: list[Node] = []
    # (block name, children, opening line)
    stack: list[tuple[str, list[Node], int]] = []

    def _children() -> list[Node]:
        return stack[-1][1] if stack else root

    for token in tokenize(source, name):
        if token.kind is TokenKind.TEXT:
            _children().append(Text(token.raw))
            continue

        match token.tag:
            case "block":
                block_name = _NAME_RE.fullmatch(token.args)
                if block_name is None:
                    raise TemplateSyntaxError(name, f"invalid block name {token.args!r}", token.lineno)
                stack.append((block_name.group(0), [], token.lineno))
            case "endblock":
                if not stack:
                    raise TemplateSyntaxError(name, "'endblock' without an open block", token.lineno)
                open_name, body, opened_at = stack.pop()
                if token.args and token.args != open_name:
                    msg = f"'endblock {token.args}' closes block {open_name!r}"
                    raise TemplateSyntaxError(name, msg, token.lineno)
                _children().append(Block(open_name, tuple(body), opened_at))
            case "extends":
                parent = quoted_argument(token.args)
                _children().append(Extends(parent, token) if parent else Raw(token))
            case "include":
                path = quoted_argument(token.args)
                _children().append(Include(path, token) if path else Raw(token))
            case _:
                _children().append(Raw(token))

    if stack:
        open_name, _, opened_at = stack[-1]
        raise TemplateSyntaxError(name, f"block {open_name!r} is never closed", opened_at)
    return tuple(root)


def walk(nodes: tuple[Node, ...]) -> Iterator[Node]:
    """Yield every node depth-first in document order."""
    for node in nodes:
        yield node
        if isinstance(node, Block):
            yield from walk(node.body)


def find_extends(nodes: tuple[Node, ...]) -> Extends | None:
    """The first ``extends`` directive in document order, if any."""
    for node in walk(nodes):
        if isinstance(node, Extends):
            return node
    return None


def collect_blocks(nodes: tuple[Node, ...]) -> dict[str, Block]:
    """Every block declared in *nodes*, nested ones included.

    A name declared twice maps to its last declaration.
    """
    return {node.name: node for node in walk(nodes) if isinstance(node, Block)}


def render(nodes: tuple[Node, ...]) -> str:
    """Flatten a node tree back to text.

    Block and extends markers are dropped; includes and other directives
    are written back verbatim for the stages that handle them.
    """
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(value):
                parts.append(value)
            case Block(_, body):
                parts.append(render(body))
            case Extends():
                pass
            case Include(_, token) | Raw(token):
                parts.append(token.raw)
    return "".join(parts)
