"""Template inheritance — collapse ``extends`` chains into one document.

A child names its parent and overrides some of the parent's blocks::

    {# base.html #}
    <title>{% block title %}Site{% endblock %}</title>
    {% block content %}{% endblock %}

    {# index.html #}
    {% extends "base.html" %}
    {% block content %}<p>Hello</p>{% endblock %}

Resolution is recursive: the parent is fully resolved against its own
ancestors before the child's overrides are applied, so multi-level
chains collapse correctly. The merged tree keeps its block structure
until the final render, which lets a grandchild override a block that
only the grandparent declares.

A missing parent is not fatal: the child's own content is returned and
an error is logged. A chain that loops back on itself raises
:class:`~pagemill.errors.CyclicTemplateError`.
"""

import logging

from pagemill.errors import CyclicTemplateError
from pagemill.templating.lexer import Block, Node, Text, collect_blocks, find_extends, parse, render
from pagemill.templating.store import TemplateStore, normalize_name

logger = logging.getLogger("pagemill.templating")


class InheritanceResolver:
    """Resolve ``extends`` / ``block`` inheritance against a template store."""

    __slots__ = ("_store",)

    def __init__(self, store: TemplateStore) -> None:
        self._store = store

    def resolve(self, name: str) -> str:
        """Return *name* with its whole inheritance chain merged.

        Block and extends markers are stripped from the result; include
        directives are left for the include stage.

        Raises:
            TemplateNotFound: If *name* itself does not exist.
            TemplateSyntaxError: If a template in the chain is malformed.
            CyclicTemplateError: If the chain refers back to itself.
        """
        return render(self.resolve_nodes(name))

    def resolve_nodes(self, name: str, _chain: tuple[str, ...] = ()) -> tuple[Node, ...]:
        """Like :meth:`resolve`, but return the merged node tree."""
        key = normalize_name(name)
        if key in _chain:
            raise CyclicTemplateError((*_chain, key), kind="extends")
        chain = (*_chain, key)

        nodes = parse(self._store.get_source(key), key)
        extends = find_extends(nodes)
        if extends is None:
            return nodes

        if not self._store.exists(extends.parent):
            logger.error("Parent template not found: %s (extended by %s)", extends.parent, key)
            return nodes

        logger.debug("Resolving %s: extends %s", key, extends.parent)
        parent = self.resolve_nodes(extends.parent, chain)
        overrides = {block_name: _trim(block.body) for block_name, block in collect_blocks(nodes).items()}
        return _merge(parent, overrides)


def _merge(nodes: tuple[Node, ...], overrides: dict[str, tuple[Node, ...]]) -> tuple[Node, ...]:
    """Replace the body of every overridden block, recursing into the rest."""
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Block):
            body = overrides.get(node.name)
            if body is None:
                body = _merge(node.body, overrides)
            merged.append(Block(node.name, body, node.lineno))
        else:
            merged.append(node)
    return tuple(merged)


def _trim(body: tuple[Node, ...]) -> tuple[Node, ...]:
    """Strip whitespace around an override body."""
    nodes = list(body)
    if nodes and isinstance(nodes[0], Text):
        nodes[0] = Text(nodes[0].value.lstrip())
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1] = Text(nodes[-1].value.rstrip())
    return tuple(node for node in nodes if not (isinstance(node, Text) and not node.value))
