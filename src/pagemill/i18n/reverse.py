"""Reverse index — base-language text back to its catalog key path.

Templates embed literal base-language strings. To translate one, the
literal is looked up here to recover its dotted key, which is then
resolved against the target language's catalog.
"""

from collections.abc import Mapping

from pagemill.i18n.catalog import Catalog

ReverseIndex = Mapping[str, str]


def build_reverse_index(catalog: Catalog) -> dict[str, str]:
    """Map every leaf string in *catalog* to its dotted key path.

    Traversal follows document order. When two keys hold the same text,
    the key visited last wins::

        >>> build_reverse_index({"a": {"b": "Hello"}, "c": "World"})
        {'Hello': 'a.b', 'World': 'c'}
    """
    index: dict[str, str] = {}
    _walk(catalog, (), index)
    return index


def _walk(node: Catalog, prefix: tuple[str, ...], index: dict[str, str]) -> None:
    for key, value in node.items():
        path = (*prefix, key)
        if isinstance(value, str):
            index[value] = ".".join(path)
        else:
            _walk(value, path, index)
