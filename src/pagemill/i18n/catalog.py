"""Translation catalogs — one nested JSON document per language.

A catalog is a tree whose nodes are either nested mappings or leaf
strings, addressed by dot-separated key paths::

    {"nav": {"home": "Главная"}, "footer": "Контакты"}

    lookup(catalog, "nav.home")  -> "Главная"
    lookup(catalog, "nav")       -> None   (a node, not a leaf)
    lookup(catalog, "nav.about") -> None   (missing)

Catalogs are loaded once per build session and never mutated.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Union

from pagemill.errors import CatalogError

logger = logging.getLogger("pagemill.i18n")

Catalog = Mapping[str, Union["Catalog", str]]


def lookup(catalog: Catalog, path: str) -> str | None:
    """Fold a dotted key path over *catalog*.

    Returns the leaf string, or ``None`` when any segment is missing or
    the path ends on a nested node instead of a leaf.
    """
    node: Catalog | str = catalog
    for segment in path.split("."):
        if not isinstance(node, Mapping):
            return None
        child = node.get(segment)
        if child is None:
            return None
        node = child
    return node if isinstance(node, str) else None


def load_catalog(path: str | Path, language: str) -> Catalog:
    """Load and validate the catalog file for *language*.

    Raises:
        CatalogError: If the file is missing, is not valid JSON, or
            contains anything other than nested objects and strings.
    """
    file = Path(path)
    if not file.is_file():
        raise CatalogError(language, f"file not found: {file}")
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CatalogError(language, f"cannot parse {file}: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogError(language, f"top level of {file} must be an object")
    return _freeze(data, language, ())


def load_catalogs(locales_root: str | Path, languages: Iterable[str]) -> dict[str, Catalog]:
    """Load ``<locales_root>/<lang>.json`` for every language.

    Every declared language must have a catalog; the first failure
    aborts the whole session.
    """
    root = Path(locales_root)
    catalogs: dict[str, Catalog] = {}
    for lang in languages:
        catalogs[lang] = load_catalog(root / f"{lang}.json", lang)
        logger.debug("Loaded catalog %r from %s", lang, root)
    return catalogs


def _freeze(node: dict[str, object], language: str, path: tuple[str, ...]) -> Catalog:
    """Validate a parsed catalog and wrap every level in a read-only proxy."""
    frozen: dict[str, Catalog | str] = {}
    for key, value in node.items():
        if isinstance(value, str):
            frozen[key] = value
        elif isinstance(value, dict):
            frozen[key] = _freeze(value, language, (*path, key))
        else:
            dotted = ".".join((*path, key))
            msg = f"{dotted!r} must be a string or an object, got {type(value).__name__}"
            raise CatalogError(language, msg)
    return MappingProxyType(frozen)
