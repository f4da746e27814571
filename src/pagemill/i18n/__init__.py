"""Localization: catalogs, the reverse index, and translation rendering."""

from pagemill.i18n.catalog import Catalog, load_catalog, load_catalogs, lookup
from pagemill.i18n.reverse import ReverseIndex, build_reverse_index
from pagemill.i18n.translate import Translator, translate

__all__ = [
    "Catalog",
    "ReverseIndex",
    "Translator",
    "build_reverse_index",
    "load_catalog",
    "load_catalogs",
    "lookup",
    "translate",
]
