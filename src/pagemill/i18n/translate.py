"""Translation rendering — replace literal-text markers per language.

Templates mark translatable text with the base-language literal itself::

    <h1>{% translations.get('Добро пожаловать') %}</h1>

For the base language the literal is emitted as-is. For every other
language the literal is looked up in the reverse index to find its key
path, and that path is resolved in the target catalog. Any miss along
the way falls back to the literal. Incomplete translations are allowed,
so the fallback is silent (debug-logged only).
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from pagemill.i18n.catalog import Catalog, lookup
from pagemill.i18n.reverse import ReverseIndex, build_reverse_index

logger = logging.getLogger("pagemill.i18n")

# {% translations.get('text') %} or {% translations.get("text") %}
MARKER_RE = re.compile(r"""\{%-?\s*translations\.get\(\s*(['"])(.*?)\1\s*\)\s*-?%\}""", re.DOTALL)


def find_translation(
    text: str,
    language: str,
    reverse_index: ReverseIndex,
    catalogs: Mapping[str, Catalog],
) -> str | None:
    """Resolve *text* into *language*, or ``None`` when any step misses."""
    key = reverse_index.get(text)
    if key is None:
        return None
    catalog = catalogs.get(language)
    if catalog is None:
        return None
    return lookup(catalog, key)


def translate(
    content: str,
    language: str,
    reverse_index: ReverseIndex,
    catalogs: Mapping[str, Catalog],
    *,
    base_language: str,
) -> str:
    """Replace every translation marker in *content* for *language*."""

    def _replace(match: re.Match[str]) -> str:
        text = match.group(2)
        if language == base_language:
            return text
        found = find_translation(text, language, reverse_index, catalogs)
        if found is None:
            logger.debug("No %r translation for %r, keeping literal", language, text)
            return text
        return found

    return MARKER_RE.sub(_replace, content)


@dataclass(frozen=True, slots=True)
class Translator:
    """Reverse index and catalogs bundled for one build session.

    Built once from the base-language catalog and shared read-only by
    every page render.
    """

    base_language: str
    reverse_index: ReverseIndex
    catalogs: Mapping[str, Catalog]

    @classmethod
    def from_catalogs(cls, catalogs: Mapping[str, Catalog], base_language: str) -> "Translator":
        return cls(
            base_language=base_language,
            reverse_index=build_reverse_index(catalogs[base_language]),
            catalogs=catalogs,
        )

    def lookup(self, text: str, language: str) -> str | None:
        """Translation of *text*, or ``None`` if there is none."""
        if language == self.base_language:
            return text
        return find_translation(text, language, self.reverse_index, self.catalogs)

    def gettext(self, text: str, language: str) -> str:
        """Translation of *text*, falling back to *text* itself."""
        found = self.lookup(text, language)
        return text if found is None else found

    def bind(self, language: str) -> Callable[[str], str]:
        """Return a one-argument ``gettext`` fixed to *language*."""

        def _gettext(text: str) -> str:
            return self.gettext(text, language)

        return _gettext

    def render(self, content: str, language: str) -> str:
        return translate(
            content,
            language,
            self.reverse_index,
            self.catalogs,
            base_language=self.base_language,
        )

    def missing(self, content: str, language: str) -> list[str]:
        """Marker literals in *content* that have no *language* translation.

        Each literal is reported once, in order of first appearance.
        """
        found: dict[str, None] = {}
        for match in MARKER_RE.finditer(content):
            text = match.group(2)
            if self.lookup(text, language) is None:
                found.setdefault(text)
        return list(found)
