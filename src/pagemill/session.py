"""Build session — the load-once, read-many state of one build.

A session is created once from a :class:`~pagemill.config.BuildConfig`:
it loads every catalog, builds the reverse index, and opens the template
store. It is then passed explicitly to every page render. Nothing in it
changes after creation, so renders may share it across threads.

Catalog problems are session-fatal and surface here, before any page is
rendered.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pagemill.config import BuildConfig
from pagemill.i18n.catalog import Catalog, load_catalogs
from pagemill.i18n.reverse import ReverseIndex
from pagemill.i18n.translate import Translator
from pagemill.pages.matrix import PageSpec, generate
from pagemill.templating.store import FileSystemStore, TemplateStore

logger = logging.getLogger("pagemill.pages")


@dataclass(frozen=True, slots=True)
class BuildSession:
    """Immutable state shared by every page of a build."""

    config: BuildConfig
    store: TemplateStore
    translator: Translator

    @classmethod
    def from_config(cls, config: BuildConfig, *, store: TemplateStore | None = None) -> "BuildSession":
        """Validate *config*, load catalogs, and build the reverse index.

        Args:
            config: Build configuration.
            store: Template store to use instead of a
                :class:`FileSystemStore` over ``config.templates_root``.

        Raises:
            ConfigurationError: If *config* is invalid.
            CatalogError: If any declared language catalog cannot be loaded.
        """
        config.validate()
        catalogs = load_catalogs(config.locales_root, config.all_languages)
        translator = Translator.from_catalogs(catalogs, config.base_language)
        logger.info(
            "Session ready: %d catalogs, %d indexed strings",
            len(catalogs),
            len(translator.reverse_index),
        )
        return cls(
            config=config,
            store=store if store is not None else FileSystemStore(config.templates_root),
            translator=translator,
        )

    @property
    def catalogs(self) -> Mapping[str, Catalog]:
        return self.translator.catalogs

    @property
    def reverse_index(self) -> ReverseIndex:
        return self.translator.reverse_index

    def templates(self) -> tuple[str, ...]:
        """Configured page templates, or every page template in the store."""
        if self.config.templates:
            return self.config.templates
        return tuple(self.store.list_templates())

    def pages(self) -> list[PageSpec]:
        """The full page matrix for this session."""
        config = self.config
        languages = config.region_languages if config.region_languages is not None else config.languages
        return generate(
            config.matrix_regions,
            languages,
            self.templates(),
            translator=self.translator,
            pattern=config.filename_pattern,
        )

    def variables_for(self, page: PageSpec, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Variables visible to *page*.

        Build-wide ``config.variables`` first, then *extra*, then the
        page's own ``region``, ``lang`` and ``language``.
        """
        variables: dict[str, Any] = dict(self.config.variables)
        if extra:
            variables.update(extra)
        variables.update(region=page.region, lang=page.language, language=page.language)
        return variables
