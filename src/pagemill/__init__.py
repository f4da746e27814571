"""pagemill — build-time template composition and localization.

Turns a directory of HTML templates (``extends`` / ``block`` inheritance,
``include``, ``{{ variables }}`` and translation markers) into one fully
resolved page per region, language and template.

Basic usage::

    from pagemill import BuildConfig, BuildSession, render_matrix, write_pages

    config = BuildConfig(
        regions=("ru", "ua", "en"),
        languages=("en", "ru", "ua"),
        base_language="ru",
        templates_root="templates",
        locales_root="src/locales",
    )
    session = BuildSession.from_config(config)
    report = render_matrix(session)
    write_pages(report, "dist")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BuildConfig",
    "BuildReport",
    "BuildSession",
    "CatalogError",
    "ConfigurationError",
    "CyclicTemplateError",
    "PageSpec",
    "PagemillError",
    "TemplateError",
    "TemplateNotFound",
    "TemplateSyntaxError",
    "Translator",
    "generate",
    "render_matrix",
    "render_matrix_async",
    "render_page",
    "write_pages",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pagemill`` fast while providing a clean top-level API.
    """
    if name == "BuildConfig":
        from pagemill.config import BuildConfig

        return BuildConfig

    if name == "BuildSession":
        from pagemill.session import BuildSession

        return BuildSession

    if name == "Translator":
        from pagemill.i18n.translate import Translator

        return Translator

    if name in ("PageSpec", "generate"):
        from pagemill.pages import matrix as _matrix

        return getattr(_matrix, name)

    if name in ("BuildReport", "render_matrix", "render_matrix_async", "render_page"):
        from pagemill.pages import render as _render

        return getattr(_render, name)

    if name == "write_pages":
        from pagemill.emit import write_pages

        return write_pages

    if name in (
        "CatalogError",
        "ConfigurationError",
        "CyclicTemplateError",
        "PagemillError",
        "TemplateError",
        "TemplateNotFound",
        "TemplateSyntaxError",
    ):
        from pagemill import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
