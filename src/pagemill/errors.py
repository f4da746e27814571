"""pagemill exception hierarchy.

Shared across the resolvers, the i18n layer, the render pipeline, and the
CLI so every module raises and catches the same types.

Only failures that cannot degrade gracefully are raised. A missing parent
template, a missing include, or a missing translation are logged and
rendered as fallback output instead.
"""


class PagemillError(Exception):
    """Base for all pagemill-specific errors."""


class ConfigurationError(PagemillError):
    """Raised when build configuration is invalid.

    Typically raised by ``BuildConfig.validate()`` or the page matrix
    generator before any page is rendered.
    """


class CatalogError(PagemillError):
    """A declared language catalog is missing, unparsable, or malformed.

    Session-fatal: the reverse index and every page of that language
    depend on it, so ``BuildSession.from_config()`` aborts.
    """

    def __init__(self, language: str, detail: str) -> None:
        self.language = language
        self.detail = detail
        super().__init__(f"Catalog {language!r}: {detail}")


class TemplateError(PagemillError):
    """Base for errors tied to a single template. Page-fatal only."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"{name}: {detail}" if detail else name)


class TemplateNotFound(TemplateError):  # noqa: N818 — mirrors loader conventions
    """The page template itself does not exist in the store."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "template not found")


class TemplateSyntaxError(TemplateError):
    """Directive structure the scanner cannot make sense of.

    Raised for an unclosed ``{% block %}`` or a stray ``{% endblock %}``.
    """

    def __init__(self, name: str, detail: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        where = f" (line {lineno})" if lineno is not None else ""
        super().__init__(name, f"{detail}{where}")


class CyclicTemplateError(TemplateError):
    """An ``extends`` or ``include`` chain refers back to itself."""

    def __init__(self, chain: tuple[str, ...], kind: str = "extends") -> None:
        self.chain = chain
        self.kind = kind
        path = " -> ".join(chain)
        super().__init__(chain[0], f"cyclic {kind} chain: {path}")
