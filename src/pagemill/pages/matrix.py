"""Page matrix — one page per (region, language, template) triple.

The generator is pure data construction: no I/O, no rendering. Order is
region outermost, language in the middle, template innermost, so the
same inputs always produce the same sequence of pages.

Each :class:`PageSpec` carries a ``gettext`` accessor already bound to
its language, so code rendering a page never passes the language around.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from pagemill.errors import ConfigurationError
from pagemill.i18n.translate import Translator

DEFAULT_FILENAME_PATTERN = "{region}-{language}-{template}"


def _identity(text: str) -> str:
    return text


@dataclass(frozen=True, slots=True)
class PageSpec:
    """One entry of the page matrix.

    Attributes:
        region: Region code (``"ru"``).
        language: Language code (``"en"``).
        template: Template name relative to the templates root.
        filename: Output filename derived from the triple.
        gettext: Translate a base-language literal into ``language``.
    """

    region: str
    language: str
    template: str
    filename: str
    gettext: Callable[[str], str] = field(default=_identity, compare=False, repr=False)

    def output_path(self, pattern: str = "{filename}") -> str:
        """Relative output path for this page.

        *pattern* may use ``{region}``, ``{language}``, ``{template}``,
        ``{stem}`` and ``{filename}``.
        """
        try:
            return pattern.format(**self._fields())
        except (KeyError, IndexError, ValueError, AttributeError) as exc:
            raise ConfigurationError(f"Invalid output pattern {pattern!r}: {exc!r}") from exc

    def _fields(self) -> dict[str, str]:
        stem = self.template.rsplit("/", 1)[-1]
        stem = stem.removesuffix(".html")
        return {
            "region": self.region,
            "language": self.language,
            "lang": self.language,
            "template": self.template,
            "stem": stem,
            "filename": self.filename,
        }


def derive_filename(region: str, language: str, template: str, pattern: str = DEFAULT_FILENAME_PATTERN) -> str:
    """Build the output filename for a triple.

    Template subdirectories are flattened with ``-`` so every filename is
    a single path segment: ``("ru", "en", "blog/post.html")`` becomes
    ``"ru-en-blog-post.html"``.
    """
    flat = template.replace("/", "-")
    try:
        return pattern.format(region=region, language=language, lang=language, template=flat)
    except (KeyError, IndexError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid filename pattern {pattern!r}: {exc}") from exc


def generate(
    regions: Sequence[str],
    languages: Sequence[str] | Mapping[str, Sequence[str]],
    templates: Sequence[str],
    *,
    translator: Translator | None = None,
    pattern: str = DEFAULT_FILENAME_PATTERN,
) -> list[PageSpec]:
    """Build the page matrix.

    Args:
        regions: Region codes, outermost loop.
        languages: Language codes for every region, or a mapping of
            region to its own language list.
        templates: Template names, innermost loop.
        translator: Source of each page's bound ``gettext``. Without one,
            ``gettext`` returns its input.
        pattern: Filename pattern using ``{region}``, ``{language}`` and
            ``{template}``.

    Raises:
        ConfigurationError: On duplicate inputs, or when two triples would
            write to the same filename.
    """
    _check_unique("region", regions)
    _check_unique("template", templates)

    accessors: dict[str, Callable[[str], str]] = {}
    pages: list[PageSpec] = []
    seen: dict[str, tuple[str, str, str]] = {}

    for region in regions:
        region_languages = _languages_for(region, languages)
        _check_unique(f"language (region {region!r})", region_languages)
        for language in region_languages:
            if language not in accessors:
                accessors[language] = translator.bind(language) if translator else _identity
            for template in templates:
                filename = derive_filename(region, language, template, pattern)
                if filename in seen:
                    msg = f"Pages {seen[filename]} and {(region, language, template)} both produce {filename!r}"
                    raise ConfigurationError(msg)
                seen[filename] = (region, language, template)
                pages.append(PageSpec(region, language, template, filename, accessors[language]))
    return pages


def _languages_for(region: str, languages: Sequence[str] | Mapping[str, Sequence[str]]) -> Sequence[str]:
    if isinstance(languages, Mapping):
        try:
            return languages[region]
        except KeyError:
            raise ConfigurationError(f"No languages configured for region {region!r}") from None
    return languages


def _check_unique(kind: str, values: Iterable[str]) -> None:
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise ConfigurationError(f"Duplicate {kind} {value!r}")
        seen.add(value)
