"""Build configuration.

BuildConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pagemill.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Build configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = BuildConfig(
            regions=("ru", "ua", "en"),
            languages=("en", "ru", "ua"),
            base_language="ru",
        )
    """

    # Page matrix
    regions: tuple[str, ...] = ("ru", "ua", "en")
    languages: tuple[str, ...] = ("en", "ru", "ua")
    base_language: str = "ru"
    templates: tuple[str, ...] = ()  # Empty = discover every page template under templates_root
    # Per-region language sets; when set, its keys replace `regions`
    region_languages: Mapping[str, tuple[str, ...]] | None = None

    # Sources
    templates_root: str | Path = "templates"
    locales_root: str | Path = "src/locales"

    # Rendering
    variables: Mapping[str, Any] = field(default_factory=dict)
    autoescape: bool = False

    # Output
    filename_pattern: str = "{region}-{language}-{template}"
    output_pattern: str = "{filename}"  # e.g. "{region}/{language}/{filename}"
    out_dir: str | Path = "dist"

    # Concurrency
    workers: int = 0  # 0 = render sequentially

    debug: bool = False  # log render failures with their traceback

    @property
    def matrix_regions(self) -> tuple[str, ...]:
        """Regions pages are generated for."""
        if self.region_languages is None:
            return self.regions
        return tuple(self.region_languages)

    @property
    def all_languages(self) -> tuple[str, ...]:
        """Every language some page is rendered in, in first-seen order."""
        if self.region_languages is None:
            return self.languages
        seen: dict[str, None] = dict.fromkeys(self.languages)
        for langs in self.region_languages.values():
            seen.update(dict.fromkeys(langs))
        return tuple(seen)

    def validate(self) -> None:
        """Check cross-field invariants. Raises ``ConfigurationError``."""
        if not self.matrix_regions:
            raise ConfigurationError("At least one region is required")
        if not self.all_languages:
            raise ConfigurationError("At least one language is required")
        if self.base_language not in self.all_languages:
            msg = (
                f"Base language {self.base_language!r} is not one of the "
                f"configured languages {list(self.all_languages)}"
            )
            raise ConfigurationError(msg)
        if self.workers < 0:
            raise ConfigurationError(f"workers must be >= 0, got {self.workers}")
        _check_pattern("filename_pattern", self.filename_pattern, _FILENAME_FIELDS)
        _check_pattern("output_pattern", self.output_pattern, _OUTPUT_FIELDS)


_FILENAME_FIELDS = ("region", "language", "lang", "template")
_OUTPUT_FIELDS = (*_FILENAME_FIELDS, "stem", "filename")


def _check_pattern(option: str, pattern: str, fields: tuple[str, ...]) -> None:
    """Format *pattern* once with placeholder values for *fields*."""
    try:
        pattern.format(**dict.fromkeys(fields, "x"))
    except (KeyError, IndexError, ValueError, AttributeError) as exc:
        msg = f"Invalid {option} {pattern!r}: {exc!r}; available fields are {', '.join(fields)}"
        raise ConfigurationError(msg) from exc
