"""Template stores — resolve a template name to its raw text.

Template names are relative, slash-separated paths (``"index.html"``,
``"partials/nav.html"``) interpreted against the templates root.

Two stores share one protocol:

- :class:`FileSystemStore` reads from a directory and caches each file
  for the lifetime of the store (one build run).
- :class:`DictStore` serves templates from memory, for tests and for
  callers that already hold the sources.
"""

import threading
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Protocol

from pagemill.errors import TemplateNotFound


class TemplateStore(Protocol):
    """Anything that can hand out template sources by name."""

    def get_source(self, name: str) -> str:
        """Return the raw text of *name*. Raises ``TemplateNotFound``."""
        ...

    def exists(self, name: str) -> bool: ...

    def list_templates(self) -> list[str]:
        """Page templates (not partials), sorted by name."""
        ...


def normalize_name(name: str) -> str:
    """Normalise a template name to a clean relative posix path.

    Raises ``TemplateNotFound`` for names that climb out of the root.
    """
    parts: list[str] = []
    for part in PurePosixPath(name.replace("\\", "/")).parts:
        if part in ("", ".", "/"):
            continue
        if part == "..":
            if not parts:
                raise TemplateNotFound(name)
            parts.pop()
            continue
        parts.append(part)
    if not parts:
        raise TemplateNotFound(name)
    return "/".join(parts)


def is_page_template(name: str) -> bool:
    """Whether *name* is a page, as opposed to a partial or layout.

    Any path segment starting with ``_`` or ``.`` marks a partial
    (``_base.html``, ``_partials/nav.html``) or a temporary file.
    """
    parts = name.split("/")
    if any(part.startswith(("_", ".")) for part in parts):
        return False
    return parts[-1].endswith(".html")


class FileSystemStore:
    """Serve templates from a directory on disk.

    Reads are cached per store; content is immutable for a build run, so
    concurrent renders may share one store.

    Security: resolves symlinks and verifies the final path is within the
    templates root.
    """

    __slots__ = ("_cache", "_lock", "_root")

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()
        self._cache: dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path | None:
        path = (self._root / normalize_name(name)).resolve()
        if not path.is_relative_to(self._root):
            return None
        return path

    def get_source(self, name: str) -> str:
        key = normalize_name(name)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        path = self._path(key)
        if path is None or not path.is_file():
            raise TemplateNotFound(name)
        source = path.read_text(encoding="utf-8")

        with self._lock:
            self._cache[key] = source
        return source

    def exists(self, name: str) -> bool:
        try:
            path = self._path(name)
        except TemplateNotFound:
            return False
        return path is not None and path.is_file()

    def list_templates(self) -> list[str]:
        if not self._root.is_dir():
            return []
        names = (p.relative_to(self._root).as_posix() for p in self._root.rglob("*.html") if p.is_file())
        return sorted(n for n in names if is_page_template(n))


class DictStore:
    """Serve templates from an in-memory mapping of name to source."""

    __slots__ = ("_sources",)

    def __init__(self, sources: Mapping[str, str]) -> None:
        self._sources = {normalize_name(name): text for name, text in sources.items()}

    def get_source(self, name: str) -> str:
        try:
            return self._sources[normalize_name(name)]
        except KeyError:
            raise TemplateNotFound(name) from None

    def exists(self, name: str) -> bool:
        try:
            return normalize_name(name) in self._sources
        except TemplateNotFound:
            return False

    def list_templates(self) -> list[str]:
        return sorted(n for n in self._sources if is_page_template(n))
