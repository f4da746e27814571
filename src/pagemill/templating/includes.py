"""Include resolution — inline ``{% include "path" %}`` directives.

Included files are themselves scanned, so nested includes are inlined
all the way down. Paths are relative to the templates root.

A missing include does not stop the page: the directive is replaced with
an HTML comment naming the path, so the degraded page is easy to spot::

    <!-- Failed to include partials/nav.html (file not found) -->
"""

import logging

from pagemill.errors import CyclicTemplateError, TemplateNotFound
from pagemill.templating.lexer import STRUCTURAL_TAGS, TokenKind, quoted_argument, tokenize
from pagemill.templating.store import TemplateStore, normalize_name

logger = logging.getLogger("pagemill.templating")


def missing_include_marker(path: str) -> str:
    return f"<!-- Failed to include {path} (file not found) -->"


def failed_include_marker(path: str) -> str:
    return f"<!-- Failed to include {path} -->"


def resolve_includes(content: str, store: TemplateStore, *, origin: str | None = None) -> str:
    """Inline every include in *content*, recursively.

    Block, endblock and extends markers carried in by included fragments
    are stripped. All other directives pass through untouched.

    Args:
        content: Template text, usually already inheritance-resolved.
        store: Where include targets are read from.
        origin: Name of the template *content* came from, used in log
            messages. It does not join the cycle check: a layout may
            include the page it wraps.

    Raises:
        CyclicTemplateError: If an include chain refers back to itself.
    """
    return _inline(content, store, (), origin or "<string>")


def _inline(content: str, store: TemplateStore, chain: tuple[str, ...], source_name: str) -> str:
    parts: list[str] = []
    for token in tokenize(content, source_name):
        if token.kind is TokenKind.TEXT:
            parts.append(token.raw)
        elif token.tag == "include":
            path = quoted_argument(token.args)
            if path is None:
                parts.append(token.raw)
            else:
                parts.append(_include(path, store, chain, source_name))
        elif token.tag in STRUCTURAL_TAGS:
            continue
        else:
            parts.append(token.raw)
    return "".join(parts)


def _include(path: str, store: TemplateStore, chain: tuple[str, ...], source_name: str) -> str:
    try:
        key = normalize_name(path)
        if key in chain:
            raise CyclicTemplateError((*chain, key), kind="include")
        source = store.get_source(key)
    except TemplateNotFound:
        logger.error("Include file not found: %s (included from %s)", path, source_name)
        return missing_include_marker(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to include file %s: %s", path, exc)
        return failed_include_marker(path)

    logger.debug("Including %s", key)
    return _inline(source, store, (*chain, key), key)
