"""Per-page render pipeline and matrix rendering.

Every page runs the same four stages::

    resolve inheritance -> inline includes -> interpolate variables -> translate

Pages are independent of each other. A page that fails is recorded as a
:class:`PageFailure` and logged; its siblings still render. Results are
always returned in matrix order, whether pages were rendered one by one
or concurrently in worker threads.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import anyio

from pagemill.errors import PagemillError
from pagemill.pages.matrix import PageSpec
from pagemill.templating.includes import resolve_includes
from pagemill.templating.inheritance import InheritanceResolver
from pagemill.templating.interpolate import interpolate

if TYPE_CHECKING:
    from pagemill.session import BuildSession

logger = logging.getLogger("pagemill.pages")

type PageVariables = Mapping[str, Any] | Callable[[PageSpec], Mapping[str, Any]] | None

DEFAULT_WORKERS = 8


@dataclass(frozen=True, slots=True)
class RenderedPage:
    page: PageSpec
    content: str
    output_path: str


@dataclass(frozen=True, slots=True)
class PageFailure:
    page: PageSpec
    error: Exception

    def __str__(self) -> str:
        return f"{self.page.filename}: {self.error}"


@dataclass(frozen=True, slots=True)
class BuildReport:
    """Outcome of rendering a page matrix, in matrix order."""

    pages: tuple[RenderedPage, ...] = ()
    failures: tuple[PageFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def render_page(session: "BuildSession", page: PageSpec, variables: PageVariables = None) -> RenderedPage:
    """Run the full pipeline for one page.

    Raises:
        PagemillError: For page-fatal problems (missing page template,
            malformed directives, cyclic extends or include chains).
    """
    extra = variables(page) if callable(variables) else variables
    content = InheritanceResolver(session.store).resolve(page.template)
    content = resolve_includes(content, session.store, origin=page.template)
    content = interpolate(
        content,
        session.variables_for(page, extra),
        autoescape=session.config.autoescape,
    )
    content = session.translator.render(content, page.language)
    logger.debug("Rendered %s", page.filename)
    return RenderedPage(
        page=page,
        content=content,
        output_path=page.output_path(session.config.output_pattern),
    )


def _render_or_fail(
    session: "BuildSession",
    page: PageSpec,
    variables: PageVariables,
) -> RenderedPage | PageFailure:
    try:
        return render_page(session, page, variables)
    except (PagemillError, OSError, UnicodeDecodeError) as exc:
        logger.error(
            "Failed to render %s (%s): %s",
            page.filename,
            page.template,
            exc,
            exc_info=session.config.debug,
        )
        return PageFailure(page, exc)


def _report(results: Sequence[RenderedPage | PageFailure]) -> BuildReport:
    return BuildReport(
        pages=tuple(r for r in results if isinstance(r, RenderedPage)),
        failures=tuple(r for r in results if isinstance(r, PageFailure)),
    )


def render_matrix(
    session: "BuildSession",
    pages: Sequence[PageSpec] | None = None,
    variables: PageVariables = None,
) -> BuildReport:
    """Render every page sequentially. Defaults to ``session.pages()``."""
    if pages is None:
        pages = session.pages()
    return _report([_render_or_fail(session, page, variables) for page in pages])


async def render_matrix_async(
    session: "BuildSession",
    pages: Sequence[PageSpec] | None = None,
    variables: PageVariables = None,
    *,
    workers: int | None = None,
) -> BuildReport:
    """Render every page concurrently in anyio worker threads.

    At most *workers* pages render at once (defaults to
    ``session.config.workers``, or ``DEFAULT_WORKERS`` when that is 0).
    The report keeps matrix order regardless of completion order.
    """
    if pages is None:
        pages = session.pages()
    limit = workers or session.config.workers or DEFAULT_WORKERS
    limiter = anyio.CapacityLimiter(limit)
    results: list[RenderedPage | PageFailure | None] = [None] * len(pages)

    async def _render(index: int, page: PageSpec) -> None:
        results[index] = await anyio.to_thread.run_sync(
            _render_or_fail,
            session,
            page,
            variables,
            limiter=limiter,
        )

    async with anyio.create_task_group() as tg:
        for index, page in enumerate(pages):
            tg.start_soon(_render, index, page)

    return _report([r for r in results if r is not None])
