"""Page matrix generation and the per-page render pipeline."""

from pagemill.pages.matrix import PageSpec, generate
from pagemill.pages.render import (
    BuildReport,
    PageFailure,
    RenderedPage,
    render_matrix,
    render_matrix_async,
    render_page,
)

__all__ = [
    "BuildReport",
    "PageFailure",
    "PageSpec",
    "RenderedPage",
    "generate",
    "render_matrix",
    "render_matrix_async",
    "render_page",
]
