"""Write rendered pages to an output directory.

The render pipeline never touches the filesystem; this is the one place
output files are created.
"""

import logging
from pathlib import Path

from pagemill.pages.render import BuildReport

logger = logging.getLogger("pagemill.emit")


def write_pages(report: BuildReport, out_dir: str | Path) -> list[Path]:
    """Write every rendered page in *report* under *out_dir*.

    Parent directories are created as needed. Failed pages are skipped.
    Output paths that would escape *out_dir* raise ``ValueError`` before
    any file is written.

    Returns:
        The written file paths, in matrix order.
    """
    root = Path(out_dir).resolve()
    targets: list[tuple[Path, str]] = []
    for rendered in report.pages:
        path = (root / rendered.output_path).resolve()
        if not path.is_relative_to(root):
            msg = f"Output path {rendered.output_path!r} escapes {root}"
            raise ValueError(msg)
        targets.append((path, rendered.content))

    written: list[Path] = []
    for path, content in targets:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Created file: %s", path)
        written.append(path)
    logger.info("Wrote %d pages to %s", len(written), root)
    return written
