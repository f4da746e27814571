"""``pagemill build`` — render the page matrix and write it to disk.

Exits with code 1 if any page failed to render. Pages that rendered are
still written, so one broken template does not hold back the rest.
"""

import argparse
import sys

import anyio

from pagemill.cli._resolve import open_session
from pagemill.emit import write_pages
from pagemill.pages.render import render_matrix, render_matrix_async


def run_build(args: argparse.Namespace) -> None:
    session = open_session(args.config, workers=args.workers)
    config = session.config

    if config.workers:
        report = anyio.run(render_matrix_async, session)
    else:
        report = render_matrix(session)

    out_dir = args.out or config.out_dir
    written = write_pages(report, out_dir)
    print(f"Wrote {len(written)} pages to {out_dir}")

    if not report.ok:
        for failure in report.failures:
            print(f"FAILED {failure}", file=sys.stderr)
        raise SystemExit(1)
