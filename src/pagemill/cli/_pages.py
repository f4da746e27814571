"""``pagemill pages`` — print the page matrix without rendering."""

import argparse

from pagemill.cli._resolve import open_session


def run_pages(args: argparse.Namespace) -> None:
    session = open_session(args.config)
    pattern = session.config.output_pattern
    for page in session.pages():
        print(f"{page.region}\t{page.language}\t{page.template}\t-> {page.output_path(pattern)}")
