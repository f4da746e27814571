"""pagemill CLI — render, list, and check a page matrix.

Entry point registered as ``pagemill`` in ``pyproject.toml``::

    [project.scripts]
    pagemill = "pagemill.cli:main"
"""

import argparse
import logging
import sys


def log_level(verbose: int) -> int:
    """Map the ``-v`` count to a logging level: none, ``-v`` or ``-vv``."""
    return {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``pagemill`` command."""
    parser = argparse.ArgumentParser(
        prog="pagemill",
        description="pagemill — build-time template composition and localization.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more (-v for info, -vv for debug)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- pagemill build ---------------------------------------------------
    build_parser = subparsers.add_parser("build", help="Render every page and write it to disk")
    build_parser.add_argument("config", help="Import string (e.g. site:config)")
    build_parser.add_argument("--out", default=None, help="Output directory (overrides config.out_dir)")
    build_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render pages concurrently in N worker threads (0 = sequential)",
    )

    # -- pagemill pages ---------------------------------------------------
    pages_parser = subparsers.add_parser("pages", help="List the page matrix")
    pages_parser.add_argument("config", help="Import string (e.g. site:config)")

    # -- pagemill check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Render without writing; report failures and missing translations")
    check_parser.add_argument("config", help="Import string (e.g. site:config)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=log_level(args.verbose), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "build":
        from pagemill.cli._build import run_build

        run_build(args)
    elif args.command == "pages":
        from pagemill.cli._pages import run_pages

        run_pages(args)
    elif args.command == "check":
        from pagemill.cli._check import run_check

        run_check(args)
