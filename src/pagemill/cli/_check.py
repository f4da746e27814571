"""``pagemill check`` — render every page without writing anything.

Reports pages that failed to render and, per language, the marked
literals that have no translation and so fall back to the base
language. Exits with code 1 if any page failed. Missing translations
alone are reported but do not fail the check.
"""

import argparse
import sys

from pagemill.cli._resolve import open_session
from pagemill.pages.render import render_matrix
from pagemill.templating.includes import resolve_includes
from pagemill.templating.inheritance import InheritanceResolver


def run_check(args: argparse.Namespace) -> None:
    session = open_session(args.config)
    pages = session.pages()
    report = render_matrix(session, pages)

    resolver = InheritanceResolver(session.store)
    missing: dict[str, dict[str, None]] = {}
    failed = {failure.page.template for failure in report.failures}
    for template in session.templates():
        if template in failed:
            continue
        content = resolve_includes(resolver.resolve(template), session.store, origin=template)
        for language in session.config.all_languages:
            for text in session.translator.missing(content, language):
                missing.setdefault(language, {}).setdefault(text)

    for failure in report.failures:
        print(f"FAILED {failure}", file=sys.stderr)
    for language, texts in missing.items():
        print(f"{language}: {len(texts)} untranslated")
        for text in texts:
            print(f"  {text}")

    print(f"{len(report.pages)} pages ok, {len(report.failures)} failed")
    if not report.ok:
        raise SystemExit(1)
