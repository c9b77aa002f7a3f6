"""
Command line entry point.

    $ apiref mylib build/index.html --repo-url https://github.com/org/mylib
    $ python -m apiref mylib/api.py build/index.html --json build/entries.json

Nothing is written unless the whole run succeeds.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ._logging import scoped_logger, setup_logging
from .config import config
from .entry import entries_to_json
from .exceptions import ApirefError
from .generate import generate_entries, write_html
from .render import to_html

_log = scoped_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apiref",
        description="Generate an HTML API reference from a module's public surface",
    )
    parser.add_argument("module", help="Root module: dotted name or path to a .py file")
    parser.add_argument("output", nargs="?", help="Path of the HTML page to write")
    parser.add_argument("--json", metavar="PATH", help="Also write the entry list as JSON")
    parser.add_argument("--repo-url", help="Hosted repository URL used for source links")
    parser.add_argument(
        "--no-source-links", action="store_true", help="Do not resolve source links"
    )
    parser.add_argument(
        "--no-check-urls", action="store_true", help="Do not probe resolved source links"
    )
    parser.add_argument(
        "--print-args", action="store_true", help="Render Arguments/Returns blocks"
    )
    parser.add_argument("--title", help=f"Page title (default: {config.title!r})")
    parser.add_argument("--log-level", help="trace|debug|info|warn|error|off")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.output:
        parser.print_usage(sys.stderr)
        print("apiref: error: no output path given", file=sys.stderr)
        return 1

    if args.log_level:
        setup_logging(args.log_level)

    repo_url = None if args.no_source_links else args.repo_url
    check_urls = config.check_urls
    if args.no_check_urls:
        config.check_urls = False

    try:
        entries = generate_entries(args.module, repo_url=repo_url)
        html = to_html(entries, title=args.title, print_args=args.print_args or None)
    except ApirefError as e:
        _log.error("%s", e, extra={"code": e.code, "details": e.details})
        return 1
    finally:
        config.check_urls = check_urls

    write_html(html, args.output)
    if args.json:
        Path(args.json).write_text(entries_to_json(entries) + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
