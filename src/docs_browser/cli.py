"""Command-line interface for browsing and searching a documentation corpus."""

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from docs_browser.config import Settings
from docs_browser.corpus import Corpus
from docs_browser.errors import CorpusError
from docs_browser.loader import load_corpus
from docs_browser.renderer import PlainTextRenderer
from docs_browser.resolver import resolve_path, route_for
from docs_browser.search import is_blank_query, search

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``docs-browser`` command.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(prog="docs-browser", description="Browse and search a documentation corpus.")
    parser.add_argument(
        "--corpus",
        type=Path,
        help="JSON corpus file or directory of RST files (default: bundled corpus)",
    )
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search page titles and content")
    search_parser.add_argument("query", nargs="?", default="", help="Free-text query")

    show_parser = subparsers.add_parser("show", help="Display the page at a navigation path")
    show_parser.add_argument("path", nargs="?", default="/", help="Path such as /section-id/page-id")

    subparsers.add_parser("routes", help="List the navigation path of every page")
    return parser


def _cmd_search(corpus: Corpus, query: str) -> int:
    if is_blank_query(query):
        print("Type a query to search the documentation.")
        return 0

    results = search(corpus, query)
    if not results:
        print(f'No results found for "{query}"')
        return 1

    for result in results:
        print(f"{result.route.path}  {result.title}")
        print(f"    {result.snippet}")
    return 0


def _cmd_show(corpus: Corpus, path: str) -> int:
    section, page = resolve_path(corpus, path)
    print(f"{section.title} / {page.title}  ({route_for(section, page).path})")
    print()
    print(PlainTextRenderer().render(page))
    return 0


def _cmd_routes(corpus: Corpus) -> int:
    for section in corpus:
        print(f"{section.title}")
        for page in section.pages:
            print(f"  {route_for(section, page).path}  {page.title}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface.

    Args:
        argv: Arguments excluding the program name; defaults to ``sys.argv``.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    if args.corpus is not None:
        settings = replace(settings, corpus_path=args.corpus)
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())
    settings.configure_logging()

    try:
        corpus = load_corpus(settings.corpus_path)
    except CorpusError as exc:
        logger.error("Cannot load corpus: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "search":
        return _cmd_search(corpus, args.query)
    if args.command == "show":
        return _cmd_show(corpus, args.path)
    return _cmd_routes(corpus)
