"""
Catalog search command line.

Usage:
    catalog-search build [CONTENT_DIR] [-o public/search-data.json] [--lenient]
    catalog-search search INDEX_PATH_OR_URL "array map" [--html]
    catalog-search tokens [CONTENT_DIR] [--min-length 3] [--top 20]
    catalog-search serve
"""

import argparse
import asyncio
import logging
import sys

from catalog_search.content.loader import ContentLoader
from catalog_search.core.config import settings
from catalog_search.core.errors import CatalogSearchError
from catalog_search.search.indexer import IndexBuilder, read_index, write_index
from catalog_search.search.render import renderer
from catalog_search.search.searcher import SearchHit, SearchResults, SearchState
from catalog_search.search.session import SearchSession
from catalog_search.search.stats import search_tokens_frequency

logger = logging.getLogger(__name__)


def _build_documents(content_dir: str, strict: bool):
    bundle = ContentLoader(content_dir).load()
    return IndexBuilder().build(
        bundle.snippets, bundle.collections, bundle.languages, strict=strict
    )


def cmd_build(args: argparse.Namespace) -> int:
    documents = _build_documents(args.content_dir, strict=not args.lenient)
    path = write_index(args.output, documents)
    print(f"Done: {len(documents)} documents indexed -> {path}")
    return 0


def _load_session(source: str) -> SearchSession:
    session = SearchSession(index_url=source, timeout=settings.INDEX_FETCH_TIMEOUT_SEC)
    if source.startswith(("http://", "https://")):
        asyncio.run(session.load())
    else:
        session.load_documents(read_index(source))
    return session


def _format_hit(hit: SearchHit) -> str:
    doc = hit.document
    return f"  {doc.title} [{doc.tag}] {doc.url} (score {hit.score:.2f})"


def _print_results(results: SearchResults) -> None:
    if results.state == SearchState.PROMPT:
        print("Start typing a keyphrase to see matching snippets.")
        return
    if results.state == SearchState.NOT_FOUND:
        print(f"No results for the keyphrase '{results.query}'.")
        return

    print(f"{results.total} matches")
    for title, hits in (("Collections", results.collections), ("Snippets", results.snippets)):
        if hits:
            print(f"{title}:")
            for hit in hits:
                print(_format_hit(hit))


def cmd_search(args: argparse.Namespace) -> int:
    session = _load_session(args.index)
    results = session.search(args.query)
    if results is None:
        print(f"Search index could not be loaded from {args.index}", file=sys.stderr)
        return 1

    if args.html:
        print(renderer.render(results))
    else:
        _print_results(results)
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    documents = _build_documents(args.content_dir, strict=False)
    frequencies = search_tokens_frequency(documents, min_length=args.min_length)
    for token, count in list(frequencies.items())[: args.top]:
        print(f"{count:6d}  {token}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from catalog_search.api.main import run

    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-search", description="Build and query the catalog search index"
    )
    parser.add_argument(
        "--log-level", default=settings.LOG_LEVEL, help="Logging level (default: INFO)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build the search index artifact")
    build.add_argument("content_dir", nargs="?", default=str(settings.CONTENT_DIR))
    build.add_argument("-o", "--output", default=str(settings.INDEX_PATH))
    build.add_argument(
        "--lenient", action="store_true", help="Skip invalid records instead of failing"
    )
    build.set_defaults(func=cmd_build)

    search = sub.add_parser("search", help="Query a search index file or URL")
    search.add_argument("index", help="Path or http(s) URL of search-data.json")
    search.add_argument("query")
    search.add_argument("--html", action="store_true", help="Print the HTML fragment")
    search.set_defaults(func=cmd_search)

    tokens = sub.add_parser("tokens", help="Most frequent snippet search tokens")
    tokens.add_argument("content_dir", nargs="?", default=str(settings.CONTENT_DIR))
    tokens.add_argument("--min-length", type=int, default=3)
    tokens.add_argument("--top", type=int, default=20)
    tokens.set_defaults(func=cmd_tokens)

    serve = sub.add_parser("serve", help="Run the HTTP search service")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    try:
        return args.func(args)
    except (CatalogSearchError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
