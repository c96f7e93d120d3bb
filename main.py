"""CLI entrypoint: look up arXiv papers by id or URL and create notes."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from arxiv_client import search_articles_async
from models import Article
from notes import build_note, create_note, load_settings
from suggest import DEFAULT_DEBOUNCE_SECONDS, SuggestionEngine


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Retrieve an arXiv paper by ID or URL and turn it into a note")
    parser.add_argument("query", nargs="?", default="", help="arXiv id, abs/pdf URL, or free text")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Read query text line by line from stdin and print suggestions as they arrive",
    )
    parser.add_argument("--create", action="store_true", help="Create a note for the picked suggestion")
    parser.add_argument("--pick", type=int, default=1, help="1-based suggestion to use with --create (default: 1)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of suggestions to show")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="With --create, print the note path and body without writing",
    )
    return parser.parse_args(argv)


def _print_results(articles: list[Article]) -> None:
    for index, article in enumerate(articles, start=1):
        authors = ", ".join(article.authors)
        print(f"{index}. {' '.join(article.title.split())} ({authors})")


def _print_no_results() -> None:
    print("No papers found.")


def _print_cleared() -> None:
    print("(query cleared)")


def make_engine(limit: int | None = None) -> SuggestionEngine:
    """Build a suggestion engine wired to the arXiv client and stdout."""
    debounce_ms = float(os.getenv("SUGGEST_DEBOUNCE_MS", str(DEFAULT_DEBOUNCE_SECONDS * 1000)))
    if limit is None and os.getenv("SUGGEST_LIMIT"):
        limit = int(os.environ["SUGGEST_LIMIT"])

    return SuggestionEngine(
        search_articles_async,
        on_results=_print_results,
        on_no_results=_print_no_results,
        on_cleared=_print_cleared,
        debounce_seconds=debounce_ms / 1000,
        limit=limit,
    )


async def lookup(query: str, limit: int | None = None) -> list[Article]:
    """Run a single query through the engine and return what it published."""
    engine = make_engine(limit=limit)
    engine.on_input(query)
    await engine.wait_settled()
    results = engine.results or []
    engine.close()
    return results


async def interactive(limit: int | None = None) -> list[Article]:
    """Feed stdin lines into one engine session until EOF."""
    engine = make_engine(limit=limit)
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            break
        engine.on_input(line.rstrip("\n"))

    await engine.wait_settled()
    results = engine.results or []
    engine.close()
    return results


def run(args: argparse.Namespace) -> int:
    """Run one CLI invocation; returns the process exit code."""
    if args.interactive:
        articles = asyncio.run(interactive(limit=args.limit))
    else:
        articles = asyncio.run(lookup(args.query, limit=args.limit))

    if not args.create:
        return 0

    if not 1 <= args.pick <= len(articles):
        logging.error("No suggestion #%s to create a note from (have %s)", args.pick, len(articles))
        return 1

    article = articles[args.pick - 1]
    settings = load_settings()

    if args.dry_run:
        path, body = build_note(article, settings)
        logging.info("[dry-run] Would create note: %s", path)
        print(body)
        return 0

    try:
        path = create_note(article, settings)
    except FileExistsError as exc:
        logging.error("Note already exists: %s", exc.filename)
        return 1

    print(path)
    return 0


def main() -> None:
    """Initialize config and execute the CLI."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
