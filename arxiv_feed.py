"""Normalize decoded arXiv Atom feeds into Article records."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from feed_decode import ATTRIBUTES_KEY, TEXT_KEY, FeedFormatError
from models import Article

LOGGER = logging.getLogger(__name__)


class FeedEntryError(FeedFormatError):
    """Raised when a single feed entry cannot be turned into an Article."""


def as_list(value: Any) -> list[Any]:
    """Coerce a field that may be absent, one bare element, or a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def normalize_feed(parsed_feed: dict[str, Any]) -> list[Article]:
    """Convert a decoded feed into Articles, preserving entry order.

    Entries that fail to convert are logged and dropped; the rest of the
    batch is still returned.
    """
    feed = parsed_feed.get("feed") if isinstance(parsed_feed, dict) else None
    if feed is None:
        raise FeedFormatError("Decoded document has no <feed> root")
    if not isinstance(feed, dict):
        # <feed/> with no children decodes to a bare string
        return []

    entries = as_list(feed.get("entry"))
    articles: list[Article] = []
    for raw in entries:
        try:
            articles.append(article_from_raw(raw))
        except FeedEntryError as exc:
            LOGGER.warning("Dropping feed entry: %s", exc)

    LOGGER.debug("Normalized feed: entries=%s articles=%s", len(entries), len(articles))
    return articles


def article_from_raw(raw: Any) -> Article:
    """Build one Article from a decoded ``<entry>`` node."""
    if not isinstance(raw, dict):
        raise FeedEntryError(f"Unexpected entry shape: {raw!r}")

    article_id = _text(raw.get("id"))
    if not article_id:
        raise FeedEntryError("Entry has no <id>")

    authors = tuple(
        name
        for author in as_list(raw.get("author"))
        if (name := _text(author.get("name") if isinstance(author, dict) else author))
    )
    if not authors:
        raise FeedEntryError(f"Entry {article_id} has no authors")

    links = [link.get(ATTRIBUTES_KEY, {}) for link in as_list(raw.get("link")) if isinstance(link, dict)]
    pdf = next((link.get("href") for link in links if link.get("title") == "pdf"), None)

    return Article(
        id=article_id,
        updated=_parse_timestamp(raw.get("updated"), field_name="updated", entry_id=article_id),
        published=_parse_timestamp(raw.get("published"), field_name="published", entry_id=article_id),
        title=_text(raw.get("title")),
        abstract=_text(raw.get("summary")),
        authors=authors,
        pdf=pdf,
    )


def _parse_timestamp(value: Any, *, field_name: str, entry_id: str) -> datetime:
    raw = _text(value).strip()
    if not raw:
        raise FeedEntryError(f"Entry {entry_id} has no <{field_name}> timestamp")

    # arXiv returns RFC3339 timestamps with a trailing Z.
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise FeedEntryError(f"Entry {entry_id} has malformed <{field_name}>: {raw!r}") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get(TEXT_KEY)
        return text if isinstance(text, str) else ""
    return ""
