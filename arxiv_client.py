"""arXiv export API client: query URL construction and lookup by id."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import get_args
from urllib.parse import quote, urlencode

import requests

from arxiv_feed import normalize_feed
from feed_decode import decode_feed_xml
from models import Article, SortBy, SortOrder

ARXIV_API_URL = "https://export.arxiv.org/api/query"
DEFAULT_MAX_RESULTS = int(os.getenv("ARXIV_MAX_RESULTS", "10"))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("ARXIV_REQUEST_TIMEOUT_SECONDS", "30"))

LOGGER = logging.getLogger(__name__)


def arxiv_search_url(
    query: str,
    start: int = 0,
    max_results: int | None = None,
    sort_by: SortBy | None = None,
    sort_order: SortOrder | None = None,
) -> str:
    """Build the export API query URL; parameter order is fixed."""
    if sort_by is not None and sort_by not in get_args(SortBy):
        raise ValueError(f"Unsupported sort_by: {sort_by!r}")
    if sort_order is not None and sort_order not in get_args(SortOrder):
        raise ValueError(f"Unsupported sort_order: {sort_order!r}")

    params: list[tuple[str, str | int]] = [
        ("search_query", query),
        ("start", start),
        ("max_results", max_results if max_results is not None else DEFAULT_MAX_RESULTS),
    ]
    if sort_by:
        params.append(("sortBy", sort_by))
    if sort_order:
        params.append(("sortOrder", sort_order))

    return f"{ARXIV_API_URL}?{urlencode(params, quote_via=quote, safe=':')}"


def search_for_articles_by_id(
    identifier: str,
    *,
    start: int = 0,
    max_results: int | None = None,
    sort_by: SortBy | None = None,
    sort_order: SortOrder | None = None,
) -> list[Article]:
    """Look up ``id:<identifier>`` and return the matching Articles.

    Exactly one request is made; failures (``requests.RequestException``,
    ``FeedFormatError``) propagate to the caller. A feed with no entries
    returns an empty list.
    """
    url = arxiv_search_url(
        f"id:{identifier}",
        start=start,
        max_results=max_results,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    LOGGER.debug("arXiv query: %s", url)

    response = requests.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
    response.raise_for_status()

    articles = normalize_feed(decode_feed_xml(response.text))
    LOGGER.info("arXiv lookup: identifier=%s results=%s", identifier, len(articles))
    return articles


async def search_articles_async(query: str) -> list[Article]:
    """Run ``search_for_articles_by_id`` off the event loop."""
    return await asyncio.to_thread(search_for_articles_by_id, query)
