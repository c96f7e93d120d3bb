"""Shared typed models for arXiv lookups."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

SortBy = Literal["relevance", "lastUpdatedDate", "submittedDate"]
SortOrder = Literal["ascending", "descending"]


@dataclass(frozen=True, slots=True)
class Article:
    """Normalized arXiv entry decoded from an Atom feed.

    ``id`` is the feed's own identifier URL (e.g. ``http://arxiv.org/abs/2005.11401v4``),
    not the bare arXiv number. ``pdf`` is only set when the feed exposes a
    link titled ``"pdf"``.
    """

    id: str
    updated: datetime
    published: datetime
    title: str
    abstract: str
    authors: tuple[str, ...]
    pdf: str | None = None
