"""Markdown note creation for a chosen Article."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

import chevron

from arxiv_ids import extract_arxiv_id_from_url
from models import Article

DEFAULT_TITLE_TEMPLATE = "{{id}}"

LOGGER = logging.getLogger(__name__)


class AuthorList(list):
    """Author names that render as ``"A, B"`` when used as a plain variable."""

    def __str__(self) -> str:
        return ", ".join(self)


@dataclass(frozen=True, slots=True)
class NoteSettings:
    """Where notes go and which templates shape them."""

    paper_template: str = ""
    title_template: str = DEFAULT_TITLE_TEMPLATE
    notes_dir: str = "."


def load_settings() -> NoteSettings:
    """Read note settings from the environment."""
    return NoteSettings(
        paper_template=os.getenv("PAPER_TEMPLATE", ""),
        title_template=os.getenv("TITLE_TEMPLATE") or DEFAULT_TITLE_TEMPLATE,
        notes_dir=os.getenv("NOTES_DIR", "."),
    )


def make_template_fields(article: Article, today: date | None = None) -> dict[str, Any]:
    """Fields available to note and title templates.

    ``id`` is the bare arXiv number without version; ``url`` keeps the feed id.
    ``authors`` iterates in a section and prints as a comma-separated list.
    """
    today = today or datetime.now(UTC).date()
    bare_id = extract_arxiv_id_from_url(article.id, keep_version=False) or article.id
    return {
        "id": bare_id,
        "url": article.id,
        "date": today.isoformat(),
        "title": article.title,
        "abstract": article.abstract,
        "authors": AuthorList(article.authors),
        "pdf": article.pdf or "",
        "updated": article.updated.isoformat(),
        "published": article.published.isoformat(),
    }


def render_template(template: str, fields: dict[str, Any]) -> str:
    """Render a Mustache template; ``{{name}}`` is HTML-escaped, ``{{{name}}}`` is not."""
    return chevron.render(template, fields)


def note_title(fields: dict[str, Any], title_template: str = DEFAULT_TITLE_TEMPLATE) -> str:
    title = render_template(title_template, fields)
    if not title.endswith(".md"):
        title += ".md"
    return title


def load_template(settings: NoteSettings) -> str:
    """Read the note template; empty when unset or missing."""
    if not settings.paper_template:
        return ""

    path = Path(settings.notes_dir) / f"{settings.paper_template}.md"
    if not path.exists():
        LOGGER.warning("Note template not found: %s", path)
        return ""
    return path.read_text(encoding="utf-8")


def build_note(article: Article, settings: NoteSettings, today: date | None = None) -> tuple[Path, str]:
    """Return the target path and rendered body for an article's note."""
    fields = make_template_fields(article, today=today)
    path = Path(settings.notes_dir) / note_title(fields, settings.title_template)
    body = render_template(load_template(settings), fields)
    return path, body


def create_note(article: Article, settings: NoteSettings, today: date | None = None) -> Path:
    """Write the note for ``article``; an existing file raises FileExistsError."""
    path, body = build_note(article, settings, today=today)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("x", encoding="utf-8") as fh:
        fh.write(body)

    LOGGER.info("Created note %s for %s", path, article.id)
    return path

