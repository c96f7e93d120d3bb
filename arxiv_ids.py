"""arXiv identifier extraction from abstract and PDF URLs."""

from __future__ import annotations

import re

# https://arxiv.org/abs/2005.11401v4, https://export.arxiv.org/pdf/2005.11401.pdf, ...
_ARXIV_URL_RE = re.compile(
    r"^https?://(?:www\.|export\.)?arxiv\.org/(?:abs|pdf)/"
    r"(?P<id>\d+(?:\.\d+)*(?:v\d+)?)"
    r"(?:\.pdf)?\Z"
)


def extract_arxiv_id_from_url(text: str, keep_version: bool) -> str | None:
    """Return the bare arXiv id in ``text`` if it is an arXiv abs/pdf URL.

    Anything that is not exactly such a URL returns None, so callers can fall
    back to treating the input as free text. With ``keep_version=False`` the
    ``vN`` suffix is dropped.
    """
    if not isinstance(text, str):
        return None

    match = _ARXIV_URL_RE.match(text)
    if match is None:
        return None

    arxiv_id = match.group("id")
    if not keep_version:
        return arxiv_id.split("v", 1)[0]
    return arxiv_id
