"""Debounced, generation-stamped search-as-you-type engine.

One ``SuggestionEngine`` per open query surface. Keystroke text goes in
through ``on_input``; results come out through three callbacks:

- ``on_results(articles)``: a non-empty, de-duplicated suggestion list
- ``on_no_results()``: the query for non-empty text matched nothing
- ``on_cleared()``: the input was cleared

Every keystroke bumps a generation counter. In-flight lookups are never
cancelled; when one finishes, its result is dropped unless its generation
is still the current one, so an old query that answers late can never
replace the list for newer input.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Awaitable, Callable

from arxiv_ids import extract_arxiv_id_from_url
from models import Article

DEFAULT_DEBOUNCE_SECONDS = 0.25

LOGGER = logging.getLogger(__name__)

SearchFn = Callable[[str], Awaitable[list[Article]]]


class SessionState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    IN_FLIGHT = "in_flight"


class SuggestionEngine:
    """Mediates live input against a slow async lookup."""

    def __init__(
        self,
        search: SearchFn,
        *,
        on_results: Callable[[list[Article]], None],
        on_no_results: Callable[[], None],
        on_cleared: Callable[[], None],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        limit: int | None = None,
    ) -> None:
        self._search = search
        self._on_results = on_results
        self._on_no_results = on_no_results
        self._on_cleared = on_cleared
        self._debounce_seconds = debounce_seconds
        self._limit = limit

        self._text = ""
        self._generation = 0
        self._results: list[Article] | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._dispatched_generation: int | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def results(self) -> list[Article] | None:
        """Last published list: None before any query (or after clearing)."""
        return None if self._results is None else list(self._results)

    @property
    def state(self) -> SessionState:
        if self._timer is not None:
            return SessionState.PENDING
        if self._dispatched_generation == self._generation:
            return SessionState.IN_FLIGHT
        return SessionState.IDLE

    def on_input(self, text: str) -> None:
        """Record new input text and (re)arm the debounce timer.

        Must be called from the event loop thread.
        """
        if self._closed:
            raise RuntimeError("SuggestionEngine is closed")

        self._text = text
        self._generation += 1
        self._cancel_timer()

        if not text:
            self._dispatched_generation = None
            self._results = None
            self._on_cleared()
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_seconds, self._fire, self._generation)

    async def wait_settled(self) -> None:
        """Wait until no timer is armed and no lookup is outstanding."""
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.wait(set(self._tasks))
            else:
                await asyncio.sleep(self._debounce_seconds)

    def close(self) -> None:
        """Stop the session; outstanding lookups finish but are discarded."""
        self._cancel_timer()
        self._generation += 1
        self._dispatched_generation = None
        self._closed = True

    def _cancel_timer(self) -> None:
        # Capture and clear before cancelling.
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    def _fire(self, generation: int) -> None:
        self._timer = None
        if generation != self._generation:
            return

        text = self._text
        query = extract_arxiv_id_from_url(text, keep_version=True) or text
        self._dispatched_generation = generation
        LOGGER.debug("Dispatching query generation=%s query=%r", generation, query)

        task = asyncio.get_running_loop().create_task(self._run_query(generation, text, query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(_log_task_failure)

    async def _run_query(self, generation: int, text: str, query: str) -> None:
        try:
            articles = await self._search(query)
        except Exception:  # broad by design: a failed lookup must not break the input loop
            LOGGER.exception("Suggestion query failed for generation=%s query=%r", generation, query)
            articles = []

        if generation != self._generation:
            LOGGER.debug(
                "Discarding stale results generation=%s current=%s", generation, self._generation
            )
            return

        self._dispatched_generation = None
        self._publish(text, articles)

    def _publish(self, text: str, articles: list[Article]) -> None:
        unique: list[Article] = []
        seen: set[str] = set()
        for article in articles:
            if article.id not in seen:
                seen.add(article.id)
                unique.append(article)

        if unique:
            if self._limit and self._limit > 0:
                unique = unique[: self._limit]
            self._results = unique
            self._on_results(list(unique))
            return

        # Empty text never reaches dispatch; see on_input.
        self._results = []
        LOGGER.debug("No suggestions for %r", text)
        self._on_no_results()


def _log_task_failure(task: asyncio.Task[None]) -> None:
    """Report errors raised by consumer callbacks inside a query task."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        LOGGER.error("Publishing suggestions failed", exc_info=exc)
