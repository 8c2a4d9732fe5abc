"""Dual-collection search session and paginator.

SearchPaginator owns one SearchSession and is the only writer to it. It runs
two independent prefix streams (posts, users), each with its own cursor,
exhaustion flag and loading flag, and exposes search(term) / load_more(kind).

Every search bumps a generation counter; a response whose generation is no
longer current is dropped, so results for a superseded term never reach the
session.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from blogsearch.application.dtos.search import PaginationCursor, SearchHit, SearchPage
from blogsearch.application.services.query_planner import build_range_query, page_is_exhausted
from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import SearchFailedException, ValidationException
from blogsearch.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)
from blogsearch.shared.utils.text import is_blank, normalize_search_text

if TYPE_CHECKING:
    from blogsearch.application.interfaces.repositories import ISearchRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


@dataclass
class KindStream:
    """Pagination state of one entity kind within a session."""

    items: list[SearchHit] = field(default_factory=list)
    cursor: PaginationCursor | None = None
    exhausted: bool = False
    loading: bool = False


def _new_streams() -> dict[EntityKind, KindStream]:
    return {kind: KindStream() for kind in EntityKind}


@dataclass
class SearchSession:
    """Client-side search state for the current term.

    results is the posts section followed by the users section; within a
    section items keep fetch order (ascending search key).
    """

    term: str = ""
    normalized_term: str = ""
    streams: dict[EntityKind, KindStream] = field(default_factory=_new_streams)
    error: SearchFailedException | None = None
    completed: bool = False
    generation: int = 0

    def stream(self, kind: EntityKind) -> KindStream:
        return self.streams[kind]

    @property
    def results(self) -> list[SearchHit]:
        out: list[SearchHit] = []
        for kind in EntityKind:
            out.extend(self.streams[kind].items)
        return out

    @property
    def loading(self) -> bool:
        return any(s.loading for s in self.streams.values())

    @property
    def has_more(self) -> bool:
        return bool(self.term) and any(not s.exhausted for s in self.streams.values())

    @property
    def no_results(self) -> bool:
        """Completed without error and nothing matched (distinct from loading)."""
        return (
            self.completed
            and not self.loading
            and self.error is None
            and not any(s.items for s in self.streams.values())
        )


class SearchPaginator:
    """Runs prefix searches over posts and users and pages through each kind.

    Args:
        search_repo: Range-scan port over both collections.
        page_size: Items requested per kind per page.
        on_change: Optional callback invoked with the session after every
            state change (loading started, page applied, error, reset).
    """

    def __init__(
        self,
        search_repo: ISearchRepository,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_change: Callable[[SearchSession], None] | None = None,
    ) -> None:
        if page_size < 1:
            raise ValidationException("page_size must be >= 1", field="page_size")
        self._repo = search_repo
        self._page_size = page_size
        self._on_change = on_change
        self._generation = 0
        self._session = SearchSession()

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def page_size(self) -> int:
        return self._page_size

    def clear(self) -> SearchSession:
        """Reset to an empty session; responses still in flight become stale."""
        self._generation += 1
        self._session = SearchSession(generation=self._generation)
        self._notify()
        return self._session

    @traced("search.session.search")
    async def search(self, term: str) -> SearchSession:
        """Start a fresh session for term and fetch the first page of both kinds.

        A blank term clears the session without touching the store. On
        failure the session carries the error; results already shown for the
        same term stay, a new term is left empty.
        """
        if is_blank(term):
            return self.clear()

        normalized = normalize_search_text(term)
        self._generation += 1
        generation = self._generation
        previous = self._session
        session = SearchSession(term=term, normalized_term=normalized, generation=generation)
        if previous.completed and previous.normalized_term == normalized:
            # Re-running the same term keeps what is on screen until new pages land.
            for kind, old in previous.streams.items():
                carried = session.streams[kind]
                carried.items = list(old.items)
                carried.cursor = old.cursor
                carried.exhausted = old.exhausted
            session.completed = True
        for stream in session.streams.values():
            stream.loading = True
        self._session = session
        self._notify()
        add_span_attributes(**{"search.term_length": len(normalized)})

        outcomes = await asyncio.gather(
            *(self._fetch_page(session, kind, None) for kind in EntityKind),
            return_exceptions=True,
        )
        if generation != self._generation:
            logger.debug("Discarding stale results for %r", term)
            add_span_event("search.stale_discarded")
            return self._session

        failures = [o for o in outcomes if isinstance(o, BaseException)]
        for failure in failures:
            if not isinstance(failure, SearchFailedException):
                raise failure
        if failures:
            session.error = failures[0]
            add_span_event("search.failed", {"kind": session.error.kind})
            logger.warning("Search for %r failed: %s", term, session.error.details)
            self._notify()
            return session

        for page in outcomes:
            self._apply_first_page(session, page)
        session.completed = True
        session.error = None
        self._notify()
        return session

    @traced("search.session.load_more")
    async def load_more(self, kind: EntityKind) -> SearchSession:
        """Fetch the next page of one kind and append it to that kind's section.

        No-op when the term is blank, the kind is exhausted, or a page for
        the kind is already loading.
        """
        session = self._session
        stream = session.streams[kind]
        if is_blank(session.term) or stream.exhausted or stream.loading:
            return session

        generation = session.generation
        stream.loading = True
        self._notify()
        try:
            page = await self._fetch_page(session, kind, stream.cursor)
        except SearchFailedException as exc:
            if generation != self._generation:
                return self._session
            session.error = exc
            add_span_event("search.failed", {"kind": exc.kind})
            logger.warning("Load more %s for %r failed: %s", kind.value, session.term, exc.details)
            self._notify()
            return session
        if generation != self._generation:
            logger.debug("Discarding stale %s page for %r", kind.value, session.term)
            add_span_event("search.stale_discarded", {"kind": kind.value})
            return self._session

        stream.items.extend(page.items)
        if page.cursor is not None:
            stream.cursor = page.cursor
        stream.exhausted = page.exhausted
        session.error = None
        self._notify()
        return session

    async def _fetch_page(
        self,
        session: SearchSession,
        kind: EntityKind,
        cursor: PaginationCursor | None,
    ) -> SearchPage:
        stream = session.streams[kind]
        query = build_range_query(kind, session.normalized_term, cursor, self._page_size)
        stream.loading = True
        try:
            items = await self._repo.range_scan(query) if query is not None else []
        finally:
            stream.loading = False
        return SearchPage(
            kind=kind,
            items=list(items),
            exhausted=page_is_exhausted(len(items), self._page_size),
            cursor=items[-1].cursor if items else None,
        )

    @staticmethod
    def _apply_first_page(session: SearchSession, page: SearchPage) -> None:
        stream = session.streams[page.kind]
        stream.items = list(page.items)
        stream.cursor = page.cursor
        stream.exhausted = page.exhausted

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._session)
