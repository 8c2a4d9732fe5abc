"""Prefix search use case for the HTTP API. Delegates range scans to ISearchRepository.

Stateless counterpart of SearchPaginator: the caller carries the cursor
token between requests instead of a server-side session.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from blogsearch.application.dtos.search import PaginationCursor, SearchPage, SearchResults
from blogsearch.application.services.cursor_codec import decode_cursor
from blogsearch.application.services.query_planner import build_range_query, page_is_exhausted
from blogsearch.domain.enums import EntityKind
from blogsearch.shared.telemetry.tracing import traced
from blogsearch.shared.utils.text import is_blank, normalize_search_text

if TYPE_CHECKING:
    from blogsearch.application.interfaces.repositories import ISearchRepository


class SearchService:
    """Prefix search across posts and users, one page per kind per call."""

    def __init__(self, search_repo: "ISearchRepository", page_size: int = 5) -> None:
        self.search_repo = search_repo
        self.page_size = page_size

    @traced("search.first_page")
    async def search(self, term: str, page_size: int | None = None) -> SearchResults:
        """First page of both kinds; both scans run concurrently. Blank term returns no results."""
        size = page_size or self.page_size
        normalized = normalize_search_text(term)
        if is_blank(term) or not normalized:
            return SearchResults(term=term, normalized_term="")
        pages = await asyncio.gather(
            *(self._page(kind, normalized, None, size) for kind in EntityKind)
        )
        return SearchResults(
            term=term,
            normalized_term=normalized,
            pages={page.kind: page for page in pages},
        )

    @traced("search.next_page")
    async def next_page(
        self,
        kind: EntityKind,
        term: str,
        cursor_token: str | None,
        page_size: int | None = None,
    ) -> SearchPage:
        """Page of one kind resuming after cursor_token (first page when None).

        Raises:
            InvalidCursorException: token malformed or issued for another term/kind.
            SearchFailedException: the range scan failed.
        """
        size = page_size or self.page_size
        normalized = normalize_search_text(term)
        if is_blank(term) or not normalized:
            return SearchPage(kind=kind, items=[], exhausted=True, cursor=None)
        cursor = decode_cursor(cursor_token, kind, normalized) if cursor_token else None
        return await self._page(kind, normalized, cursor, size)

    async def _page(
        self,
        kind: EntityKind,
        normalized: str,
        cursor: PaginationCursor | None,
        size: int,
    ) -> SearchPage:
        query = build_range_query(kind, normalized, cursor, size)
        items = await self.search_repo.range_scan(query) if query is not None else []
        return SearchPage(
            kind=kind,
            items=list(items),
            exhausted=page_is_exhausted(len(items), size),
            cursor=items[-1].cursor if items else None,
        )
