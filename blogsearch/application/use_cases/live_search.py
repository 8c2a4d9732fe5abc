"""Search-as-you-type: debounced input in front of the paginator.

Keystrokes go through a Debouncer; only the last term of a burst reaches
SearchPaginator.search. Clearing the input cancels the pending search and
resets the session at once. load_more bypasses the debouncer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from blogsearch.application.use_cases.search_session import (
    DEFAULT_PAGE_SIZE,
    SearchPaginator,
    SearchSession,
)
from blogsearch.domain.enums import EntityKind
from blogsearch.shared.utils.debounce import Debouncer
from blogsearch.shared.utils.text import is_blank

if TYPE_CHECKING:
    from blogsearch.application.interfaces.repositories import ISearchRepository

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.4


class LiveSearch:
    """One search box: owns a paginator and the debouncer feeding it."""

    def __init__(
        self,
        search_repo: ISearchRepository,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Callable[[SearchSession], None] | None = None,
    ) -> None:
        self.paginator = SearchPaginator(search_repo, page_size=page_size, on_change=on_change)
        self._debouncer: Debouncer[str] = Debouncer(self._search_latest, debounce_seconds)
        self._term = ""

    @property
    def term(self) -> str:
        """Latest input, which may not have been searched yet."""
        return self._term

    @property
    def session(self) -> SearchSession:
        return self.paginator.session

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, term: str) -> None:
        """Handle an input change. Must be called from the event loop."""
        self._term = term
        if is_blank(term):
            self._debouncer.cancel()
            logger.debug("Search input cleared")
            self.paginator.clear()
            return
        self._debouncer(term)

    async def _search_latest(self, term: str) -> None:
        # A fired search whose task starts after the input changed is dropped.
        if term != self._term:
            logger.debug("Skipping superseded search for %r", term)
            return
        await self.paginator.search(term)

    async def submit(self, term: str) -> SearchSession:
        """Search immediately (explicit submit), dropping any pending debounced call."""
        self._term = term
        self._debouncer.cancel()
        return await self.paginator.search(term)

    async def load_more(self, kind: EntityKind) -> SearchSession:
        return await self.paginator.load_more(kind)

    async def close(self) -> None:
        """Cancel the pending search and wait for searches already started."""
        await self._debouncer.drain()
