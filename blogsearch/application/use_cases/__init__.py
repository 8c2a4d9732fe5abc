"""Application use cases: one entry point per workflow."""

from blogsearch.application.use_cases.live_search import LiveSearch
from blogsearch.application.use_cases.search import SearchService
from blogsearch.application.use_cases.search_session import (
    KindStream,
    SearchPaginator,
    SearchSession,
)

__all__ = [
    "KindStream",
    "LiveSearch",
    "SearchPaginator",
    "SearchService",
    "SearchSession",
]
