"""Application DTOs (no store client dependency)."""

from blogsearch.application.dtos.search import (
    PaginationCursor,
    PostHit,
    SearchHit,
    SearchPage,
    SearchResults,
    UserHit,
    excerpt_from,
)

__all__ = [
    "PaginationCursor",
    "PostHit",
    "SearchHit",
    "SearchPage",
    "SearchResults",
    "UserHit",
    "excerpt_from",
]
