"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from blogsearch.application.dtos.search import SearchHit
    from blogsearch.application.services.query_planner import RangeQuerySpec


class ISearchRepository(Protocol):
    """Protocol for the prefix range scan over one searchable collection (DIP)."""

    async def range_scan(self, query: RangeQuerySpec) -> list[SearchHit]:
        """Return up to query.limit hits with key in range, ascending by (key, id).

        Resumes strictly after query.start_after when set. Store failures are
        raised as SearchFailedException, never as raw client errors.
        """


class IPostRepository(Protocol):
    """Protocol for the post write path that maintains title_normalized."""

    async def create_post(
        self,
        user_id: str,
        title: str,
        content: str,
        author: str | None = None,
        excerpt: str | None = None,
    ) -> str:
        """Create a post with its search key; return the new post id."""

    async def update_post(
        self,
        post_id: str,
        title: str | None = None,
        content: str | None = None,
        excerpt: str | None = None,
    ) -> dict[str, Any] | None:
        """Update a post (recomputing the search key with the title); None if missing."""


class IUserProfileRepository(Protocol):
    """Protocol for the profile write path that maintains username_normalized."""

    async def create_profile(
        self,
        user_id: str,
        username: str,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> None:
        """Create or replace the searchable profile document for a user."""

    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> dict[str, Any] | None:
        """Update profile fields (recomputing the search key with the username); None if missing."""
