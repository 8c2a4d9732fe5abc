"""DTOs for prefix search results (no dependency on the store client)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from blogsearch.domain.enums import EntityKind

EXCERPT_FALLBACK_LENGTH = 160


@dataclass(frozen=True)
class PaginationCursor:
    """Position of the last-seen entity in one kind's sorted stream.

    Ordering is by (key, document_id); resuming strictly after both makes
    equal keys safe across page boundaries.
    """

    key: str
    document_id: str


@dataclass(frozen=True)
class PostHit:
    """Post matched by its normalized title (read-model)."""

    id: str
    title: str
    search_key: str
    excerpt: str | None = None
    author: str | None = None
    user_id: str | None = None
    kind: Literal[EntityKind.POST] = EntityKind.POST

    @property
    def cursor(self) -> PaginationCursor:
        return PaginationCursor(self.search_key, self.id)

    @property
    def label(self) -> str:
        return self.title

    @property
    def link(self) -> str:
        return f"/blog/{self.id}"


@dataclass(frozen=True)
class UserHit:
    """User matched by normalized username (read-model)."""

    id: str
    username: str
    search_key: str
    display_name: str | None = None
    photo_url: str | None = None
    kind: Literal[EntityKind.USER] = EntityKind.USER

    @property
    def cursor(self) -> PaginationCursor:
        return PaginationCursor(self.search_key, self.id)

    @property
    def label(self) -> str:
        return self.display_name or self.username

    @property
    def link(self) -> str:
        return f"/user/{self.id}"


SearchHit = PostHit | UserHit


def excerpt_from(excerpt: str | None, content: str | None) -> str | None:
    """Stored excerpt, else the head of the post content."""
    if excerpt:
        return excerpt
    if not content:
        return None
    text = " ".join(content.split())
    if len(text) <= EXCERPT_FALLBACK_LENGTH:
        return text
    return text[:EXCERPT_FALLBACK_LENGTH].rstrip() + "..."


@dataclass(frozen=True)
class SearchPage:
    """One page of one kind's stream.

    exhausted is True when fewer items than requested came back; cursor is
    the last item's position, or None for an empty page.
    """

    kind: EntityKind
    items: list[SearchHit]
    exhausted: bool
    cursor: PaginationCursor | None


@dataclass(frozen=True)
class SearchResults:
    """First pages of both kinds for one term (stateless API)."""

    term: str
    normalized_term: str
    pages: dict[EntityKind, SearchPage] = field(default_factory=dict)

    @property
    def items(self) -> list[SearchHit]:
        """Posts section followed by users section."""
        out: list[SearchHit] = []
        for kind in EntityKind:
            page = self.pages.get(kind)
            if page is not None:
                out.extend(page.items)
        return out
