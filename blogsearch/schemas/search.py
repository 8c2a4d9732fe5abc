"""Search API schemas."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from blogsearch.application.dtos.search import PostHit, SearchHit, SearchPage, UserHit
from blogsearch.application.services.cursor_codec import encode_cursor
from blogsearch.application.use_cases.search_session import KindStream, SearchSession
from blogsearch.domain.enums import EntityKind


class PostHitResponse(BaseModel):
    """Post matched by title prefix."""

    kind: Literal["post"] = "post"
    id: str
    title: str
    label: str
    link: str = Field(..., description="Detail view path, e.g. /blog/{id}")
    excerpt: str | None = None
    author: str | None = None
    user_id: str | None = None


class UserHitResponse(BaseModel):
    """User matched by username prefix."""

    kind: Literal["user"] = "user"
    id: str
    username: str
    label: str
    link: str = Field(..., description="Detail view path, e.g. /user/{id}")
    display_name: str | None = None
    photo_url: str | None = None


SearchHitResponse = PostHitResponse | UserHitResponse


def hit_response(hit: SearchHit) -> SearchHitResponse:
    """Map a PostHit/UserHit DTO to its response model."""
    if isinstance(hit, PostHit):
        return PostHitResponse(
            id=hit.id,
            title=hit.title,
            label=hit.label,
            link=hit.link,
            excerpt=hit.excerpt,
            author=hit.author,
            user_id=hit.user_id,
        )
    if isinstance(hit, UserHit):
        return UserHitResponse(
            id=hit.id,
            username=hit.username,
            label=hit.label,
            link=hit.link,
            display_name=hit.display_name,
            photo_url=hit.photo_url,
        )
    raise TypeError(f"Unsupported search hit: {type(hit).__name__}")


class SearchSectionResponse(BaseModel):
    """One kind's page: items in ascending key order plus the resume token."""

    kind: Literal["post", "user"]
    items: list[SearchHitResponse] = Field(default_factory=list)
    exhausted: bool = Field(..., description="True when no further page exists")
    next_cursor: str | None = Field(
        default=None,
        description="Opaque token for GET /search/{kind}; null when exhausted",
    )

    @classmethod
    def from_page(cls, page: SearchPage, normalized_term: str) -> SearchSectionResponse:
        next_cursor = None
        if not page.exhausted and page.cursor is not None:
            next_cursor = encode_cursor(page.kind, normalized_term, page.cursor)
        return cls(
            kind=page.kind.value,
            items=[hit_response(h) for h in page.items],
            exhausted=page.exhausted,
            next_cursor=next_cursor,
        )

    @classmethod
    def empty(cls, kind: EntityKind) -> SearchSectionResponse:
        return cls(kind=kind.value, items=[], exhausted=True, next_cursor=None)


class SearchResponse(BaseModel):
    """First page of posts and users for a term."""

    q: str
    posts: SearchSectionResponse
    users: SearchSectionResponse


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers."""

    error: str
    message: str
    details: dict[str, Any] | list[Any] | None = None
    request_id: str | None = None


class LiveSectionResponse(BaseModel):
    """One kind's section of a live search session."""

    items: list[SearchHitResponse] = Field(default_factory=list)
    exhausted: bool
    loading: bool

    @classmethod
    def from_stream(cls, stream: KindStream) -> LiveSectionResponse:
        return cls(
            items=[hit_response(h) for h in stream.items],
            exhausted=stream.exhausted,
            loading=stream.loading,
        )


class SearchSessionMessage(BaseModel):
    """Server push over WS /search/live after every session change."""

    type: Literal["session"] = "session"
    term: str
    loading: bool
    no_results: bool
    has_more: bool
    error: str | None = None
    posts: LiveSectionResponse
    users: LiveSectionResponse

    @classmethod
    def from_session(cls, session: SearchSession) -> SearchSessionMessage:
        return cls(
            term=session.term,
            loading=session.loading,
            no_results=session.no_results,
            has_more=session.has_more,
            error=session.error.message if session.error is not None else None,
            posts=LiveSectionResponse.from_stream(session.stream(EntityKind.POST)),
            users=LiveSectionResponse.from_stream(session.stream(EntityKind.USER)),
        )


class LiveSearchErrorMessage(BaseModel):
    """Server push when a client message cannot be handled."""

    type: Literal["error"] = "error"
    message: str
