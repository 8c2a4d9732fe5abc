"""Search API: prefix search over post titles and usernames.

GET /search returns the first page of both sections; GET /search/{kind}
continues one section from the next_cursor of a previous response.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from blogsearch.api.v1.dependencies import get_app_settings, get_search_service
from blogsearch.application.use_cases.search import SearchService
from blogsearch.core.config import Settings
from blogsearch.core.limiter import limit_search
from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import ResourceNotFoundException, ValidationException
from blogsearch.schemas.search import ErrorResponse, SearchResponse, SearchSectionResponse
from blogsearch.shared.utils.text import normalize_search_text

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"description": "Invalid cursor or page size", "model": ErrorResponse},
    502: {"description": "Backing store query failed", "model": ErrorResponse},
    503: {"description": "Search backend not configured", "model": ErrorResponse},
}

# Path segment -> kind; plural forms match the section names in SearchResponse.
_KIND_SEGMENTS = {
    "post": EntityKind.POST,
    "posts": EntityKind.POST,
    "user": EntityKind.USER,
    "users": EntityKind.USER,
}


def _page_size(limit: int | None, settings: Settings) -> int | None:
    if limit is not None and limit > settings.search_max_page_size:
        raise ValidationException(
            f"limit must be <= {settings.search_max_page_size}", field="limit"
        )
    return limit


@router.get("", response_model=SearchResponse, responses=_ERROR_RESPONSES)
@limit_search
async def search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    q: str = Query("", max_length=200, description="Search term (prefix)"),
    limit: int | None = Query(None, ge=1, description="Items per section"),
) -> SearchResponse:
    """First page of posts and users whose normalized key starts with q.

    A blank q returns two empty, exhausted sections without querying the store.
    """
    results = await search_svc.search(q, page_size=_page_size(limit, settings))
    sections = {
        kind: (
            SearchSectionResponse.from_page(results.pages[kind], results.normalized_term)
            if kind in results.pages
            else SearchSectionResponse.empty(kind)
        )
        for kind in EntityKind
    }
    return SearchResponse(
        q=q,
        posts=sections[EntityKind.POST],
        users=sections[EntityKind.USER],
    )


@router.get(
    "/{kind}",
    response_model=SearchSectionResponse,
    responses={**_ERROR_RESPONSES, 404: {"description": "Unknown section", "model": ErrorResponse}},
)
@limit_search
async def search_section(
    request: Request,
    kind: str,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    q: str = Query("", max_length=200, description="Search term (prefix)"),
    cursor: str | None = Query(None, max_length=2048, description="next_cursor from a previous page"),
    limit: int | None = Query(None, ge=1, description="Items in this page"),
) -> SearchSectionResponse:
    """Next page of one section (posts or users) for q, resuming after cursor."""
    entity_kind = _KIND_SEGMENTS.get(kind.lower())
    if entity_kind is None:
        raise ResourceNotFoundException("search section", kind)
    page = await search_svc.next_page(
        entity_kind, q, cursor, page_size=_page_size(limit, settings)
    )
    return SearchSectionResponse.from_page(page, normalize_search_text(q))
