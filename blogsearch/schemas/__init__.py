"""Pydantic request/response schemas for the API."""

from blogsearch.schemas.health import HealthResponse
from blogsearch.schemas.search import (
    ErrorResponse,
    LiveSearchErrorMessage,
    PostHitResponse,
    SearchResponse,
    SearchSectionResponse,
    SearchSessionMessage,
    UserHitResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LiveSearchErrorMessage",
    "PostHitResponse",
    "SearchResponse",
    "SearchSectionResponse",
    "SearchSessionMessage",
    "UserHitResponse",
]
