"""Application services: search-key derivation, query planning, cursor tokens."""

from blogsearch.application.services.cursor_codec import decode_cursor, encode_cursor
from blogsearch.application.services.query_planner import (
    HIGH_SENTINEL,
    RangeQuerySpec,
    build_range_query,
    page_is_exhausted,
)
from blogsearch.application.services.search_index import (
    SEARCH_KEY_FIELDS,
    post_search_fields,
    search_fields_for,
    user_search_fields,
)

__all__ = [
    "HIGH_SENTINEL",
    "SEARCH_KEY_FIELDS",
    "RangeQuerySpec",
    "build_range_query",
    "decode_cursor",
    "encode_cursor",
    "page_is_exhausted",
    "post_search_fields",
    "search_fields_for",
    "user_search_fields",
]
