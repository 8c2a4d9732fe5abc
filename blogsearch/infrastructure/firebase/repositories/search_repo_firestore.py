"""Firestore-backed prefix range scan (implements ISearchRepository)."""

from __future__ import annotations

import logging

import httpx
from google.auth.exceptions import GoogleAuthError

from blogsearch.application.dtos.search import PostHit, SearchHit, UserHit, excerpt_from
from blogsearch.application.services.query_planner import RangeQuerySpec
from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import SearchFailedException
from blogsearch.infrastructure.firebase._rest_client import (
    DOCUMENT_ID_FIELD,
    FirestoreRESTClient,
)
from blogsearch.infrastructure.firebase.collections import SEARCH_COLLECTIONS
from blogsearch.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def _to_post_hit(doc_id: str, data: dict, key_field: str) -> PostHit:
    return PostHit(
        id=doc_id,
        title=data.get("title", ""),
        search_key=data.get(key_field, ""),
        excerpt=excerpt_from(data.get("excerpt"), data.get("content")),
        author=data.get("author"),
        user_id=data.get("userId"),
    )


def _to_user_hit(doc_id: str, data: dict, key_field: str) -> UserHit:
    return UserHit(
        id=doc_id,
        username=data.get("username") or data.get("displayName", ""),
        search_key=data.get(key_field, ""),
        display_name=data.get("displayName"),
        photo_url=data.get("photoURL"),
    )


class FirestoreSearchRepository:
    """Runs RangeQuerySpec scans against the posts and users collections.

    Orders by (search key, document name) and resumes with startAt/before=false
    on both values, so equal keys never repeat or drop across pages.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    @traced("firestore.range_scan")
    async def range_scan(self, query: RangeQuerySpec) -> list[SearchHit]:
        """Return one page of hits for query; store errors become SearchFailedException."""
        coll = self._client.collection(SEARCH_COLLECTIONS[query.kind])
        q = (
            coll.where(query.field, ">=", query.lower_bound)
            .where(query.field, "<=", query.upper_bound)
            .order_by(query.field)
            .order_by(DOCUMENT_ID_FIELD)
            .limit(query.limit)
        )
        if query.start_after is not None:
            q = q.start_after(
                query.start_after.key,
                coll.document(query.start_after.document_id).path,
            )

        to_hit = _to_post_hit if query.kind is EntityKind.POST else _to_user_hit
        hits: list[SearchHit] = []
        try:
            async for snapshot in q.stream():
                hits.append(to_hit(snapshot.id, snapshot.to_dict(), query.field))
        except (httpx.HTTPError, GoogleAuthError, ValueError) as e:
            logger.warning(
                "Range scan on %s failed: %s",
                SEARCH_COLLECTIONS[query.kind],
                e,
            )
            raise SearchFailedException(query.kind.value, type(e).__name__) from e
        return hits
