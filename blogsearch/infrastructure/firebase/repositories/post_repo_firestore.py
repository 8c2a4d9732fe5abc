"""Firestore-backed post write path (implements IPostRepository).

Every write that touches a title writes title_normalized in the same request.
"""

from __future__ import annotations

from typing import Any

from blogsearch.application.services.search_index import post_search_fields
from blogsearch.domain.exceptions import ValidationException
from blogsearch.infrastructure.firebase._rest_client import FirestoreRESTClient
from blogsearch.infrastructure.firebase.collections import COLLECTION_POSTS
from blogsearch.shared.utils.datetime import utc_now


class FirestorePostRepository:
    """Post repository using Firestore."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_POSTS)

    async def create_post(
        self,
        user_id: str,
        title: str,
        content: str,
        author: str | None = None,
        excerpt: str | None = None,
    ) -> str:
        """Create a post with its search key; return the new post id."""
        if not title or not title.strip():
            raise ValidationException("Title is required", field="title")
        data: dict[str, Any] = {
            "title": title,
            "content": content,
            "userId": user_id,
            "author": author,
            "createdAt": utc_now(),
            **post_search_fields(title),
        }
        if excerpt is not None:
            data["excerpt"] = excerpt
        return await self._coll.add(data)

    async def update_post(
        self,
        post_id: str,
        title: str | None = None,
        content: str | None = None,
        excerpt: str | None = None,
    ) -> dict[str, Any] | None:
        """Update post fields; return the written fields, or None if the post is missing."""
        updates: dict[str, Any] = {}
        if title is not None:
            if not title.strip():
                raise ValidationException("Title is required", field="title")
            updates["title"] = title
            updates.update(post_search_fields(title))
        if content is not None:
            updates["content"] = content
        if excerpt is not None:
            updates["excerpt"] = excerpt
        updates["updatedAt"] = utc_now()
        if not await self._coll.document(post_id).update(updates):
            return None
        return updates
