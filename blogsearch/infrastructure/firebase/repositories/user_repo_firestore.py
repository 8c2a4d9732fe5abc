"""Firestore-backed profile write path (implements IUserProfileRepository)."""

from __future__ import annotations

from typing import Any

from blogsearch.application.services.search_index import user_search_fields
from blogsearch.domain.exceptions import ValidationException
from blogsearch.infrastructure.firebase._rest_client import FirestoreRESTClient
from blogsearch.infrastructure.firebase.collections import COLLECTION_USERS
from blogsearch.shared.utils.datetime import utc_now


class FirestoreUserRepository:
    """Searchable user profiles keyed by auth uid.

    username_normalized is written together with username in one request.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)

    async def create_profile(
        self,
        user_id: str,
        username: str,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> None:
        """Create or replace the profile document for user_id."""
        if not username or not username.strip():
            raise ValidationException("Username is required", field="username")
        now = utc_now()
        await self._coll.document(user_id).set({
            "username": username,
            "displayName": display_name or username,
            "photoURL": photo_url,
            "createdAt": now,
            "updatedAt": now,
            **user_search_fields(username),
        })

    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> dict[str, Any] | None:
        """Update profile fields; return the written fields, or None if the profile is missing."""
        updates: dict[str, Any] = {}
        if username is not None:
            if not username.strip():
                raise ValidationException("Username is required", field="username")
            updates["username"] = username
            updates.update(user_search_fields(username))
        if display_name is not None:
            updates["displayName"] = display_name
        if photo_url is not None:
            updates["photoURL"] = photo_url
        updates["updatedAt"] = utc_now()
        if not await self._coll.document(user_id).update(updates):
            return None
        return updates
