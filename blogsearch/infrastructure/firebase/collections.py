"""Firestore collection names for the searchable entities.

Each searchable collection relies on the single-field ascending index on
its search key (title_normalized, username_normalized), which Firestore
creates automatically.

Example:
    from blogsearch.infrastructure.firebase.client import get_firestore_client
    from blogsearch.infrastructure.firebase.collections import COLLECTION_POSTS

    db = get_firestore_client()
    if db:
        query = db.collection(COLLECTION_POSTS).where("title_normalized", ">=", "gez")
"""

from blogsearch.domain.enums import EntityKind

COLLECTION_POSTS = "blogs"
COLLECTION_USERS = "users"

SEARCH_COLLECTIONS: dict[EntityKind, str] = {
    EntityKind.POST: COLLECTION_POSTS,
    EntityKind.USER: COLLECTION_USERS,
}
