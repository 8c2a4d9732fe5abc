"""Firestore-backed repository implementations."""

from blogsearch.infrastructure.firebase.repositories.post_repo_firestore import (
    FirestorePostRepository,
)
from blogsearch.infrastructure.firebase.repositories.search_repo_firestore import (
    FirestoreSearchRepository,
)
from blogsearch.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserRepository,
)

__all__ = [
    "FirestorePostRepository",
    "FirestoreSearchRepository",
    "FirestoreUserRepository",
]
