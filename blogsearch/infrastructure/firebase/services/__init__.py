"""Firestore-backed maintenance services."""

from blogsearch.infrastructure.firebase.services.search_backfill import (
    BackfillReport,
    FirestoreSearchKeyBackfill,
)

__all__ = ["BackfillReport", "FirestoreSearchKeyBackfill"]
