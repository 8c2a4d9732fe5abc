"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on the Firestore client
directly. Tests override get_optional_search_repo with an in-memory repository.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from blogsearch.application.interfaces.repositories import ISearchRepository
from blogsearch.application.use_cases.search import SearchService
from blogsearch.core.config import Settings, get_settings
from blogsearch.domain.exceptions import SearchBackendNotConfiguredException
from blogsearch.infrastructure.firebase import get_firestore_client
from blogsearch.infrastructure.firebase.repositories import FirestoreSearchRepository


def get_app_settings() -> Settings:
    """Settings as a dependency so tests can override them per app."""
    return get_settings()


def get_optional_search_repo() -> ISearchRepository | None:
    """Range-scan repository over posts and users, or None without Firestore."""
    client = get_firestore_client()
    if client is None:
        return None
    return FirestoreSearchRepository(client)


def get_search_repo(
    search_repo: Annotated[ISearchRepository | None, Depends(get_optional_search_repo)],
) -> ISearchRepository:
    """Range-scan repository for HTTP routes.

    Raises:
        SearchBackendNotConfiguredException: Firestore was not initialized (503).
    """
    if search_repo is None:
        raise SearchBackendNotConfiguredException()
    return search_repo


def get_search_service(
    search_repo: Annotated[ISearchRepository, Depends(get_search_repo)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SearchService:
    """Stateless search use case with the configured default page size."""
    return SearchService(search_repo, page_size=settings.search_page_size)
