"""Pytest configuration and fixtures for blogsearch.

HTTP tests use blogsearch.main:app through httpx ASGITransport (lifespan is
not run, so Firestore stays unconfigured unless a test overrides the search
repository dependency). FakeSearchRepository is an in-memory stand-in that
honors the range-scan contract: keys inside [lower_bound, upper_bound],
ascending by (key, id), strictly after start_after, at most limit items.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import pytest
from httpx import ASGITransport, AsyncClient

from blogsearch.api.v1.dependencies import get_app_settings, get_optional_search_repo
from blogsearch.application.dtos.search import PostHit, SearchHit, UserHit
from blogsearch.application.services.query_planner import RangeQuerySpec
from blogsearch.core.config import Settings, get_settings
from blogsearch.core.limiter import limiter
from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import SearchFailedException
from blogsearch.main import app
from blogsearch.shared.utils.text import normalize_search_text


class FakeSearchRepository:
    """In-memory ISearchRepository.

    gates: lower_bound -> asyncio.Event; a scan for that term waits on the
    event, which lets tests hold a response in flight.
    failures: kind -> exception raised by scans of that kind.
    next_page_delays: kind -> seconds a scan of that kind resuming from a
    cursor sleeps before answering.
    """

    def __init__(self) -> None:
        self.docs: dict[EntityKind, list[SearchHit]] = {kind: [] for kind in EntityKind}
        self.calls: list[RangeQuerySpec] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[EntityKind, Exception] = {}
        self.next_page_delays: dict[EntityKind, float] = {}

    def add_post(self, post_id: str, title: str, **extra: str) -> PostHit:
        hit = PostHit(id=post_id, title=title, search_key=normalize_search_text(title), **extra)
        self.docs[EntityKind.POST].append(hit)
        return hit

    def add_user(self, user_id: str, username: str, display_name: str | None = None) -> UserHit:
        hit = UserHit(
            id=user_id,
            username=username,
            search_key=normalize_search_text(username),
            display_name=display_name,
        )
        self.docs[EntityKind.USER].append(hit)
        return hit

    def add_posts(self, titles: Iterable[str]) -> None:
        for i, title in enumerate(titles):
            self.add_post(f"p{i:03d}", title)

    def add_users(self, usernames: Iterable[str]) -> None:
        for i, username in enumerate(usernames):
            self.add_user(f"u{i:03d}", username)

    def fail(self, kind: EntityKind, reason: str = "HTTPStatusError") -> None:
        self.failures[kind] = SearchFailedException(kind.value, reason)

    def calls_for(self, kind: EntityKind) -> list[RangeQuerySpec]:
        return [c for c in self.calls if c.kind is kind]

    async def range_scan(self, query: RangeQuerySpec) -> list[SearchHit]:
        self.calls.append(query)
        gate = self.gates.get(query.lower_bound)
        if gate is not None:
            await gate.wait()
        delay = self.next_page_delays.get(query.kind)
        if delay and query.start_after is not None:
            await asyncio.sleep(delay)
        if query.kind in self.failures:
            raise self.failures[query.kind]
        hits = sorted(
            (h for h in self.docs[query.kind] if query.matches(h.search_key)),
            key=lambda h: (h.search_key, h.id),
        )
        if query.start_after is not None:
            after = (query.start_after.key, query.start_after.document_id)
            hits = [h for h in hits if (h.search_key, h.id) > after]
        return hits[: query.limit]


@pytest.fixture
def fake_repo() -> FakeSearchRepository:
    return FakeSearchRepository()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no debounce delay so live-search tests run immediately."""
    return Settings(search_debounce_ms=0, search_page_size=5)


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Clear dependency overrides, rate-limit counters and cached settings around each test."""
    limiter.reset()
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture
def configured_app(fake_repo: FakeSearchRepository, test_settings: Settings):
    """The app with the search repository replaced by fake_repo."""
    app.dependency_overrides[get_optional_search_repo] = lambda: fake_repo
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    return app


@pytest.fixture
async def client(configured_app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with the fake repository."""
    transport = ASGITransport(app=configured_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def unconfigured_client() -> AsyncClient:
    """Async HTTP client against the app as started without Firestore credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
