"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(unconfigured_client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and reports the search backend state."""
    response = await unconfigured_client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["search_backend"] == "unconfigured"


async def test_request_id_is_echoed(unconfigured_client: AsyncClient) -> None:
    response = await unconfigured_client.get(
        "/api/v1/health", headers={"X-Request-ID": "abc-123"}
    )
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_is_replaced(unconfigured_client: AsyncClient) -> None:
    response = await unconfigured_client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id with spaces"}
    )
    assert response.headers["X-Request-ID"] != "bad id with spaces"
    assert len(response.headers["X-Request-ID"]) == 36


async def test_root_returns_html(unconfigured_client: AsyncClient) -> None:
    """GET / returns the HTML landing page."""
    response = await unconfigured_client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")
    assert "/api/v1/search/live" in response.text
