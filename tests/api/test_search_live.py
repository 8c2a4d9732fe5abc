"""WebSocket tests for /api/v1/search/live (Starlette TestClient)."""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from blogsearch.domain.enums import EntityKind
from blogsearch.main import app

LIVE_URL = "/api/v1/search/live"


def _until_settled(ws, term: str) -> dict:
    """Read session pushes until one for term has finished loading."""
    for _ in range(10):
        message = ws.receive_json()
        if message["type"] == "session" and message["term"] == term and not message["loading"]:
            return message
    raise AssertionError(f"no settled session for {term!r}")


def test_input_pushes_session_snapshots(configured_app, fake_repo) -> None:
    fake_repo.add_post("p1", "Alpine lakes")
    fake_repo.add_users(f"al{i}" for i in range(7))

    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_json({"type": "input", "term": "al"})
        session = _until_settled(ws, "al")

        assert [i["title"] for i in session["posts"]["items"]] == ["Alpine lakes"]
        assert session["posts"]["exhausted"] is True
        assert len(session["users"]["items"]) == 5
        assert session["users"]["exhausted"] is False
        assert session["has_more"] is True
        assert session["no_results"] is False

        ws.send_json({"type": "load_more", "kind": "user"})
        session = _until_settled(ws, "al")
        assert len(session["users"]["items"]) == 7
        assert session["users"]["exhausted"] is True


def test_slow_post_page_does_not_hold_up_user_page(configured_app, fake_repo) -> None:
    fake_repo.add_posts(f"alpine {i}" for i in range(7))
    fake_repo.add_users(f"al{i}" for i in range(7))
    fake_repo.next_page_delays[EntityKind.POST] = 0.5

    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_json({"type": "submit", "term": "al"})
        _until_settled(ws, "al")

        ws.send_json({"type": "load_more", "kind": "post"})
        ws.send_json({"type": "load_more", "kind": "user"})
        for _ in range(10):
            session = ws.receive_json()
            if len(session["users"]["items"]) == 7:
                break
        else:
            raise AssertionError("user page never arrived")

        assert session["posts"]["loading"] is True
        assert len(session["posts"]["items"]) == 5

        session = _until_settled(ws, "al")
        assert len(session["posts"]["items"]) == 7


def test_submit_with_no_matches_reports_no_results(configured_app) -> None:
    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_json({"type": "submit", "term": "qq"})
        session = _until_settled(ws, "qq")

        assert session["no_results"] is True
        assert session["posts"]["items"] == []


def test_clearing_input_resets_session(configured_app, fake_repo) -> None:
    fake_repo.add_posts(["Alpha"])

    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_json({"type": "submit", "term": "al"})
        _until_settled(ws, "al")
        calls = len(fake_repo.calls)

        ws.send_json({"type": "input", "term": ""})
        session = _until_settled(ws, "")

        assert session["posts"]["items"] == []
        assert session["has_more"] is False
        assert len(fake_repo.calls) == calls


def test_store_failure_is_pushed_as_error(configured_app, fake_repo) -> None:
    fake_repo.fail(EntityKind.POST)

    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_json({"type": "submit", "term": "al"})
        session = _until_settled(ws, "al")

        assert session["error"] == "Search failed for post results"
        assert session["no_results"] is False


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"type": "load_more", "kind": "comment"}, "kind must be one of"),
        ({"type": "dance"}, "Unknown message type"),
        ({"type": "input", "term": 5}, "term must be a string"),
        (["input"], "Expected a JSON object"),
    ],
)
def test_bad_messages_get_error_reply(configured_app, payload, expected: str) -> None:
    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_json(payload)
        message = ws.receive_json()

        assert message["type"] == "error"
        assert expected in message["message"]


def test_invalid_json_gets_error_reply(configured_app) -> None:
    with TestClient(configured_app).websocket_connect(LIVE_URL) as ws:
        ws.send_text("{not json")
        assert ws.receive_json() == {"type": "error", "message": "Invalid JSON"}


def test_closes_when_backend_not_configured() -> None:
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with TestClient(app).websocket_connect(LIVE_URL) as ws:
            ws.receive_json()
    assert exc_info.value.code == 1013
