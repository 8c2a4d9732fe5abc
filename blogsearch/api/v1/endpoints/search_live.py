"""WebSocket search-as-you-type: one LiveSearch per connection.

Client messages (JSON):
    {"type": "input", "term": "..."}      debounced search
    {"type": "submit", "term": "..."}     immediate search
    {"type": "load_more", "kind": "post" | "user"}

The server pushes a SearchSessionMessage after every session change and a
LiveSearchErrorMessage for messages it cannot handle.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from blogsearch.api.v1.dependencies import get_app_settings, get_optional_search_repo
from blogsearch.application.interfaces.repositories import ISearchRepository
from blogsearch.application.use_cases.live_search import LiveSearch
from blogsearch.application.use_cases.search_session import SearchSession
from blogsearch.core.config import Settings
from blogsearch.domain.enums import EntityKind
from blogsearch.schemas.search import LiveSearchErrorMessage, SearchSessionMessage

logger = logging.getLogger(__name__)

router = APIRouter()

# 1013: try again later
_CLOSE_BACKEND_UNAVAILABLE = 1013


async def _pump(websocket: WebSocket, outbox: "asyncio.Queue[BaseModel]") -> None:
    """Send queued messages in order until cancelled or the client goes away."""
    while True:
        message = await outbox.get()
        try:
            await websocket.send_json(message.model_dump(mode="json"))
        except WebSocketDisconnect:
            logger.debug("Live search client gone; dropping pushes")
            return


def _term_of(data: dict[str, Any], max_length: int) -> str | None:
    term = data.get("term", "")
    if not isinstance(term, str) or len(term) > max_length:
        return None
    return term


def _log_task_failure(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Live search request failed", exc_info=task.exception())


def _handle_message(
    live: LiveSearch,
    data: Any,
    outbox: "asyncio.Queue[BaseModel]",
    max_term_length: int,
    start: Callable[[Coroutine[Any, Any, Any]], None],
) -> None:
    """Dispatch one client message; store calls run in the background via start."""
    if not isinstance(data, dict):
        outbox.put_nowait(LiveSearchErrorMessage(message="Expected a JSON object"))
        return
    msg_type = data.get("type")
    if msg_type in ("input", "submit"):
        term = _term_of(data, max_term_length)
        if term is None:
            outbox.put_nowait(
                LiveSearchErrorMessage(message=f"term must be a string of at most {max_term_length} characters")
            )
        elif msg_type == "input":
            live.on_input(term)
        else:
            start(live.submit(term))
    elif msg_type == "load_more":
        try:
            kind = EntityKind(data.get("kind"))
        except ValueError:
            outbox.put_nowait(
                LiveSearchErrorMessage(message=f"kind must be one of {', '.join(EntityKind.values())}")
            )
            return
        start(live.load_more(kind))
    else:
        outbox.put_nowait(LiveSearchErrorMessage(message=f"Unknown message type: {msg_type!r}"))


@router.websocket("/live")
async def live_search(
    websocket: WebSocket,
    search_repo: Annotated[ISearchRepository | None, Depends(get_optional_search_repo)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> None:
    """Accept, then run a debounced search session until the client disconnects.

    Closes with 1013 when the search backend is not configured.
    """
    await websocket.accept()
    if search_repo is None:
        await websocket.close(code=_CLOSE_BACKEND_UNAVAILABLE, reason="Search backend not configured")
        return

    outbox: asyncio.Queue[BaseModel] = asyncio.Queue()

    def on_change(session: SearchSession) -> None:
        outbox.put_nowait(SearchSessionMessage.from_session(session))

    live = LiveSearch(
        search_repo,
        page_size=settings.search_page_size,
        debounce_seconds=settings.search_debounce_seconds,
        on_change=on_change,
    )
    requests: set[asyncio.Task] = set()

    def start(coro: Coroutine[Any, Any, Any]) -> None:
        # Posts and users pages load independently of each other and of later messages.
        task = asyncio.create_task(coro)
        requests.add(task)
        task.add_done_callback(requests.discard)
        task.add_done_callback(_log_task_failure)

    sender = asyncio.create_task(_pump(websocket, outbox))
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except ValueError:
                outbox.put_nowait(LiveSearchErrorMessage(message="Invalid JSON"))
                continue
            _handle_message(live, data, outbox, settings.search_max_term_length, start)
    except WebSocketDisconnect:
        logger.debug("Live search client disconnected")
    finally:
        for task in list(requests):
            task.cancel()
        if requests:
            await asyncio.gather(*list(requests), return_exceptions=True)
        await live.close()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
