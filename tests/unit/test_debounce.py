"""Tests for the trailing-edge Debouncer."""

import asyncio

import pytest

from blogsearch.shared.utils.debounce import Debouncer

DELAY = 0.05


async def test_burst_collapses_to_last_argument() -> None:
    calls: list[str] = []
    debounced = Debouncer(calls.append, DELAY)

    debounced("a")
    await asyncio.sleep(DELAY / 5)
    debounced("ab")
    await asyncio.sleep(DELAY / 5)
    debounced("abc")
    await asyncio.sleep(DELAY * 3)

    assert calls == ["abc"]


async def test_calls_separated_by_quiet_period_each_fire() -> None:
    calls: list[str] = []
    debounced = Debouncer(calls.append, DELAY)

    debounced("a")
    await asyncio.sleep(DELAY * 3)
    debounced("b")
    await asyncio.sleep(DELAY * 3)

    assert calls == ["a", "b"]


async def test_cancel_drops_pending_call() -> None:
    calls: list[str] = []
    debounced = Debouncer(calls.append, DELAY)

    debounced("a")
    assert debounced.pending is True
    debounced.cancel()
    assert debounced.pending is False
    await asyncio.sleep(DELAY * 3)

    assert calls == []


async def test_coroutine_callback_runs_as_task_and_drains() -> None:
    calls: list[str] = []

    async def record(term: str) -> None:
        await asyncio.sleep(0)
        calls.append(term)

    debounced = Debouncer(record, 0)
    debounced("x")
    await asyncio.sleep(0.01)
    await debounced.drain()

    assert calls == ["x"]
    assert debounced.pending is False


async def test_failing_coroutine_callback_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    async def boom(_: str) -> None:
        raise RuntimeError("boom")

    debounced = Debouncer(boom, 0)
    debounced("x")
    await asyncio.sleep(0.01)
    await debounced.drain()

    assert "Debounced callback failed" in caplog.text


def test_negative_delay_rejected() -> None:
    with pytest.raises(ValueError):
        Debouncer(print, -1)


def test_call_outside_event_loop_raises() -> None:
    debounced = Debouncer(print, DELAY)
    with pytest.raises(RuntimeError):
        debounced("a")
