"""Tests for LiveSearch: debounced input in front of the paginator."""

import asyncio

from blogsearch.application.use_cases.live_search import LiveSearch
from blogsearch.domain.enums import EntityKind

DEBOUNCE = 0.03


async def test_keystroke_burst_issues_one_search(fake_repo) -> None:
    fake_repo.add_users(["abc", "abcd"])
    live = LiveSearch(fake_repo, page_size=5, debounce_seconds=DEBOUNCE)

    for term in ("a", "ab", "abc"):
        live.on_input(term)
        await asyncio.sleep(DEBOUNCE / 5)
    assert live.search_pending is True
    await asyncio.sleep(DEBOUNCE * 3)
    await live.close()

    assert {c.lower_bound for c in fake_repo.calls} == {"abc"}
    assert len(fake_repo.calls) == 2  # one scan per kind
    assert [hit.label for hit in live.session.results] == ["abc", "abcd"]


async def test_clearing_input_resets_session_without_query(fake_repo) -> None:
    fake_repo.add_posts(["Alpha"])
    changes = []
    live = LiveSearch(fake_repo, page_size=5, debounce_seconds=DEBOUNCE, on_change=changes.append)
    await live.submit("al")
    assert live.session.results
    calls = len(fake_repo.calls)

    live.on_input("")

    assert live.session.results == []
    assert live.session.term == ""
    assert len(fake_repo.calls) == calls
    assert changes[-1].results == []


async def test_clearing_input_cancels_pending_search(fake_repo) -> None:
    live = LiveSearch(fake_repo, page_size=5, debounce_seconds=DEBOUNCE)

    live.on_input("al")
    live.on_input("")
    await asyncio.sleep(DEBOUNCE * 3)
    await live.close()

    assert fake_repo.calls == []
    assert live.search_pending is False


async def test_clearing_after_search_fired_but_not_started_skips_it(fake_repo) -> None:
    fake_repo.add_posts(["Alpha"])
    live = LiveSearch(fake_repo, page_size=5, debounce_seconds=0)

    live.on_input("al")
    # Timer fires; the search task is created but has not run yet.
    while live.search_pending:
        await asyncio.sleep(0)
    live.on_input("")
    await live.close()

    assert fake_repo.calls == []
    assert live.session.term == ""
    assert live.session.results == []


async def test_submit_skips_debounce(fake_repo) -> None:
    fake_repo.add_posts(["Alpha", "Beta"])
    live = LiveSearch(fake_repo, page_size=5, debounce_seconds=10)

    live.on_input("b")
    session = await live.submit("al")

    assert live.search_pending is False
    assert [hit.label for hit in session.results] == ["Alpha"]
    assert live.term == "al"


async def test_load_more_bypasses_debounce(fake_repo) -> None:
    fake_repo.add_users(f"al{i}" for i in range(7))
    live = LiveSearch(fake_repo, page_size=5, debounce_seconds=10)
    await live.submit("al")

    session = await live.load_more(EntityKind.USER)

    assert len(session.stream(EntityKind.USER).items) == 7
    assert session.stream(EntityKind.USER).exhausted is True
