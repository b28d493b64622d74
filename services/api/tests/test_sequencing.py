"""Tests for debounced, superseding search sessions."""

import asyncio

from bizdir.schemas.search import RankedPage, SearchRequest
from bizdir.services.sequencing import RequestSequencer, SearchSession


def test_sequencer_only_latest_is_current():
    sequencer = RequestSequencer()
    first = sequencer.issue()
    second = sequencer.issue()
    assert second > first
    assert sequencer.is_current(second)
    assert not sequencer.is_current(first)
    assert not sequencer.is_current(None)


async def test_burst_runs_one_search():
    seen: list[SearchRequest] = []

    async def fake_search(request: SearchRequest) -> RankedPage:
        seen.append(request)
        return RankedPage(request_token=request.request_token)

    session = SearchSession(fake_search, debounce_seconds=0.05)
    results = await asyncio.gather(
        session.submit(SearchRequest(term="c")),
        session.submit(SearchRequest(term="cu")),
        session.submit(SearchRequest(term="cur")),
    )

    assert [r is None for r in results] == [True, True, False]
    assert [r.term for r in seen] == ["cur"]
    assert session.current is results[2]


async def test_superseded_response_is_dropped():
    release_first = asyncio.Event()

    async def fake_search(request: SearchRequest) -> RankedPage:
        if request.term == "slow":
            await release_first.wait()
        return RankedPage(request_token=request.request_token, total=len(request.term or ""))

    session = SearchSession(fake_search, debounce_seconds=0)
    slow = asyncio.create_task(session.submit(SearchRequest(term="slow")))
    await asyncio.sleep(0)

    fast = await session.submit(SearchRequest(term="fast!"))
    release_first.set()

    assert await slow is None
    assert fast is not None
    assert session.current is fast
    assert session.current.total == 5


def test_accept_rejects_stale_tokens():
    session = SearchSession(lambda request: None, debounce_seconds=0)
    token = session.sequencer.issue()
    session.sequencer.issue()
    assert session.accept(RankedPage(request_token=token)) is None
    assert session.current is None
