"""Caller-side request sequencing for type-ahead search.

Keystroke-driven searches should:
- wait for a short quiet period before querying (debounce)
- never let a late response for an older query overwrite a newer page

Each issued search gets a monotonically increasing token. A response is
accepted only if its token is still the latest issued; older responses are
dropped. This is a superseding discipline, not a lock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from bizdir.schemas.search import RankedPage, SearchRequest
from bizdir.settings import get_settings

SearchFn = Callable[[SearchRequest], Awaitable[RankedPage]]


class RequestSequencer:
    """Issues request tokens and tells whether a response is still current."""

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int | None) -> bool:
        return token is not None and token == self._latest


class SearchSession:
    """Debounced, superseding search runner for one UI search box.

    Usage:
        session = SearchSession(search)
        page = await session.submit(request)
        if page is not None:
            render(page)
    """

    def __init__(self, search_fn: SearchFn, *, debounce_seconds: float | None = None) -> None:
        if debounce_seconds is None:
            debounce_seconds = get_settings().search_debounce_ms / 1000
        self._search = search_fn
        self._debounce = debounce_seconds
        self._sequencer = RequestSequencer()
        self._pending = 0
        self.current: RankedPage | None = None

    @property
    def sequencer(self) -> RequestSequencer:
        return self._sequencer

    async def submit(self, request: SearchRequest) -> RankedPage | None:
        """Run `request` once input has been quiet for the debounce window.

        Returns:
            The page if it is still the latest result, otherwise None
            (debounced away or superseded while in flight).
        """
        self._pending += 1
        ticket = self._pending
        if self._debounce > 0:
            await asyncio.sleep(self._debounce)
        if ticket != self._pending:
            return None

        token = self._sequencer.issue()
        page = await self._search(request.model_copy(update={"request_token": token}))
        return self.accept(page)

    def accept(self, page: RankedPage) -> RankedPage | None:
        """Keep `page` if its token is the latest issued; drop it otherwise."""
        if not self._sequencer.is_current(page.request_token):
            return None
        self.current = page
        return page
