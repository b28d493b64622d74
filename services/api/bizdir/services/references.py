"""Category and city reference resolution.

Search requests name categories by slug and cities by name; the store filters
by id. Lookups go through a small in-process TTL cache so a burst of searches
for the same category does not repeat the same round trip. Misses are cached
too: an unknown slug stays a "no match" outcome, never an error.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Iterable

from bizdir.services.errors import call_store
from bizdir.services.filters import ResolvedReferences
from bizdir.settings import get_settings
from bizdir.stores.business_store import BusinessStore

logger = logging.getLogger("uvicorn.error")

_MISSING = object()


class _TtlCache:
    """Bounded monotonic-clock TTL map. Entries are replaced, never mutated.

    Kept in-process rather than in Redis: every search resolves its category
    and city, and a network round trip per lookup is what this cache removes.
    Expired entries are swept at most once per TTL period; past `max_entries`
    the oldest entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 1024,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[str, tuple[float, int | None]] = {}
        self._next_sweep = clock() + ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> object:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        expires_at, value = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return _MISSING
        return value

    def put(self, key: str, value: int | None) -> None:
        if self._ttl <= 0:
            return
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)
        self._entries.pop(key, None)
        while len(self._entries) >= self._max_entries:
            # Dicts keep insertion order, so the first key is the oldest
            del self._entries[next(iter(self._entries))]
        self._entries[key] = (now + self._ttl, value)

    def _sweep(self, now: float) -> None:
        self._entries = {k: v for k, v in self._entries.items() if v[0] > now}
        self._next_sweep = now + self._ttl

    def clear(self) -> None:
        self._entries.clear()


class ReferenceResolver:
    """Resolve category slugs and city names to store ids."""

    def __init__(
        self,
        store: BusinessStore,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int | None = None,
    ) -> None:
        settings = get_settings()
        ttl = ttl_seconds if ttl_seconds is not None else settings.reference_cache_ttl_seconds
        limit = max_entries if max_entries is not None else settings.reference_cache_max_entries
        self._store = store
        self._categories = _TtlCache(ttl, clock, limit)
        self._cities = _TtlCache(ttl, clock, limit)

    @property
    def store(self) -> BusinessStore:
        return self._store

    async def category_id(self, slug: str) -> int | None:
        return await self._lookup(
            self._categories,
            slug,
            lambda: self._store.resolve_category_id_by_slug(slug),
            operation="resolve_category_id_by_slug",
        )

    async def city_id(self, name: str) -> int | None:
        return await self._lookup(
            self._cities,
            name,
            lambda: self._store.resolve_place_id_by_name(name),
            operation="resolve_place_id_by_name",
        )

    async def city_ids(self, names: Iterable[str]) -> frozenset[int]:
        """Ids for every resolvable name; unknown names are skipped."""
        ids: set[int] = set()
        for name in names:
            city_id = await self.city_id(name)
            if city_id is not None:
                ids.add(city_id)
        return frozenset(ids)

    async def resolve(
        self,
        *,
        category_slug: str | None,
        city: str | None,
        nearby_names: Iterable[str] | None = None,
    ) -> ResolvedReferences:
        """Resolve the references a search request names.

        Args:
            category_slug: Category slug, if the request filters by category.
            city: City name, if the request filters by city.
            nearby_names: Expanded city names; when given they replace the single city.
        """
        unresolved: list[str] = []

        category_id = None
        if category_slug:
            category_id = await self.category_id(category_slug)
            if category_id is None:
                logger.warning(f"Unknown category slug {category_slug!r}; search will match nothing")
                unresolved.append("category")

        city_ids = None
        if city:
            city_ids = await self.city_ids(nearby_names if nearby_names is not None else [city])
            if not city_ids:
                logger.warning(f"Unknown city {city!r}; search will match nothing")
                unresolved.append("city")

        return ResolvedReferences(
            category_id=category_id,
            city_ids=city_ids,
            unresolved=tuple(unresolved),
        )

    def clear(self) -> None:
        self._categories.clear()
        self._cities.clear()

    async def _lookup(
        self,
        cache: _TtlCache,
        key: str,
        fetch: Callable[[], Awaitable[int | None]],
        *,
        operation: str,
    ) -> int | None:
        cached = cache.get(key)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        value = await call_store(fetch(), operation=operation)
        cache.put(key, value)
        return value
