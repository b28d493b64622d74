"""Business search orchestration.

Flow:
1. Validate the request (InvalidRequest before any store access)
2. Expand the city filter to nearby cities (optional, radius in km)
3. Resolve category slug / city names to ids (unknown -> empty page)
4. Compose the predicate and fetch matching active businesses
5. Rank (sponsored first, then the requested sort key)
6. Paginate with ad-aware display numbers

The computation is stateless per request; the request token is echoed back so
callers can discard superseded responses (see services.sequencing).
"""

from __future__ import annotations

import logging
import time

from bizdir.schemas.search import SORT_DIRECTIONS, SORT_KEYS, RankedPage, SearchRequest
from bizdir.services.errors import InvalidRequest, call_store
from bizdir.services.filters import compose
from bizdir.services.geo import get_nearby_places
from bizdir.services.pagination import paginate
from bizdir.services.ranking import rank
from bizdir.services.references import ReferenceResolver
from bizdir.settings import get_settings
from bizdir.stores.business_store import BusinessStore, PostgresBusinessStore

logger = logging.getLogger("uvicorn.error")

_default_resolver: ReferenceResolver | None = None


def get_default_resolver() -> ReferenceResolver:
    """Process-wide resolver over the PostgreSQL store."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = ReferenceResolver(PostgresBusinessStore())
    return _default_resolver


def validate_request(request: SearchRequest) -> None:
    """Reject unusable requests, naming the offending field."""
    settings = get_settings()

    if request.page < 1:
        raise InvalidRequest("page", f"page must be >= 1, got {request.page}")
    if request.page_size <= 0:
        raise InvalidRequest("pageSize", f"pageSize must be > 0, got {request.page_size}")
    if request.page_size > settings.max_page_size:
        raise InvalidRequest(
            "pageSize",
            f"pageSize must be <= {settings.max_page_size}, got {request.page_size}",
        )
    if request.sort_key not in SORT_KEYS:
        raise InvalidRequest(
            "sortKey",
            f"Unknown sortKey {request.sort_key!r}. Supported: {list(SORT_KEYS)}",
        )
    if request.sort_direction not in SORT_DIRECTIONS:
        raise InvalidRequest(
            "sortDirection",
            f"Unknown sortDirection {request.sort_direction!r}. Supported: {list(SORT_DIRECTIONS)}",
        )
    if request.radius_km is not None and request.radius_km <= 0:
        raise InvalidRequest("radiusKm", f"radiusKm must be > 0, got {request.radius_km}")


def _empty_page(request: SearchRequest) -> RankedPage:
    return RankedPage(
        items=[],
        total=0,
        page=request.page,
        page_size=request.page_size,
        total_pages=1,
        sort_key=request.sort_key,
        sort_direction=request.sort_direction,
        request_token=request.request_token,
    )


async def search(
    request: SearchRequest,
    *,
    store: BusinessStore | None = None,
    resolver: ReferenceResolver | None = None,
) -> RankedPage:
    """Run a search and return one ranked page.

    Args:
        request: Search parameters.
        store: Store to query (defaults to the resolver's store / PostgreSQL).
        resolver: Reference resolver (defaults to a process-wide cached one).

    Returns:
        RankedPage; empty (total=0, totalPages=1) when nothing matches.

    Raises:
        InvalidRequest: Bad page, page size, sort key/direction or radius.
        StoreFailure: The store timed out or failed.
    """
    validate_request(request)
    start_time = time.time()

    if resolver is None:
        resolver = ReferenceResolver(store) if store is not None else get_default_resolver()
    store = store or resolver.store

    city = request.city.strip() if request.city else None
    category_slug = request.category_slug.strip() if request.category_slug else None

    nearby_names = None
    if city and request.nearby:
        radius_km = request.radius_km or get_settings().proximity_radius_km
        nearby_names = await get_nearby_places(store, city, radius_km)

    references = await resolver.resolve(
        category_slug=category_slug,
        city=city,
        nearby_names=nearby_names,
    )
    predicate = compose(request, references)
    if predicate.matches_nothing:
        return _empty_page(request)

    candidates = await call_store(
        store.fetch_active_businesses(predicate),
        operation="fetch_active_businesses",
    )
    # The store contract already guarantees this; re-check so nothing inactive leaks
    candidates = predicate.apply(candidates)

    ranked = rank(candidates, request.sort_key, request.sort_direction)
    page = paginate(ranked, request.page, request.page_size)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        f"search category={category_slug!r} city={city!r} term={request.term!r} "
        f"sort={request.sort_key}/{request.sort_direction} matches={page.total} "
        f"page={page.page}/{page.total_pages} took={elapsed_ms}ms"
    )

    return page.model_copy(
        update={
            "sort_key": request.sort_key,
            "sort_direction": request.sort_direction,
            "request_token": request.request_token,
        }
    )


async def nearby_places(
    place_name: str,
    radius_km: float | None = None,
    *,
    store: BusinessStore | None = None,
) -> list[str]:
    """Names of cities within `radius_km` of `place_name` (UI location hints)."""
    if not place_name or not place_name.strip():
        raise InvalidRequest("name", "name must not be empty")
    if radius_km is not None and radius_km <= 0:
        raise InvalidRequest("radiusKm", f"radiusKm must be > 0, got {radius_km}")
    radius = radius_km or get_settings().proximity_radius_km
    return await get_nearby_places(store or get_default_resolver().store, place_name.strip(), radius)
