"""Browse and listing-detail services.

Everything here reads active businesses through the same store interface and
predicate as search:
- business detail by id
- sponsored listings for a city/category
- per-category country and city distribution, statistics and counts
- atomic view/click counters
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bizdir.schemas.business import BusinessRecord
from bizdir.schemas.catalog import CategoryStats, CityBusinessCount, CountryBusinessCount
from bizdir.services.errors import call_store
from bizdir.services.filters import BusinessPredicate
from bizdir.services.references import ReferenceResolver
from bizdir.services.search import get_default_resolver

logger = logging.getLogger("uvicorn.error")


def _resolver(resolver: ReferenceResolver | None) -> ReferenceResolver:
    return resolver or get_default_resolver()


async def _category_businesses(slug: str, resolver: ReferenceResolver) -> list[BusinessRecord] | None:
    """Active businesses in a category, or None when the slug is unknown."""
    category_id = await resolver.category_id(slug)
    if category_id is None:
        logger.warning(f"Category not found: {slug!r}")
        return None
    return await call_store(
        resolver.store.fetch_active_businesses(BusinessPredicate(category_id=category_id)),
        operation="fetch_active_businesses",
    )


# ============================================================
# Pure aggregations
# ============================================================


def count_by_country(businesses: Sequence[BusinessRecord]) -> list[CountryBusinessCount]:
    """Countries by business count (desc), then name (asc)."""
    counts: dict[int, CountryBusinessCount] = {}
    for business in businesses:
        country = business.country
        if country is None:
            continue
        entry = counts.get(country.id)
        if entry is None:
            counts[country.id] = CountryBusinessCount(
                id=country.id, name=country.name, code=country.code, business_count=1
            )
        else:
            counts[country.id] = entry.model_copy(update={"business_count": entry.business_count + 1})
    return sorted(counts.values(), key=lambda c: (-c.business_count, c.name))


def count_by_city(businesses: Sequence[BusinessRecord]) -> list[CityBusinessCount]:
    """Cities by business count (desc); equal counts keep first-seen order."""
    counts: dict[int, CityBusinessCount] = {}
    for business in businesses:
        city = business.city
        if city is None:
            continue
        entry = counts.get(city.id)
        if entry is None:
            counts[city.id] = CityBusinessCount(
                city_id=city.id,
                city_name=city.name,
                country_name=city.country.name if city.country else "Unknown",
                business_count=1,
            )
        else:
            counts[city.id] = entry.model_copy(update={"business_count": entry.business_count + 1})
    return sorted(counts.values(), key=lambda c: -c.business_count)


def summarize_category(businesses: Sequence[BusinessRecord]) -> CategoryStats:
    cities = count_by_city(businesses)
    return CategoryStats(
        total_businesses=len(businesses),
        cities_count=len(cities),
        premium_count=sum(1 for b in businesses if b.is_premium),
        verified_count=sum(1 for b in businesses if b.is_verified),
        cities=cities,
    )


# ============================================================
# Store-backed operations
# ============================================================


async def get_business(business_id: int, *, resolver: ReferenceResolver | None = None) -> BusinessRecord | None:
    """Active business by id, or None."""
    store = _resolver(resolver).store
    return await call_store(store.fetch_business_by_id(business_id), operation="fetch_business_by_id")


async def get_sponsored_businesses(
    *,
    city: str | None = None,
    category_slug: str | None = None,
    resolver: ReferenceResolver | None = None,
) -> list[BusinessRecord]:
    """Active sponsored listings, optionally narrowed to a city and/or category."""
    resolver = _resolver(resolver)
    references = await resolver.resolve(category_slug=category_slug, city=city)
    if references.unresolved:
        return []
    predicate = BusinessPredicate(
        category_id=references.category_id,
        city_ids=references.city_ids,
        facets=("is_sponsored_ad",),
    )
    return await call_store(
        resolver.store.fetch_active_businesses(predicate),
        operation="fetch_active_businesses",
    )


async def get_countries_by_category(
    slug: str, *, resolver: ReferenceResolver | None = None
) -> list[CountryBusinessCount]:
    businesses = await _category_businesses(slug, _resolver(resolver))
    return count_by_country(businesses or [])


async def get_cities_by_category(
    slug: str, *, resolver: ReferenceResolver | None = None
) -> list[CityBusinessCount]:
    businesses = await _category_businesses(slug, _resolver(resolver))
    return count_by_city(businesses or [])


async def get_category_stats(slug: str, *, resolver: ReferenceResolver | None = None) -> CategoryStats:
    businesses = await _category_businesses(slug, _resolver(resolver))
    return summarize_category(businesses or [])


async def get_business_count_by_category(slug: str, *, resolver: ReferenceResolver | None = None) -> int:
    businesses = await _category_businesses(slug, _resolver(resolver))
    return len(businesses or [])


async def record_view(business_id: int, *, resolver: ReferenceResolver | None = None) -> bool:
    """Atomically bump the view counter. Returns False for an unknown id."""
    store = _resolver(resolver).store
    return await call_store(store.increment_view_count(business_id), operation="increment_view_count")


async def record_click(business_id: int, *, resolver: ReferenceResolver | None = None) -> bool:
    """Atomically bump the click counter. Returns False for an unknown id."""
    store = _resolver(resolver).store
    return await call_store(store.increment_click_count(business_id), operation="increment_click_count")
