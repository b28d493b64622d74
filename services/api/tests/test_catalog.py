"""Tests for browse, detail and counter services."""

import pytest

from bizdir.services.catalog import (
    count_by_city,
    count_by_country,
    get_business,
    get_business_count_by_category,
    get_category_stats,
    get_cities_by_category,
    get_countries_by_category,
    get_sponsored_businesses,
    record_click,
    record_view,
    summarize_category,
)
from bizdir.services.references import ReferenceResolver

from conftest import AMSTERDAM, BERLIN, GERMANY, HAMBURG, NETHERLANDS, make_business


@pytest.fixture
def resolver(store) -> ReferenceResolver:
    return ReferenceResolver(store, ttl_seconds=0)


def test_count_by_country_orders_by_count_then_name():
    businesses = [
        make_business(1, city=AMSTERDAM),
        make_business(2, city=BERLIN),
        make_business(3, city=HAMBURG),
        make_business(4, city=None),
    ]
    counts = count_by_country(businesses)
    assert [(c.code, c.business_count) for c in counts] == [("DE", 2), ("NL", 1)]

    tied = count_by_country([make_business(1, city=BERLIN), make_business(2, city=AMSTERDAM)])
    assert [c.name for c in tied] == ["Germany", "Netherlands"]


def test_count_by_city_is_stable_for_ties():
    businesses = [
        make_business(1, city=HAMBURG),
        make_business(2, city=BERLIN),
        make_business(3, city=BERLIN),
        make_business(4, city=AMSTERDAM),
    ]
    counts = count_by_city(businesses)
    assert [(c.city_name, c.business_count) for c in counts] == [
        ("Berlin", 2),
        ("Hamburg", 1),
        ("Amsterdam", 1),
    ]
    assert counts[2].country_name == "Netherlands"


def test_city_count_uses_the_city_country():
    # Listing filed under the Netherlands but located in Berlin
    counts = count_by_city([make_business(1, city=BERLIN, country=NETHERLANDS)])
    assert counts[0].country_name == "Germany"
    orphan = BERLIN.model_copy(update={"country_id": None, "country": None})
    counts = count_by_city([make_business(2, city=orphan, country=GERMANY)])
    assert counts[0].country_name == "Unknown"


def test_summarize_category():
    stats = summarize_category([
        make_business(1, is_premium=True, is_verified=True),
        make_business(2, city=HAMBURG, is_verified=True),
    ])
    assert stats.total_businesses == 2
    assert stats.cities_count == 2
    assert stats.premium_count == 1
    assert stats.verified_count == 2


async def test_category_browse(resolver):
    stats = await get_category_stats("restaurants", resolver=resolver)
    # Pending Pizza is excluded
    assert stats.total_businesses == 4
    assert stats.premium_count == 1
    assert [c.city_name for c in stats.cities] == ["Berlin", "Potsdam", "Hamburg"]

    countries = await get_countries_by_category("plumbers", resolver=resolver)
    assert [(c.code, c.business_count) for c in countries] == [("NL", 1)]

    cities = await get_cities_by_category("restaurants", resolver=resolver)
    assert cities[0].business_count == 2

    assert await get_business_count_by_category("restaurants", resolver=resolver) == 4


async def test_unknown_category_gives_empty_results(resolver, store):
    assert await get_business_count_by_category("nope", resolver=resolver) == 0
    assert await get_countries_by_category("nope", resolver=resolver) == []
    assert await get_cities_by_category("nope", resolver=resolver) == []
    stats = await get_category_stats("nope", resolver=resolver)
    assert stats.total_businesses == 0
    assert stats.cities == []
    assert "fetch_active_businesses" not in store.calls


async def test_get_business_active_only(resolver):
    business = await get_business(1, resolver=resolver)
    assert business is not None
    assert business.name == "Curry Corner"
    assert await get_business(6, resolver=resolver) is None
    assert await get_business(999, resolver=resolver) is None


async def test_sponsored_listings(resolver):
    sponsored = await get_sponsored_businesses(city="Berlin", resolver=resolver)
    assert [b.id for b in sponsored] == [2]
    assert await get_sponsored_businesses(city="Potsdam", resolver=resolver) == []
    assert await get_sponsored_businesses(category_slug="nope", resolver=resolver) == []


async def test_counters(resolver, store):
    assert await record_view(1, resolver=resolver)
    assert await record_view(1, resolver=resolver)
    assert await record_click(3, resolver=resolver)
    assert store.view_counts == {1: 2}
    assert store.click_counts == {3: 1}
    assert not await record_view(999, resolver=resolver)
    assert not await record_click(999, resolver=resolver)
