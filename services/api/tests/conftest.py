"""Shared fixtures: record factories and an in-memory BusinessStore."""

import asyncio
from datetime import datetime, timezone

import pytest

from bizdir.schemas.business import (
    BusinessRecord,
    CategoryRef,
    CityRef,
    Coordinates,
    CountryRef,
    PlaceCoordinates,
    ReviewRecord,
)
from bizdir.services.filters import BusinessPredicate

GERMANY = CountryRef(id=1, name="Germany", code="DE")
NETHERLANDS = CountryRef(id=2, name="Netherlands", code="NL")

RESTAURANTS = CategoryRef(id=10, name="Restaurants", slug="restaurants")
PLUMBERS = CategoryRef(id=11, name="Plumbers", slug="plumbers")

BERLIN = CityRef(id=100, name="Berlin", country_id=1, country=GERMANY)
POTSDAM = CityRef(id=101, name="Potsdam", country_id=1, country=GERMANY)
HAMBURG = CityRef(id=102, name="Hamburg", country_id=1, country=GERMANY)
AMSTERDAM = CityRef(id=103, name="Amsterdam", country_id=2, country=NETHERLANDS)

CITY_COORDINATES = {
    "Berlin": (52.5200, 13.4050),
    "Potsdam": (52.3906, 13.0645),
    "Hamburg": (53.5511, 9.9937),
    "Amsterdam": (52.3676, 4.9041),
}


def make_business(
    business_id: int,
    name: str | None = None,
    *,
    category: CategoryRef = RESTAURANTS,
    city: CityRef | None = BERLIN,
    country: CountryRef | None = None,
    status: str = "active",
    created_at: datetime | None = None,
    ratings: tuple[float, ...] = (),
    description: str | None = None,
    **flags: bool,
) -> BusinessRecord:
    """Build a valid BusinessRecord; flags are is_premium, is_sponsored_ad, ..."""
    if country is None and city is not None:
        country = city.country
    created = created_at or datetime(2024, 1, 1, tzinfo=timezone.utc)
    reviews = [
        ReviewRecord(id=business_id * 100 + i, rating=rating, created_at=created)
        for i, rating in enumerate(ratings)
    ]
    return BusinessRecord(
        id=business_id,
        slug=f"business-{business_id}",
        name=name or f"Business {business_id}",
        description=description,
        category=category,
        city=city,
        country=country,
        status=status,
        created_at=created,
        reviews=reviews,
        **flags,
    )


class FakeStore:
    """In-memory BusinessStore.

    Records every call in `calls`; `delay` slows down business fetches and
    `error` makes every call raise.
    """

    def __init__(
        self,
        businesses: list[BusinessRecord] | None = None,
        *,
        categories: dict[str, int] | None = None,
        cities: dict[str, int] | None = None,
        coordinates: dict[str, tuple[float, float] | None] | None = None,
        apply_predicate: bool = True,
    ) -> None:
        self.businesses = list(businesses or [])
        self.categories = categories if categories is not None else {"restaurants": 10, "plumbers": 11}
        self.cities = (
            cities
            if cities is not None
            else {"Berlin": 100, "Potsdam": 101, "Hamburg": 102, "Amsterdam": 103}
        )
        self.coordinates = coordinates if coordinates is not None else dict(CITY_COORDINATES)
        self.apply_predicate = apply_predicate
        self.calls: list[str] = []
        self.delay: float = 0.0
        self.error: Exception | None = None
        self.view_counts: dict[int, int] = {}
        self.click_counts: dict[int, int] = {}

    async def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    async def fetch_active_businesses(self, predicate: BusinessPredicate) -> list[BusinessRecord]:
        await self._enter("fetch_active_businesses")
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.apply_predicate:
            return list(self.businesses)
        return predicate.apply(self.businesses)

    async def fetch_business_by_id(self, business_id: int) -> BusinessRecord | None:
        await self._enter("fetch_business_by_id")
        for business in self.businesses:
            if business.id == business_id and business.is_active:
                return business
        return None

    async def fetch_place_coordinates(self, place_name: str) -> Coordinates | None:
        await self._enter("fetch_place_coordinates")
        coords = self.coordinates.get(place_name)
        if coords is None:
            return None
        return Coordinates(lat=coords[0], lon=coords[1])

    async def fetch_all_places_with_coordinates(self) -> list[PlaceCoordinates]:
        await self._enter("fetch_all_places_with_coordinates")
        return [
            PlaceCoordinates(name=name, lat=coords[0], lon=coords[1])
            for name, coords in self.coordinates.items()
            if coords is not None
        ]

    async def resolve_category_id_by_slug(self, slug: str) -> int | None:
        await self._enter("resolve_category_id_by_slug")
        return self.categories.get(slug)

    async def resolve_place_id_by_name(self, name: str) -> int | None:
        await self._enter("resolve_place_id_by_name")
        return self.cities.get(name)

    async def increment_view_count(self, business_id: int) -> bool:
        await self._enter("increment_view_count")
        if not any(b.id == business_id for b in self.businesses):
            return False
        self.view_counts[business_id] = self.view_counts.get(business_id, 0) + 1
        return True

    async def increment_click_count(self, business_id: int) -> bool:
        await self._enter("increment_click_count")
        if not any(b.id == business_id for b in self.businesses):
            return False
        self.click_counts[business_id] = self.click_counts.get(business_id, 0) + 1
        return True


@pytest.fixture
def directory() -> list[BusinessRecord]:
    """A small directory spanning cities, categories, statuses and flags."""
    return [
        make_business(1, "Curry Corner", city=BERLIN, is_premium=True, is_verified=True,
                      created_at=datetime(2023, 3, 1, tzinfo=timezone.utc), ratings=(5, 4, 5),
                      description="Currywurst and fries"),
        make_business(2, "Spree Sushi", city=BERLIN, is_sponsored_ad=True, accepts_orders_online=True,
                      created_at=datetime(2024, 6, 1, tzinfo=timezone.utc), ratings=(4,)),
        make_business(3, "Sanssouci Cafe", city=POTSDAM, is_kid_friendly=True, has_coupons=True,
                      created_at=datetime(2024, 1, 1, tzinfo=timezone.utc), ratings=(3, 4),
                      description="Family cafe by the palace park"),
        make_business(4, "Harbor Fish", city=HAMBURG,
                      created_at=datetime(2022, 9, 15, tzinfo=timezone.utc)),
        make_business(5, "Grachten Plumbing", category=PLUMBERS, city=AMSTERDAM, is_verified=True,
                      created_at=datetime(2023, 11, 20, tzinfo=timezone.utc), ratings=(5,)),
        make_business(6, "Pending Pizza", city=BERLIN, status="pending",
                      created_at=datetime(2024, 8, 1, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def store(directory: list[BusinessRecord]) -> FakeStore:
    return FakeStore(directory)
