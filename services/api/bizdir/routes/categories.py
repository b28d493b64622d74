"""Category browse endpoints.

Unknown slugs return empty results / zero counts, mirroring search.
"""

from typing import Annotated

from fastapi import APIRouter, Path

from bizdir.schemas import BusinessCount, CategoryStats, CityBusinessCount, CountryBusinessCount
from bizdir.services.catalog import (
    get_business_count_by_category,
    get_category_stats,
    get_cities_by_category,
    get_countries_by_category,
)

router = APIRouter()

SlugPath = Annotated[str, Path(min_length=1, max_length=200, pattern=r"^[a-z0-9-]+$", description="Category slug")]


@router.get("/{slug}/stats", response_model=CategoryStats)
async def category_stats(slug: SlugPath) -> CategoryStats:
    return await get_category_stats(slug)


@router.get("/{slug}/countries", response_model=list[CountryBusinessCount])
async def category_countries(slug: SlugPath) -> list[CountryBusinessCount]:
    """Countries with active businesses in the category, busiest first."""
    return await get_countries_by_category(slug)


@router.get("/{slug}/cities", response_model=list[CityBusinessCount])
async def category_cities(slug: SlugPath) -> list[CityBusinessCount]:
    return await get_cities_by_category(slug)


@router.get("/{slug}/count", response_model=BusinessCount)
async def category_count(slug: SlugPath) -> BusinessCount:
    count = await get_business_count_by_category(slug)
    return BusinessCount(category_slug=slug, count=count)
