"""Schemas for category browse endpoints (/v1/categories/...)."""

from pydantic import BaseModel, Field


class CountryBusinessCount(BaseModel):
    """A country with the number of active businesses in a category."""

    id: int
    name: str
    code: str
    business_count: int = Field(alias="businessCount", ge=0)

    model_config = {"populate_by_name": True}


class CityBusinessCount(BaseModel):
    """A city with the number of active businesses in a category."""

    city_id: int = Field(alias="cityId")
    city_name: str = Field(alias="cityName")
    country_name: str = Field(alias="countryName")
    business_count: int = Field(alias="businessCount", ge=0)

    model_config = {"populate_by_name": True}


class CategoryStats(BaseModel):
    """Aggregate figures for one category."""

    total_businesses: int = Field(alias="totalBusinesses", ge=0, default=0)
    cities_count: int = Field(alias="citiesCount", ge=0, default=0)
    premium_count: int = Field(alias="premiumCount", ge=0, default=0)
    verified_count: int = Field(alias="verifiedCount", ge=0, default=0)
    cities: list[CityBusinessCount] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class BusinessCount(BaseModel):
    """Response payload for GET /v1/categories/{slug}/count."""

    category_slug: str = Field(alias="categorySlug")
    count: int = Field(ge=0)

    model_config = {"populate_by_name": True}
