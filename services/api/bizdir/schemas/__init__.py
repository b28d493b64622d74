"""Pydantic schemas for records and API request/response validation."""

from bizdir.schemas.business import (
    BusinessRecord,
    BusinessStatus,
    CategoryRef,
    CityRef,
    Coordinates,
    CountryRef,
    PlaceCoordinates,
    ReviewRecord,
)
from bizdir.schemas.catalog import (
    BusinessCount,
    CategoryStats,
    CityBusinessCount,
    CountryBusinessCount,
)
from bizdir.schemas.common import ErrorDetail, ErrorResponse
from bizdir.schemas.search import (
    NearbyPlacesResponse,
    RankedItem,
    RankedPage,
    SearchRequest,
)

__all__ = [
    "BusinessCount",
    "BusinessRecord",
    "BusinessStatus",
    "CategoryRef",
    "CategoryStats",
    "CityBusinessCount",
    "CityRef",
    "Coordinates",
    "CountryBusinessCount",
    "CountryRef",
    "ErrorDetail",
    "ErrorResponse",
    "NearbyPlacesResponse",
    "PlaceCoordinates",
    "RankedItem",
    "RankedPage",
    "ReviewRecord",
    "SearchRequest",
]
