"""Schemas for the search endpoint (/v1/search) and proximity hints."""

from pydantic import BaseModel, Field

from bizdir.schemas.business import BusinessRecord

SORT_KEYS = ("default", "distance", "rating", "name")
SORT_DIRECTIONS = ("asc", "desc")

FACET_FIELDS = (
    "is_premium",
    "is_verified",
    "has_coupons",
    "accepts_orders_online",
    "is_kid_friendly",
    "is_sponsored_ad",
)


class SearchRequest(BaseModel):
    """Caller-supplied search query.

    Values are deliberately unconstrained here; `services.search.validate_request`
    rejects bad page/size/sort values with an error naming the field.
    """

    category_slug: str | None = Field(alias="categorySlug", default=None)
    city: str | None = None
    country: str | None = None
    term: str | None = None

    # Facets: True requires the flag, False imposes nothing
    is_premium: bool = Field(alias="isPremium", default=False)
    is_verified: bool = Field(alias="isVerified", default=False)
    has_coupons: bool = Field(alias="hasCoupons", default=False)
    accepts_orders_online: bool = Field(alias="acceptsOrdersOnline", default=False)
    is_kid_friendly: bool = Field(alias="isKidFriendly", default=False)
    is_sponsored_ad: bool = Field(alias="isSponsoredAd", default=False)

    sort_key: str = Field(alias="sortKey", default="default")
    sort_direction: str = Field(alias="sortDirection", default="desc")
    page: int = 1
    page_size: int = Field(alias="pageSize", default=10)

    # Proximity expansion of the city filter
    nearby: bool = True
    radius_km: float | None = Field(alias="radiusKm", default=None)

    request_token: int | None = Field(alias="requestToken", default=None)

    model_config = {"populate_by_name": True}

    def active_facets(self) -> tuple[str, ...]:
        return tuple(name for name in FACET_FIELDS if getattr(self, name))


class RankedItem(BaseModel):
    """A business at its ranked position."""

    position: int = Field(ge=1)
    display_number: int | None = Field(alias="displayNumber", default=None)
    average_rating: float = Field(alias="averageRating", default=0.0)
    review_count: int = Field(alias="reviewCount", ge=0, default=0)
    business: BusinessRecord

    model_config = {"populate_by_name": True}


class RankedPage(BaseModel):
    """One page of ranked search results.

    `display_number` is None for sponsored entries; numbering is continuous
    across pages.
    """

    items: list[RankedItem] = Field(default_factory=list)
    total: int = Field(ge=0, default=0)
    page: int = Field(ge=1, default=1)
    page_size: int = Field(alias="pageSize", ge=1, default=10)
    total_pages: int = Field(alias="totalPages", ge=1, default=1)
    sort_key: str = Field(alias="sortKey", default="default")
    sort_direction: str = Field(alias="sortDirection", default="desc")
    request_token: int | None = Field(alias="requestToken", default=None)

    model_config = {"populate_by_name": True}

    @property
    def businesses(self) -> list[BusinessRecord]:
        return [item.business for item in self.items]

    @property
    def display_numbers(self) -> list[int | None]:
        return [item.display_number for item in self.items]


class NearbyPlacesResponse(BaseModel):
    """Response payload for GET /v1/places/nearby."""

    place: str
    radius_km: float = Field(alias="radiusKm")
    places: list[str]

    model_config = {"populate_by_name": True}
