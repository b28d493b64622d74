"""Business record schemas.

These are the explicit record shapes the search core works with. The store
adapter validates ORM rows into them, so joined projections arrive with
required fields present and optional ones clearly marked.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class BusinessStatus(str, Enum):
    """Listing lifecycle status."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    PREMIUM = "premium"


_RECORD_CONFIG = {"populate_by_name": True, "from_attributes": True, "frozen": True}


class CategoryRef(BaseModel):
    """Category projection joined onto a business."""

    id: int
    name: str
    slug: str
    icon: str | None = None

    model_config = _RECORD_CONFIG


class CountryRef(BaseModel):
    """Country projection joined onto a business."""

    id: int
    name: str
    code: str
    flag_url: str | None = Field(alias="flagUrl", default=None)

    model_config = _RECORD_CONFIG


class CityRef(BaseModel):
    """City projection joined onto a business, with the city's own country."""

    id: int
    name: str
    country_id: int | None = Field(alias="countryId", default=None)
    country: CountryRef | None = None

    model_config = _RECORD_CONFIG


class ReviewRecord(BaseModel):
    """A single review."""

    id: int
    rating: float
    title: str | None = None
    content: str | None = None
    created_at: datetime = Field(alias="createdAt")

    model_config = _RECORD_CONFIG


class BusinessRecord(BaseModel):
    """A directory listing with its joined category/city/country/reviews."""

    id: int
    slug: str
    name: str

    description: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    images: list[str] = Field(default_factory=list)
    logo_url: str | None = Field(alias="logoUrl", default=None)

    category: CategoryRef
    city: CityRef | None = None
    country: CountryRef | None = None

    status: BusinessStatus
    is_premium: bool = Field(alias="isPremium", default=False)
    is_verified: bool = Field(alias="isVerified", default=False)
    has_coupons: bool = Field(alias="hasCoupons", default=False)
    accepts_orders_online: bool = Field(alias="acceptsOrdersOnline", default=False)
    is_kid_friendly: bool = Field(alias="isKidFriendly", default=False)
    is_sponsored_ad: bool = Field(alias="isSponsoredAd", default=False)

    view_count: int = Field(alias="viewCount", default=0)
    click_count: int = Field(alias="clickCount", default=0)

    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(alias="updatedAt", default=None)

    reviews: list[ReviewRecord] = Field(default_factory=list)

    model_config = _RECORD_CONFIG

    @field_validator("images", "reviews", mode="before")
    @classmethod
    def _none_as_empty(cls, v: object) -> object:
        return [] if v is None else v

    @property
    def is_active(self) -> bool:
        return self.status == BusinessStatus.ACTIVE


class Coordinates(BaseModel):
    """Latitude/longitude pair in degrees."""

    lat: float
    lon: float

    model_config = {"frozen": True}


class PlaceCoordinates(BaseModel):
    """A named place with known coordinates."""

    name: str
    lat: float
    lon: float

    model_config = {"frozen": True}
