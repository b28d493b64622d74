"""Search endpoints.

GET /v1/search - Ranked, paginated business search.
GET /v1/places/nearby - City names within a radius (location dropdown hints).

Routers are thin: call services for business logic. Parameter values are
validated by the search service so errors name the offending field.
"""

from fastapi import APIRouter, Query

from bizdir.schemas import NearbyPlacesResponse, RankedPage, SearchRequest
from bizdir.services.search import nearby_places, search
from bizdir.settings import get_settings

router = APIRouter()


@router.get("/search", response_model=RankedPage)
async def search_businesses(
    q: str | None = Query(default=None, description="Free-text term (name or description)"),
    category: str | None = Query(default=None, description="Category slug", examples=["restaurants"]),
    city: str | None = Query(default=None, description="City name", examples=["Berlin"]),
    country: str | None = Query(default=None, description="Country code or name", examples=["DE"]),
    is_premium: bool = Query(default=False, alias="isPremium"),
    is_verified: bool = Query(default=False, alias="isVerified"),
    has_coupons: bool = Query(default=False, alias="hasCoupons"),
    accepts_orders_online: bool = Query(default=False, alias="acceptsOrdersOnline"),
    is_kid_friendly: bool = Query(default=False, alias="isKidFriendly"),
    is_sponsored_ad: bool = Query(default=False, alias="isSponsoredAd"),
    sort: str = Query(default="default", description="default, distance, rating or name"),
    order: str = Query(default="desc", description="asc or desc"),
    page: int = Query(default=1, description="1-based page number"),
    page_size: int | None = Query(default=None, alias="pageSize"),
    nearby: bool = Query(default=True, description="Expand the city filter to nearby cities"),
    radius_km: float | None = Query(default=None, alias="radiusKm"),
    token: int | None = Query(default=None, description="Caller request token, echoed back"),
) -> RankedPage:
    """Search active businesses.

    Returns:
        RankedPage with items, total, page, pageSize and totalPages.
    """
    request = SearchRequest(
        term=q,
        category_slug=category,
        city=city,
        country=country,
        is_premium=is_premium,
        is_verified=is_verified,
        has_coupons=has_coupons,
        accepts_orders_online=accepts_orders_online,
        is_kid_friendly=is_kid_friendly,
        is_sponsored_ad=is_sponsored_ad,
        sort_key=sort,
        sort_direction=order,
        page=page,
        page_size=page_size if page_size is not None else get_settings().default_page_size,
        nearby=nearby,
        radius_km=radius_km,
        request_token=token,
    )
    return await search(request)


@router.get("/places/nearby", response_model=NearbyPlacesResponse)
async def get_nearby_places(
    name: str = Query(description="City name", examples=["Berlin"]),
    radius_km: float | None = Query(default=None, alias="radiusKm"),
) -> NearbyPlacesResponse:
    """List cities within the radius of `name` (falls back to just `name`)."""
    radius = radius_km if radius_km is not None else get_settings().proximity_radius_km
    places = await nearby_places(name, radius)
    return NearbyPlacesResponse(place=name, radius_km=radius, places=places)
