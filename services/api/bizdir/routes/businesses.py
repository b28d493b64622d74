"""Business listing endpoints.

GET  /v1/businesses/sponsored       - Sponsored listings for a city/category
GET  /v1/businesses/{business_id}   - Listing detail (active only)
POST /v1/businesses/{business_id}/views, /clicks - Atomic counters
"""

from fastapi import APIRouter, HTTPException, Path, Query, Response

from bizdir.schemas import BusinessRecord
from bizdir.schemas.common import BUSINESS_NOT_FOUND, ErrorResponse
from bizdir.services.catalog import get_business, get_sponsored_businesses, record_click, record_view

router = APIRouter()


def _not_found(business_id: int) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorResponse.build(
            BUSINESS_NOT_FOUND,
            f"Business {business_id} not found",
            {"business_id": business_id},
        ).model_dump(),
    )


@router.get("/sponsored", response_model=list[BusinessRecord])
async def list_sponsored(
    city: str | None = Query(default=None, description="City name"),
    category: str | None = Query(default=None, description="Category slug"),
) -> list[BusinessRecord]:
    """Sponsored listings; unknown city/category yields an empty list."""
    return await get_sponsored_businesses(city=city, category_slug=category)


@router.get("/{business_id}", response_model=BusinessRecord)
async def get_business_detail(
    business_id: int = Path(ge=1, description="Business id"),
) -> BusinessRecord:
    """Listing detail with joined category, city, country and reviews."""
    business = await get_business(business_id)
    if business is None:
        raise _not_found(business_id)
    return business


@router.post("/{business_id}/views", status_code=204)
async def track_view(business_id: int = Path(ge=1)) -> Response:
    if not await record_view(business_id):
        raise _not_found(business_id)
    return Response(status_code=204)


@router.post("/{business_id}/clicks", status_code=204)
async def track_click(business_id: int = Path(ge=1)) -> Response:
    if not await record_click(business_id):
        raise _not_found(business_id)
    return Response(status_code=204)
