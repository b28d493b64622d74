"""API routes."""

from fastapi import APIRouter

from bizdir.routes import businesses, categories, search

api_router = APIRouter()

# Search and proximity hints
api_router.include_router(search.router, prefix="/v1", tags=["search"])

# Listing detail, sponsored listings, counters
api_router.include_router(businesses.router, prefix="/v1/businesses", tags=["businesses"])

# Category browse
api_router.include_router(categories.router, prefix="/v1/categories", tags=["categories"])
