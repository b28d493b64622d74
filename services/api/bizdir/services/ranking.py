"""Ranking service for business search results.

Ranking logic:
1. Sponsored ads first, regardless of the requested sort key
2. Within each tier, the requested sort key:
   - default: premium first, then newest first
   - rating: mean review rating (asc/desc), ties keep input order
   - name: case-sensitive name compare (asc/desc)
   - distance: created_at (asc/desc) as a proxy ordering; no searcher
     location is available, so this is not a real distance sort

All sorts are stable, so equal items keep their relative input order.
"""

from collections.abc import Sequence
from datetime import datetime

from bizdir.schemas.business import BusinessRecord

SORT_DEFAULT = "default"
SORT_DISTANCE = "distance"
SORT_RATING = "rating"
SORT_NAME = "name"

# Declared stand-in for a true distance ordering
DISTANCE_PROXY_FIELD = "created_at"


def average_rating(business: BusinessRecord) -> float:
    """Mean review rating, or 0.0 for a business without reviews."""
    if not business.reviews:
        return 0.0
    return sum(review.rating for review in business.reviews) / len(business.reviews)


def _created_at(business: BusinessRecord) -> datetime:
    return business.created_at


def _sort_within_tier(items: list[BusinessRecord], sort_key: str, descending: bool) -> list[BusinessRecord]:
    if sort_key == SORT_RATING:
        return sorted(items, key=average_rating, reverse=descending)
    if sort_key == SORT_NAME:
        return sorted(items, key=lambda b: b.name, reverse=descending)
    if sort_key == SORT_DISTANCE:
        return sorted(items, key=lambda b: getattr(b, DISTANCE_PROXY_FIELD), reverse=descending)

    # Default: newest first, then a stable pass puts premium ahead
    newest_first = sorted(items, key=_created_at, reverse=True)
    return sorted(newest_first, key=lambda b: not b.is_premium)


def rank(
    candidates: Sequence[BusinessRecord],
    sort_key: str = SORT_DEFAULT,
    sort_direction: str = "desc",
) -> list[BusinessRecord]:
    """Order candidates for display.

    Args:
        candidates: Filtered businesses in store order.
        sort_key: One of default/distance/rating/name.
        sort_direction: "asc" or "desc" (ignored by the default sort).

    Returns:
        A new list; inputs are not modified.
    """
    descending = sort_direction == "desc"
    sponsored = [b for b in candidates if b.is_sponsored_ad]
    organic = [b for b in candidates if not b.is_sponsored_ad]
    return _sort_within_tier(sponsored, sort_key, descending) + _sort_within_tier(
        organic, sort_key, descending
    )
