"""Proximity resolution for city filters.

"Businesses near X" expands the city filter to every city whose stored
coordinates lie within a great-circle radius of X. Cities without coordinates
never expand: the filter stays on the named city alone.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from bizdir.schemas.business import Coordinates, PlaceCoordinates
from bizdir.services.errors import call_store
from bizdir.stores.business_store import BusinessStore
from bizdir.stores.redis import get_nearby_places_cache, set_nearby_places_cache

logger = logging.getLogger("uvicorn.error")

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 50.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two lat/lon points (degrees)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push `a` a hair outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def places_within_radius(
    place_name: str,
    origin: Coordinates | None,
    places: Iterable[PlaceCoordinates],
    radius_km: float = DEFAULT_RADIUS_KM,
) -> list[str]:
    """Select place names within `radius_km` of `origin`.

    Returns names in snapshot order without duplicates. Falls back to
    `[place_name]` when the origin is unknown or nothing is in range.
    """
    if origin is None:
        return [place_name]

    nearby: list[str] = []
    seen: set[str] = set()
    for place in places:
        if place.name in seen:
            continue
        if haversine_km(origin.lat, origin.lon, place.lat, place.lon) <= radius_km:
            nearby.append(place.name)
            seen.add(place.name)

    return nearby or [place_name]


async def get_nearby_places(
    store: BusinessStore,
    place_name: str,
    radius_km: float = DEFAULT_RADIUS_KM,
    *,
    use_cache: bool = True,
) -> list[str]:
    """Resolve the names of cities within `radius_km` of `place_name`.

    Store failures propagate as StoreFailure; only a missing city or missing
    coordinates degrade to the singleton result.
    """
    if use_cache:
        cached = await _try_get_cached_nearby(place_name, radius_km)
        if cached is not None:
            return cached

    origin = await call_store(
        store.fetch_place_coordinates(place_name),
        operation="fetch_place_coordinates",
    )
    if origin is None:
        logger.info(f"No coordinates for city {place_name!r}, proximity expansion skipped")
        return [place_name]

    places = await call_store(
        store.fetch_all_places_with_coordinates(),
        operation="fetch_all_places_with_coordinates",
    )
    nearby = places_within_radius(place_name, origin, places, radius_km)

    if use_cache:
        await _try_set_cached_nearby(place_name, radius_km, nearby)
    return nearby


async def _try_get_cached_nearby(place_name: str, radius_km: float) -> list[str] | None:
    try:
        return await get_nearby_places_cache(place_name, radius_km)
    except RuntimeError:
        return None
    except Exception:
        logger.warning("Nearby places cache read failed; continuing without cache")
        return None


async def _try_set_cached_nearby(place_name: str, radius_km: float, names: list[str]) -> None:
    try:
        await set_nearby_places_cache(place_name, radius_km, names)
    except RuntimeError:
        return
    except Exception:
        logger.warning("Nearby places cache write failed; continuing without cache")
