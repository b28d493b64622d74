"""Redis store for caching.

Handles:
- Caching with TTL policies
- JSON payload helpers

TTL policies:
- Nearby-city lists: ~1 hour (city coordinates change rarely)
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from bizdir.settings import get_settings

# TTL constants (in seconds)
TTL_NEARBY_PLACES = 3600  # 1 hour

# Key prefixes
PREFIX_NEARBY = "nearby:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_get_json(key: str) -> Any | None:
    """Get JSON value from cache."""
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: Any, ttl: int) -> None:
    """Set JSON value in cache."""
    await cache_set(key, json.dumps(value), ttl)


# ============================================================
# Nearby places cache
# ============================================================


def _nearby_key(place_name: str, radius_km: float) -> str:
    # Case-sensitive, like the store's city lookups
    return f"{PREFIX_NEARBY}{place_name.strip()}:{radius_km:g}"


async def get_nearby_places_cache(place_name: str, radius_km: float) -> list[str] | None:
    """Get cached nearby-city names for a city and radius."""
    payload = await cache_get_json(_nearby_key(place_name, radius_km))
    if isinstance(payload, list):
        return [str(name) for name in payload]
    return None


async def set_nearby_places_cache(place_name: str, radius_km: float, names: list[str]) -> None:
    """Cache nearby-city names for a city and radius."""
    await cache_set_json(_nearby_key(place_name, radius_km), names, TTL_NEARBY_PLACES)
