"""
Redis caching for spot search results.

CACHING STRATEGY
================

What we cache:
  - Spot search responses (one entry per normalized filter set)
  - Cache key pattern: "spots:list:<sorted query string>"

Why:
  - Search is the hottest read and joins spots, reviews and images
  - Listings change far less often than they are browsed

Invalidation strategy:
  - Any write that changes a listing row, its preview image or its average
    rating (spot create/update/delete, spot image add/delete, review
    create/update/delete) drops every "spots:list:" key.
  - TTL-based expiry as safety net (REDIS_CACHE_TTL).

Bookings do not appear in search results, so they never invalidate.
Spot detail pages are not cached.
"""

import json
from typing import Optional
from urllib.parse import urlencode

from redis.exceptions import RedisError

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.metrics import record_cache_operation
from app.infrastructure.redis_client import get_redis
from app.schemas.spot import SpotFilters

logger = get_logger(__name__)

SPOT_LIST_PREFIX = "spots:list:"


def make_spot_list_key(filters: SpotFilters) -> str:
    params = filters.model_dump(exclude_none=True)
    return SPOT_LIST_PREFIX + urlencode(sorted(params.items()))


async def get_cached_spots(filters: SpotFilters) -> Optional[dict]:
    """Retrieve a cached spot search response."""
    client = await get_redis()
    if not client:
        return None

    key = make_spot_list_key(filters)
    try:
        data = await client.get(key)
    except RedisError as e:
        logger.error("cache_get_error", key=key, error=str(e))
        return None

    record_cache_operation("get", hit=data is not None)
    if data is None:
        logger.debug("cache_miss", key=key)
        return None
    logger.debug("cache_hit", key=key)
    return json.loads(data)


async def set_cached_spots(filters: SpotFilters, data: dict) -> None:
    """Cache a spot search response with TTL."""
    client = await get_redis()
    if not client:
        return

    ttl = get_settings().REDIS_CACHE_TTL
    key = make_spot_list_key(filters)
    try:
        await client.setex(key, ttl, json.dumps(data, default=str))
        record_cache_operation("set", hit=False)
        logger.debug("cache_set", key=key, ttl=ttl)
    except RedisError as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_spot_cache() -> None:
    """
    Invalidate all cached spot searches.
    Uses SCAN so the keyspace is never blocked.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{SPOT_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except RedisError as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
    except RedisError as e:
        return {"status": "error", "error": str(e)}

    hits = info.get("keyspace_hits", 0)
    misses = info.get("keyspace_misses", 0)
    return {
        "status": "connected",
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
    }
