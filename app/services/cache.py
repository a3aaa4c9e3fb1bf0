"""Redis read-through cache for location lookups (business hours, holidays).

The cache is advisory: any Redis failure is logged and treated as a miss, and
writers delete the affected key before they return.
"""

import json
import logging
from functools import lru_cache
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.config import get_settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "smooth_booking"


class Cache:
    """Redis cache wrapper with JSON serialization."""

    def __init__(self, url: str = "", ttl: int = 300, client: redis.Redis | None = None):
        self.url = url
        self.ttl = ttl
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or bool(self.url)

    def _get_client(self) -> redis.Redis | None:
        """Lazy load Redis client."""
        if self._client is None and self.url:
            self._client = redis.from_url(self.url, decode_responses=True)
        return self._client

    @staticmethod
    def key(*parts: Any) -> str:
        return ":".join([KEY_PREFIX, *(str(part) for part in parts)])

    async def get(self, key: str) -> Any | None:
        """Get value from cache."""
        client = self._get_client()
        if client is None:
            return None
        try:
            value = await client.get(key)
        except RedisError as e:
            logger.warning(f"Cache get failed for {key}: {e}")
            return None
        if value is None:
            logger.debug(f"Cache MISS: {key}")
            return None
        logger.debug(f"Cache HIT: {key}")
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Set value in cache with TTL."""
        client = self._get_client()
        if client is None:
            return False
        try:
            await client.set(key, json.dumps(value), ex=ttl or self.ttl)
        except RedisError as e:
            logger.warning(f"Cache set failed for {key}: {e}")
            return False
        return True

    async def delete(self, key: str) -> bool:
        """Delete value from cache."""
        client = self._get_client()
        if client is None:
            return False
        try:
            await client.delete(key)
        except RedisError as e:
            logger.warning(f"Cache delete failed for {key}: {e}")
            return False
        return True


NULL_CACHE = Cache()


@lru_cache
def get_cache() -> Cache:
    """Process-wide cache built from settings."""
    settings = get_settings()
    return Cache(url=settings.redis_url, ttl=settings.cache_ttl_seconds)
