"""Tests for the Redis cache wrapper."""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.services.cache import Cache

pytestmark = pytest.mark.asyncio


class TestCache:
    async def test_disabled_cache_is_a_noop(self):
        cache = Cache()
        assert cache.enabled is False
        assert await cache.get("k") is None
        assert await cache.set("k", {"a": 1}) is False
        assert await cache.delete("k") is False

    async def test_round_trip_through_client(self):
        client = AsyncMock()
        client.get.return_value = json.dumps({"1": {"open": "09:00"}})
        cache = Cache(ttl=60, client=client)

        assert await cache.set("k", {"1": {"open": "09:00"}}) is True
        client.set.assert_awaited_once_with("k", json.dumps({"1": {"open": "09:00"}}), ex=60)
        assert await cache.get("k") == {"1": {"open": "09:00"}}

    async def test_redis_errors_are_misses(self):
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("down")
        client.set.side_effect = RedisConnectionError("down")
        client.delete.side_effect = RedisConnectionError("down")
        cache = Cache(client=client)

        assert await cache.get("k") is None
        assert await cache.set("k", 1) is False
        assert await cache.delete("k") is False

    async def test_key_format(self):
        assert Cache.key("business_hours", 7) == "smooth_booking:business_hours:7"
