"""Tests for the Redis-backed CacheService."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from travel_agent.infra.redis import CacheService


@pytest.fixture
def redis() -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    return client


class TestCacheService:
    """Tests for CacheService."""

    @pytest.mark.asyncio
    async def test_set_json_uses_default_ttl(self, redis):
        cache = CacheService(redis, default_ttl=60)

        assert await cache.set_json("flight:bkk:nrt", {"price": 15000}) is True
        redis.set.assert_awaited_once_with("flight:bkk:nrt", '{"price": 15000}', ex=60)

    @pytest.mark.asyncio
    async def test_explicit_ttl_wins(self, redis):
        cache = CacheService(redis, default_ttl=60)
        await cache.safe_set_json("hotel:tokyo:5", {"price": 10000}, ttl=5)
        assert redis.set.call_args.kwargs["ex"] == 5

    @pytest.mark.asyncio
    async def test_get_json_round_trip(self, redis):
        redis.get.return_value = json.dumps({"avg_temp": 6, "condition": "Sunny"})
        cache = CacheService(redis, default_ttl=60)

        assert await cache.get_json("weather:tokyo:january") == {"avg_temp": 6, "condition": "Sunny"}

    @pytest.mark.asyncio
    async def test_miss(self, redis):
        assert await CacheService(redis, default_ttl=60).safe_get_json("missing") is None

    @pytest.mark.asyncio
    async def test_safe_get_treats_failures_as_miss(self, redis):
        """Test that connection errors and corrupt values read as a miss."""
        cache = CacheService(redis, default_ttl=60)

        redis.get.side_effect = RedisConnectionError("down")
        assert await cache.safe_get_json("key") is None

        redis.get.side_effect = None
        redis.get.return_value = "{not json"
        assert await cache.safe_get_json("key") is None

    @pytest.mark.asyncio
    async def test_safe_set_drops_failures(self, redis):
        redis.set.side_effect = RedisConnectionError("down")
        cache = CacheService(redis, default_ttl=60)

        assert await cache.safe_set_json("key", {"price": 1}) is False

    @pytest.mark.asyncio
    async def test_safe_set_rejects_unserializable(self, redis):
        cache = CacheService(redis, default_ttl=60)
        assert await cache.safe_set_json("key", {"when": object()}) is False
        redis.set.assert_not_awaited()
