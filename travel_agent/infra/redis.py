"""Redis connection handling and the JSON cache used by the agents."""

import json
import logging
from typing import Any

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from travel_agent.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Process-wide pool, opened by the application lifespan
redis_pool: ConnectionPool | None = None
redis_client: Redis | None = None


async def init_redis(config: Settings | None = None) -> Redis:
    """Open the pool and check the server answers PING.

    Raises:
        RedisError, OSError: the server is unreachable
    """
    global redis_pool, redis_client
    config = config or default_settings

    redis_pool = ConnectionPool.from_url(
        str(config.REDIS_URL),
        max_connections=config.REDIS_MAX_CONNECTIONS,
        decode_responses=True,
    )
    redis_client = Redis(connection_pool=redis_pool)
    await redis_client.ping()
    return redis_client


async def close_redis() -> None:
    """Close the client and the pool. Safe to call when nothing is open."""
    global redis_pool, redis_client

    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
    if redis_pool is not None:
        await redis_pool.disconnect()
        redis_pool = None


class CacheService:
    """JSON documents with an expiry, keyed by plain strings."""

    def __init__(self, redis: Redis, default_ttl: int | None = None) -> None:
        self.redis = redis
        self.default_ttl = default_ttl or default_settings.REDIS_DEFAULT_TTL

    async def get_json(self, key: str) -> Any | None:
        raw = await self.redis.get(key)
        if not raw:
            return None
        return json.loads(raw)

    async def set_json(self, key: str, data: Any, ttl: int | None = None) -> bool:
        payload = json.dumps(data)
        return bool(await self.redis.set(key, payload, ex=ttl or self.default_ttl))

    # ============ Best-effort Access ============

    async def safe_get_json(self, key: str) -> Any | None:
        """Read a document, treating any cache failure as a miss."""
        try:
            return await self.get_json(key)
        except (RedisError, OSError, ValueError) as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

    async def safe_set_json(self, key: str, data: Any, ttl: int | None = None) -> bool:
        """Write a document. Failures are logged and reported as False."""
        try:
            stored = await self.set_json(key, data, ttl)
        except (RedisError, OSError, TypeError, ValueError) as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False
        logger.debug(f"Cached {key}")
        return stored
