"""Infrastructure module - Redis cache."""

from travel_agent.infra.redis import CacheService, close_redis, init_redis

__all__ = [
    "CacheService",
    "close_redis",
    "init_redis",
]
