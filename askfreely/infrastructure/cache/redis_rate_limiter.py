"""Redis-backed fixed-window rate limiter.

Same contract as InMemoryRateLimiter, but counters live in Redis so every
serving instance shares them. Each key is a counter created by INCR and given
a PEXPIRE of the window length on its first increment; the window rolls over
when Redis expires the key.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import redis.asyncio as redis

from askfreely.core.limiter import RateLimitConfig, RateLimitDecision

if TYPE_CHECKING:
    from askfreely.core.config import Settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "ratelimit"


def rate_limit_key(key: str) -> str:
    """Redis key for a limiter key (limiter keys may contain ':', e.g. IPv6)."""
    return f"{KEY_PREFIX}:{key}"


class RedisRateLimiter:
    """Fixed-window limiter shared across instances via Redis."""

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize with a Redis client (decode_responses=True expected)."""
        self.redis = redis_client

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RedisRateLimiter":
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password.get_secret_value() if settings.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        logger.info(
            "Redis rate limiter configured: %s:%s",
            settings.redis_host,
            settings.redis_port,
        )
        return cls(client)

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.get(rate_limit_key(key))
            pipe.pttl(rate_limit_key(key))
            raw_count, ttl_ms = await pipe.execute()
        # Missing key (or no TTL) means the window has rolled over.
        if raw_count is None or ttl_ms is None or ttl_ms < 0:
            count, remaining_ms = 0, config.window_ms
        else:
            count, remaining_ms = int(raw_count), int(ttl_ms)
        if count >= config.max:
            return RateLimitDecision(
                allowed=False,
                retry_after_seconds=max(1, math.ceil(remaining_ms / 1000)),
            )
        return RateLimitDecision(allowed=True, remaining=config.max - count - 1)

    async def increment(self, key: str, config: RateLimitConfig) -> None:
        redis_key = rate_limit_key(key)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(redis_key)
            pipe.pttl(redis_key)
            _count, ttl_ms = await pipe.execute()
        # First increment of a window (or a key that lost its TTL) starts the window.
        if ttl_ms is None or ttl_ms < 0:
            await self.redis.pexpire(redis_key, config.window_ms)

    async def aclose(self) -> None:
        """Close the Redis connection. Call on app shutdown."""
        await self.redis.aclose()
        logger.info("Redis rate limiter disconnected")
