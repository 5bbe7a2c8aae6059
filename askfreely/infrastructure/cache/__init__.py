"""Shared counters (Redis) for limits that must hold across instances."""

from askfreely.infrastructure.cache.redis_rate_limiter import RedisRateLimiter

__all__ = ["RedisRateLimiter"]
