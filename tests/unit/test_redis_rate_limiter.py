"""Tests for RedisRateLimiter with a mocked redis client."""

from unittest.mock import AsyncMock, MagicMock

from askfreely.core.limiter import RateLimitConfig
from askfreely.infrastructure.cache.redis_rate_limiter import RedisRateLimiter, rate_limit_key

CONFIG = RateLimitConfig(max=2, window_ms=60_000)


def _redis_with_results(*results) -> MagicMock:
    """Redis mock whose pipelines return the given execute() results in order."""
    pipe = MagicMock()
    pipe.execute = AsyncMock(side_effect=list(results))
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=None)
    client = MagicMock()
    client.pipeline = MagicMock(return_value=pipe)
    client.pexpire = AsyncMock()
    client.aclose = AsyncMock()
    client.pipe = pipe
    return client


async def test_check_missing_key_allows() -> None:
    client = _redis_with_results([None, -2])
    decision = await RedisRateLimiter(client).check("ip:1.2.3.4", CONFIG)
    assert decision.allowed is True
    assert decision.remaining == 1
    client.pipe.get.assert_called_once_with("ratelimit:ip:1.2.3.4")


async def test_check_at_max_denies_with_ttl() -> None:
    client = _redis_with_results(["2", 4_200])
    decision = await RedisRateLimiter(client).check("global", CONFIG)
    assert decision.allowed is False
    assert decision.retry_after_seconds == 5


async def test_first_increment_sets_window_expiry() -> None:
    client = _redis_with_results([1, -1])
    await RedisRateLimiter(client).increment("global", CONFIG)
    client.pipe.incr.assert_called_once_with("ratelimit:global")
    client.pexpire.assert_awaited_once_with("ratelimit:global", 60_000)


async def test_later_increment_keeps_expiry() -> None:
    client = _redis_with_results([2, 30_000])
    await RedisRateLimiter(client).increment("global", CONFIG)
    client.pexpire.assert_not_awaited()


async def test_aclose_closes_client() -> None:
    client = _redis_with_results()
    await RedisRateLimiter(client).aclose()
    client.aclose.assert_awaited_once()


def test_rate_limit_key() -> None:
    assert rate_limit_key("fp:abc") == "ratelimit:fp:abc"
