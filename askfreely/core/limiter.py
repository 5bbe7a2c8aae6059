"""Rate limiting for question submission and the queue trigger endpoint.

Two layers:
- slowapi ``limiter`` (per remote address) for simple decorator limits on
  operational endpoints such as the manual email-queue trigger.
- Fixed-window counters (``RateLimiterBackend``) for question intake, where
  several keys (global, per-IP, per-fingerprint) are checked first and only
  consumed once the submission is accepted.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import TYPE_CHECKING, Protocol

from slowapi import Limiter
from slowapi.util import get_remote_address

if TYPE_CHECKING:
    from askfreely.core.config import Settings

limiter = Limiter(key_func=get_remote_address)

PROCESS_QUEUE_LIMIT = "30/minute"

limit_process_queue = limiter.limit(PROCESS_QUEUE_LIMIT)

GLOBAL_KEY = "global"
UNKNOWN_CLIENT = "unknown"


@dataclass(frozen=True)
class RateLimitConfig:
    """Allow at most ``max`` actions per key within ``window_ms`` milliseconds."""

    max: int
    window_ms: int


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of a non-mutating check. Denial is a normal result, not an error."""

    allowed: bool
    remaining: int | None = None
    retry_after_seconds: int | None = None


@dataclass(frozen=True)
class QuestionRateLimits:
    """The three limiter configurations applied to question submission."""

    per_ip: RateLimitConfig
    per_fingerprint: RateLimitConfig
    global_per_minute: RateLimitConfig

    @classmethod
    def from_settings(cls, settings: "Settings") -> "QuestionRateLimits":
        return cls(
            per_ip=RateLimitConfig(
                settings.questions_per_ip_max, settings.questions_per_ip_window_ms
            ),
            per_fingerprint=RateLimitConfig(
                settings.questions_per_fingerprint_max,
                settings.questions_per_fingerprint_window_ms,
            ),
            global_per_minute=RateLimitConfig(
                settings.global_per_minute_max, settings.global_per_minute_window_ms
            ),
        )


QUESTIONS_PER_IP = RateLimitConfig(max=20, window_ms=3_600_000)
QUESTIONS_PER_FINGERPRINT = RateLimitConfig(max=10, window_ms=3_600_000)
GLOBAL_PER_MINUTE = RateLimitConfig(max=100, window_ms=60_000)

DEFAULT_QUESTION_LIMITS = QuestionRateLimits(
    per_ip=QUESTIONS_PER_IP,
    per_fingerprint=QUESTIONS_PER_FINGERPRINT,
    global_per_minute=GLOBAL_PER_MINUTE,
)


def ip_key(address: str) -> str:
    """Limiter key for a client address."""
    return f"ip:{address}"


def fingerprint_key(fingerprint: str) -> str:
    """Limiter key for a client-generated browser fingerprint."""
    return f"fp:{fingerprint}"


class RateLimiterBackend(Protocol):
    """Fixed-window counter keyed by arbitrary identity strings."""

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        """Return whether one more action is allowed; never consumes quota."""
        ...

    async def increment(self, key: str, config: RateLimitConfig) -> None:
        """Record one consumed action for key."""
        ...


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class _Window:
    count: int
    reset_at: int


class InMemoryRateLimiter:
    """Process-local fixed-window limiter.

    State lives in this process only: each serving instance counts on its own
    and counters reset on restart. Use RedisRateLimiter when limits must hold
    across instances.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        """Initialize with an optional millisecond clock (tests pass a fake)."""
        self._clock = clock or _now_ms
        self._windows: dict[str, _Window] = {}
        self._lock = Lock()

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                count, reset_at = 0, now + config.window_ms
            else:
                count, reset_at = window.count, window.reset_at
        if count >= config.max:
            return RateLimitDecision(
                allowed=False,
                retry_after_seconds=math.ceil((reset_at - now) / 1000),
            )
        return RateLimitDecision(allowed=True, remaining=config.max - count - 1)

    async def increment(self, key: str, config: RateLimitConfig) -> None:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + config.window_ms)
            else:
                window.count += 1

    def reset(self) -> None:
        """Drop all windows."""
        with self._lock:
            self._windows.clear()


def create_rate_limiter(settings: "Settings | None" = None) -> RateLimiterBackend:
    """Create the question-intake limiter backend from settings.

    Raises:
        ValueError: Unknown backend.
    """
    from askfreely.core.config import get_settings

    s = settings or get_settings()
    backend = s.rate_limit_backend.lower()
    if backend == "memory":
        return InMemoryRateLimiter()
    if backend == "redis":
        from askfreely.infrastructure.cache.redis_rate_limiter import RedisRateLimiter

        return RedisRateLimiter.from_settings(s)
    raise ValueError(
        f"Unknown rate limit backend: {backend}. Supported: 'memory', 'redis'"
    )


_rate_limiter: RateLimiterBackend | None = None


def get_rate_limiter() -> RateLimiterBackend:
    """Return the process-wide limiter, creating it on first use."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = create_rate_limiter()
    return _rate_limiter


async def close_rate_limiter() -> None:
    """Release the limiter's connection (Redis). Call from app shutdown."""
    global _rate_limiter
    aclose = getattr(_rate_limiter, "aclose", None)
    if aclose is not None:
        await aclose()
    _rate_limiter = None
