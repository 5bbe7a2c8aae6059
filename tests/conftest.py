"""Pytest configuration and fixtures for askfreely.

HTTP tests run against askfreely.main:app through httpx ASGITransport with the
in-memory store, an in-memory rate limiter on a fake clock and a mocked mail
sender. The environment is forced to the memory backends before the app is
imported.
"""

import os

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_BACKEND"] = "memory"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from askfreely.api.v1.dependencies import (  # noqa: E402
    get_db,
    get_limiter_backend,
    get_mail_sender,
)
from askfreely.core.config import get_settings  # noqa: E402
from askfreely.core.limiter import InMemoryRateLimiter, limiter  # noqa: E402
from askfreely.infrastructure.firebase import (  # noqa: E402
    InMemoryRealtimeDatabase,
    set_database,
)
from askfreely.main import app  # noqa: E402

get_settings.cache_clear()

START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock for rate limiter tests."""

    def __init__(self, now_ms: int = START_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock: FakeClock) -> InMemoryRateLimiter:
    return InMemoryRateLimiter(clock=fake_clock)


@pytest.fixture
def memory_db():
    """Fresh in-memory store, also installed as the process-wide database."""
    db = InMemoryRealtimeDatabase()
    set_database(db)
    yield db
    set_database(None)


@pytest.fixture
def mail_sender() -> AsyncMock:
    """Mail sender whose send() returns a provider id."""
    sender = AsyncMock()
    sender.send = AsyncMock(return_value="re_test_1")
    return sender


@pytest.fixture
def app_overrides(memory_db, rate_limiter, mail_sender):
    """Point the app's dependencies at the test doubles."""
    app.dependency_overrides[get_db] = lambda: memory_db
    app.dependency_overrides[get_limiter_backend] = lambda: rate_limiter
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender
    limiter.reset()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_overrides) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def lenient_client(app_overrides) -> AsyncClient:
    """Client that returns 500 responses instead of re-raising app exceptions."""
    transport = ASGITransport(app=app_overrides, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
