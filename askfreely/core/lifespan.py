"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring. Store client, rate limiter and the
mail HTTP client are created lazily on first use (so the app also works
without lifespan, e.g. under httpx ASGITransport); shutdown closes them.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from askfreely.core.config import get_settings
from askfreely.core.limiter import close_rate_limiter
from askfreely.infrastructure.external.email import close_mail_http_client
from askfreely.infrastructure.firebase import close_database
from askfreely.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Shutdown order: mail HTTP client, store client, rate limiter (Redis).
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    logger.info(
        "Starting %s %s (store=%s, rate_limit=%s)",
        settings.app_name,
        settings.app_version,
        settings.database_backend,
        settings.rate_limit_backend,
    )

    yield

    # ---- Shutdown ----
    await close_mail_http_client()
    logger.info("Mail HTTP client closed")

    await close_database()

    await close_rate_limiter()
    logger.info("Rate limiter closed")
