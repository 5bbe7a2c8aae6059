"""Realtime Database client bootstrap.

Initialized lazily once per process (first call to get_database()) and
reused across requests. Credentials come from FIREBASE_SERVICE_ACCOUNT_KEY
(JSON string), FIREBASE_SERVICE_ACCOUNT_PATH (file path), or the discrete
FIREBASE_PROJECT_ID / FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY variables.
With DATABASE_BACKEND=memory an InMemoryRealtimeDatabase is used instead.
"""

import json
import logging
from pathlib import Path

from askfreely.core.config import Settings, get_settings
from askfreely.infrastructure.firebase._rest_client import (
    RealtimeDatabaseRESTClient,
    _get_credentials,
)
from askfreely.infrastructure.firebase.memory import InMemoryRealtimeDatabase
from askfreely.infrastructure.firebase.reference import RealtimeDatabase

logger = logging.getLogger(__name__)

_database: RealtimeDatabase | None = None


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key, file path, or discrete fields."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(f"FIREBASE_SERVICE_ACCOUNT_PATH file not found: {resolved}")
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    if settings.firebase_private_key and settings.firebase_client_email:
        # Private keys pasted into env vars usually carry literal "\n".
        private_key = settings.firebase_private_key.get_secret_value().replace("\\n", "\n")
        return {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "client_email": settings.firebase_client_email,
            "private_key": private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }
    return None


def init_database(settings: Settings | None = None) -> RealtimeDatabase:
    """Build the configured database backend (does not cache it).

    Raises:
        ValueError: Missing or malformed credentials for the firebase backend.
    """
    s = settings or get_settings()
    if s.database_backend == "memory":
        logger.info("Using in-memory Realtime Database (state is process-local)")
        return InMemoryRealtimeDatabase()
    key_dict = _load_key_dict(s)
    if not key_dict:
        raise ValueError("Firebase service account credentials are not configured")
    credentials = _get_credentials(key_dict)
    logger.info("Realtime Database client initialized for %s", s.firebase_database_url)
    return RealtimeDatabaseRESTClient(s.firebase_database_url, credentials)


def get_database() -> RealtimeDatabase:
    """Return the process-wide database client, creating it on first use."""
    global _database
    if _database is None:
        _database = init_database()
    return _database


def set_database(database: RealtimeDatabase | None) -> None:
    """Replace the process-wide client (scripts and tests)."""
    global _database
    _database = database


async def close_database() -> None:
    """Close the client's HTTP connection pool. Call from app shutdown."""
    global _database
    if _database is not None:
        await _database.aclose()
        _database = None
        logger.info("Realtime Database client closed")
