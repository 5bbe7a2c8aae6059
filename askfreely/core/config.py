"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (Realtime Database URL and
service account) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults except the Firebase ones, which are required
    when database_backend is 'firebase' (see validate_backends).
    """

    # App
    app_name: str = "askfreely"
    app_version: str = "1.0.0"
    debug: bool = False
    public_site_url: str = "https://askfreely.live"

    # Store: "firebase" (Realtime Database REST) or "memory" (process-local, dev/tests)
    database_backend: str = "firebase"
    firebase_database_url: str = ""
    # Service account as a JSON string or a file path...
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # ...or as the three discrete fields (private key may contain literal "\n").
    firebase_project_id: str | None = None
    firebase_client_email: str | None = None
    firebase_private_key: SecretStr | None = None

    # Mail provider (Resend)
    resend_api_key: SecretStr | None = None
    resend_from_email: str = "Ask Freely <onboarding@resend.dev>"
    resend_api_url: str = "https://api.resend.com/emails"
    outbound_timeout_seconds: float = 30.0
    email_queue_batch_size: int = 10

    # Rate limiting: "memory" (per process) or "redis" (shared across instances)
    rate_limit_backend: str = "memory"
    questions_per_ip_max: int = 20
    questions_per_ip_window_ms: int = 3_600_000
    questions_per_fingerprint_max: int = 10
    questions_per_fingerprint_window_ms: int = 3_600_000
    global_per_minute_max: int = 100
    global_per_minute_window_ms: int = 60_000

    # Redis (rate_limit_backend == "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    # Header set by the scheduler so GET invocations of the queue processor are accepted.
    scheduler_event_header: str = "X-Scheduled-Event"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate store and rate-limit backends.

        - firebase: FIREBASE_DATABASE_URL plus one credential source required.
        - memory: nothing required.
        """
        if self.database_backend == "firebase":
            if not self.firebase_database_url:
                raise ValueError(
                    "FIREBASE_DATABASE_URL is required when database_backend is 'firebase'. "
                    "Set in environment or .env file."
                )
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            has_fields = bool(
                self.firebase_project_id
                and self.firebase_client_email
                and self.firebase_private_key
                and self.firebase_private_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path and not has_fields:
                raise ValueError(
                    "When database_backend is 'firebase', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string), "
                    "FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file), or FIREBASE_PROJECT_ID, "
                    "FIREBASE_CLIENT_EMAIL and FIREBASE_PRIVATE_KEY."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'firebase' or 'memory', got: {self.database_backend!r}"
            )
        if self.rate_limit_backend not in ("memory", "redis"):
            raise ValueError(
                f"rate_limit_backend must be 'memory' or 'redis', got: {self.rate_limit_backend!r}"
            )
        if self.email_queue_batch_size < 1:
            raise ValueError("email_queue_batch_size must be >= 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
