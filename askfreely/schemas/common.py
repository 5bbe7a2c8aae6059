"""Error response schema shared by all endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="Caller-facing message")
    code: str | None = Field(default=None, description="Machine-readable error code")
    retry_after: int | None = Field(
        default=None,
        alias="retryAfter",
        description="Seconds until the rate limit window resets (429 only)",
    )
