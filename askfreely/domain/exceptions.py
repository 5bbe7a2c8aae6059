"""Domain exceptions for Ask Freely.

Defines exceptions that represent expected request rejections (bad input,
rate limits, missing or closed events) and per-record delivery failures.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AskFreelyException(Exception):
    """Base exception for all Ask Freely errors.

    Attributes:
        message: Human-readable error description (returned to the caller).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, retry_after).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP layer."""
        return {"error": self.message, "code": self.error_code}


class BadRequestException(AskFreelyException):
    """Raised when the request body is malformed or a field fails validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "BAD_REQUEST", details)


class QuestionValidationError(BadRequestException):
    """Raised by the question validator; reason is a stable machine code."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message, field="question")
        self.reason = reason
        self.details["reason"] = reason


class RateLimitedException(AskFreelyException):
    """Raised when a rate limit key has no remaining quota in its window."""

    def __init__(self, message: str, retry_after: int, limit_key: str | None = None) -> None:
        """Initialize with message and the seconds until the window resets.

        Args:
            message: User-facing message naming which limit was hit.
            retry_after: Whole seconds until the caller may retry.
            limit_key: Optional limiter key that denied the request.
        """
        details: dict[str, Any] = {"retry_after": retry_after}
        if limit_key:
            details["limit_key"] = limit_key
        super().__init__(message, "RATE_LIMITED", details)
        self.retry_after = retry_after

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["retryAfter"] = self.retry_after
        return body


class ResourceNotFoundException(AskFreelyException):
    """Raised when a referenced resource (e.g. event) does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'event').
            resource_id: The ID that was not found.
            message: Optional caller-facing message.
        """
        super().__init__(
            message or f"{resource_type.capitalize()} not found",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ForbiddenException(AskFreelyException):
    """Raised when the resource exists but does not allow the action."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "FORBIDDEN", details)


class MethodNotAllowedException(AskFreelyException):
    """Raised when a handler is invoked with an unsupported HTTP method."""

    def __init__(self, method: str | None = None) -> None:
        details = {"method": method} if method else {}
        super().__init__("Method not allowed", "METHOD_NOT_ALLOWED", details)


class MailDeliveryError(AskFreelyException):
    """Raised when the mail provider rejects or cannot be reached.

    Scoped to a single queue record: the processor records it on the record
    and moves on, so it never reaches the HTTP layer.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, "UPSTREAM_FAILURE", details)
        self.status_code = status_code
