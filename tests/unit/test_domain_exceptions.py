"""Tests for domain exceptions (error_code, message, details)."""

from askfreely.domain.exceptions import (
    AskFreelyException,
    BadRequestException,
    ForbiddenException,
    MailDeliveryError,
    MethodNotAllowedException,
    QuestionValidationError,
    RateLimitedException,
    ResourceNotFoundException,
)


def test_base_exception_default_error_code() -> None:
    """Base exception uses class name as error_code when not provided."""
    exc = AskFreelyException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "AskFreelyException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_base_exception_to_dict() -> None:
    exc = AskFreelyException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "Oops", "code": "CUSTOM"}


def test_bad_request_field() -> None:
    exc = BadRequestException("Event ID is required", field="eventId")
    assert exc.error_code == "BAD_REQUEST"
    assert exc.details == {"field": "eventId"}
    assert BadRequestException("Invalid request body").details == {}


def test_question_validation_error_is_bad_request() -> None:
    exc = QuestionValidationError("TOO_SHORT", "Question must be at least 5 characters")
    assert isinstance(exc, BadRequestException)
    assert exc.reason == "TOO_SHORT"
    assert exc.details == {"field": "question", "reason": "TOO_SHORT"}


def test_rate_limited_body_carries_retry_after() -> None:
    exc = RateLimitedException("Slow down", retry_after=42, limit_key="ip:1.2.3.4")
    assert exc.to_dict() == {"error": "Slow down", "code": "RATE_LIMITED", "retryAfter": 42}
    assert exc.details == {"retry_after": 42, "limit_key": "ip:1.2.3.4"}


def test_resource_not_found_default_message() -> None:
    exc = ResourceNotFoundException("event", "evt1")
    assert exc.message == "Event not found"
    assert exc.error_code == "NOT_FOUND"
    assert exc.details == {"resource_type": "event", "resource_id": "evt1"}


def test_forbidden_and_method_not_allowed() -> None:
    assert ForbiddenException("Closed", reason="closed").details == {"reason": "closed"}
    exc = MethodNotAllowedException("PUT")
    assert exc.to_dict() == {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}


def test_mail_delivery_error_status_code() -> None:
    exc = MailDeliveryError("Resend API error: 500 - {}", status_code=500)
    assert exc.error_code == "UPSTREAM_FAILURE"
    assert exc.status_code == 500
    assert MailDeliveryError("RESEND_API_KEY not configured").details == {}
