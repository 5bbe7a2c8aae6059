"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the store, rate limiter, mail sender and the
use cases built on them. Routes depend only on these dependencies, not on
infrastructure directly; tests override them via app.dependency_overrides.

The store backend is chosen by DATABASE_BACKEND ('firebase' or 'memory'),
the limiter backend by RATE_LIMIT_BACKEND ('memory' or 'redis').
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from askfreely.application.dtos.question import ClientIdentity
from askfreely.application.interfaces.services import IMailSender
from askfreely.application.use_cases.email_queue import EmailQueueProcessor
from askfreely.application.use_cases.questions import QuestionIntakeService
from askfreely.core.config import get_settings
from askfreely.core.limiter import (
    UNKNOWN_CLIENT,
    QuestionRateLimits,
    RateLimiterBackend,
    get_rate_limiter,
)
from askfreely.infrastructure.external.email import (
    ResendMailSender,
    get_mail_http_client,
)
from askfreely.infrastructure.firebase import RealtimeDatabase, get_database
from askfreely.infrastructure.firebase.repositories import (
    RealtimeEmailQueueRepository,
    RealtimeEventRepository,
    RealtimeQuestionRepository,
)
from askfreely.infrastructure.services import EmailTemplateRenderer


def get_db() -> RealtimeDatabase:
    """Process-wide Realtime Database client (lazy)."""
    return get_database()


def get_limiter_backend() -> RateLimiterBackend:
    """Process-wide question-intake rate limiter (lazy)."""
    return get_rate_limiter()


def get_mail_sender() -> IMailSender:
    """Resend sender sharing one httpx client across requests."""
    return ResendMailSender.from_settings(http_client=get_mail_http_client())


def get_template_renderer() -> EmailTemplateRenderer:
    return EmailTemplateRenderer(site_url=get_settings().public_site_url)


def get_client_identity(request: Request) -> ClientIdentity:
    """Client IP (first X-Forwarded-For hop, else Client-IP) and X-Fingerprint."""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() or request.headers.get("client-ip", "").strip()
    fingerprint = request.headers.get("x-fingerprint", "").strip()
    return ClientIdentity(
        ip=ip or UNKNOWN_CLIENT,
        fingerprint=fingerprint or UNKNOWN_CLIENT,
    )


def get_question_intake_service(
    db: Annotated[RealtimeDatabase, Depends(get_db)],
    rate_limiter: Annotated[RateLimiterBackend, Depends(get_limiter_backend)],
) -> QuestionIntakeService:
    """Build QuestionIntakeService with limiter configurations from settings."""
    return QuestionIntakeService(
        event_repo=RealtimeEventRepository(db),
        question_repo=RealtimeQuestionRepository(db),
        rate_limiter=rate_limiter,
        limits=QuestionRateLimits.from_settings(get_settings()),
    )


def get_email_queue_processor(
    db: Annotated[RealtimeDatabase, Depends(get_db)],
    renderer: Annotated[EmailTemplateRenderer, Depends(get_template_renderer)],
    mail_sender: Annotated[IMailSender, Depends(get_mail_sender)],
) -> EmailQueueProcessor:
    return EmailQueueProcessor(
        queue_repo=RealtimeEmailQueueRepository(db),
        renderer=renderer,
        mail_sender=mail_sender,
        batch_size=get_settings().email_queue_batch_size,
    )
