"""Submit question use case: rate limits, validation, event gate, persistence."""

from __future__ import annotations

import json
from typing import Any

from askfreely.application.dtos.question import (
    ClientIdentity,
    EventSettings,
    QuestionCreate,
    SubmitResult,
)
from askfreely.application.interfaces.repositories import (
    IEventRepository,
    IQuestionRepository,
)
from askfreely.application.services.question_validator import (
    ANONYMOUS_AUTHOR,
    validate_author,
    validate_question,
)
from askfreely.core.limiter import (
    DEFAULT_QUESTION_LIMITS,
    GLOBAL_KEY,
    QuestionRateLimits,
    RateLimitConfig,
    RateLimiterBackend,
    fingerprint_key,
    ip_key,
)
from askfreely.domain.enums import EventStatus, QuestionSource, QuestionStatus
from askfreely.domain.exceptions import (
    BadRequestException,
    ForbiddenException,
    RateLimitedException,
    ResourceNotFoundException,
)
from askfreely.infrastructure.firebase.paths import is_valid_key
from askfreely.shared.telemetry.logging import get_logger
from askfreely.shared.utils.datetime import to_epoch_ms, to_iso, utc_now

logger = get_logger(__name__)

GLOBAL_BUSY_MESSAGE = "Server is busy. Please try again later."
IP_LIMIT_MESSAGE = "Too many questions from your network. Please try again later."
FINGERPRINT_LIMIT_MESSAGE = "Too many questions from this device. Please try again later."


class QuestionIntakeService:
    """Accepts one audience question per call.

    Every limiter key is checked before the body is parsed, but quota is only
    consumed once the submission has passed validation and the event gate.
    """

    def __init__(
        self,
        event_repo: IEventRepository,
        question_repo: IQuestionRepository,
        rate_limiter: RateLimiterBackend,
        limits: QuestionRateLimits = DEFAULT_QUESTION_LIMITS,
    ) -> None:
        self._event_repo = event_repo
        self._question_repo = question_repo
        self._rate_limiter = rate_limiter
        self._limits = limits

    def _limiter_keys(
        self, client: ClientIdentity
    ) -> list[tuple[str, RateLimitConfig, str]]:
        """(key, config, denial message) in evaluation order."""
        keys = [
            (GLOBAL_KEY, self._limits.global_per_minute, GLOBAL_BUSY_MESSAGE),
            (ip_key(client.ip), self._limits.per_ip, IP_LIMIT_MESSAGE),
        ]
        if client.has_fingerprint:
            keys.append(
                (
                    fingerprint_key(client.fingerprint),
                    self._limits.per_fingerprint,
                    FINGERPRINT_LIMIT_MESSAGE,
                )
            )
        return keys

    async def _check_limits(self, keys: list[tuple[str, RateLimitConfig, str]]) -> None:
        for key, config, message in keys:
            decision = await self._rate_limiter.check(key, config)
            if not decision.allowed:
                logger.info("Rate limit hit for %s", key)
                raise RateLimitedException(
                    message, retry_after=decision.retry_after_seconds or 1, limit_key=key
                )

    @staticmethod
    def _parse_body(body: bytes | str) -> dict[str, Any]:
        try:
            payload = json.loads(body)
        except (TypeError, ValueError):
            raise BadRequestException("Invalid request body") from None
        if not isinstance(payload, dict):
            raise BadRequestException("Invalid request body")
        return payload

    @staticmethod
    def _check_event_open(event: EventSettings) -> None:
        status = event.status if isinstance(event.status, str) else None
        if status not in EventStatus.accepting_values():
            raise ForbiddenException(
                "This event is not currently active", reason="status"
            )
        if not event.accepts_questions:
            raise ForbiddenException(
                "This event is not accepting questions", reason="closed"
            )

    async def submit(self, body: bytes | str, client: ClientIdentity) -> SubmitResult:
        """Validate and store one question.

        Args:
            body: Raw request body (JSON object with eventId, question, author, anonymous).
            client: Caller identity used for rate limiting.

        Returns:
            SubmitResult with the new question id.

        Raises:
            RateLimitedException: A limiter key has no remaining quota.
            BadRequestException: Malformed body, missing eventId or invalid question.
            ResourceNotFoundException: Event does not exist.
            ForbiddenException: Event is not active or not accepting questions.
        """
        keys = self._limiter_keys(client)
        await self._check_limits(keys)

        payload = self._parse_body(body)
        event_id = payload.get("eventId")
        if not event_id or not isinstance(event_id, str):
            raise BadRequestException("Event ID is required", field="eventId")
        if not is_valid_key(event_id):
            raise BadRequestException("Invalid event ID", field="eventId")

        question = validate_question(payload.get("question"))
        anonymous = bool(payload.get("anonymous"))
        author = validate_author(ANONYMOUS_AUTHOR if anonymous else payload.get("author"))

        event = await self._event_repo.get_by_id(event_id)
        if event is None:
            raise ResourceNotFoundException("event", event_id)
        self._check_event_open(event)

        for key, config, _ in keys:
            await self._rate_limiter.increment(key, config)

        now = utc_now()
        status = QuestionStatus.PENDING if event.require_approval else QuestionStatus.APPROVED
        question_id = await self._question_repo.add(
            QuestionCreate(
                event_id=event_id,
                question=question,
                author=author,
                source=QuestionSource.ANONYMOUS if anonymous else QuestionSource.AUDIENCE,
                status=status,
                timestamp=to_iso(now),
                created_at=to_epoch_ms(now),
            )
        )
        await self._event_repo.increment_question_count(event_id)
        logger.info("Question %s submitted to event %s (%s)", question_id, event_id, status.value)
        return SubmitResult(question_id=question_id, status=status)
