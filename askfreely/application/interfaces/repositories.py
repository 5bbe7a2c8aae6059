"""Repository interfaces (ports) for the application layer.

Protocols define the store operations use cases depend on (DIP).
Implementations live in askfreely.infrastructure.firebase.repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from askfreely.application.dtos.email_queue import EmailCreate, EmailQueueRecord
    from askfreely.application.dtos.question import EventSettings, QuestionCreate


class IEventRepository(Protocol):
    """Read event settings and maintain the denormalized question counter."""

    async def get_by_id(self, event_id: str) -> EventSettings | None:
        """Return event settings or None if the event does not exist."""

    async def increment_question_count(self, event_id: str) -> None:
        """Add one to the event's questionCount (display hint, not authoritative)."""


class IQuestionRepository(Protocol):
    """Append audience questions."""

    async def add(self, data: QuestionCreate) -> str:
        """Append the question under its event; return the generated key."""


class IEmailQueueRepository(Protocol):
    """Queue records and their status transitions."""

    async def enqueue(self, data: EmailCreate) -> str:
        """Append a pending record; return the generated key."""

    async def list_pending(self, limit: int) -> list[EmailQueueRecord]:
        """Return up to limit pending records in key order."""

    async def mark_processing(self, email_id: str, started_at: str) -> None:
        """pending -> processing."""

    async def mark_sent(self, email_id: str, sent_at: str, provider_id: str | None) -> None:
        """processing -> sent."""

    async def mark_failed(self, email_id: str, failed_at: str, error: str) -> None:
        """processing -> failed."""
