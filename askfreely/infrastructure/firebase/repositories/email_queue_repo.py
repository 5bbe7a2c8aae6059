"""Realtime Database email queue repository (implements IEmailQueueRepository).

Status transitions only touch the status field and its timestamp; the
original to/subject/template/data stay as the producer wrote them.
"""

from __future__ import annotations

from askfreely.application.dtos.email_queue import EmailCreate, EmailQueueRecord
from askfreely.domain.enums import EmailStatus
from askfreely.infrastructure.firebase.paths import EMAIL_QUEUE
from askfreely.infrastructure.firebase.reference import RealtimeDatabase


class RealtimeEmailQueueRepository:
    """Email queue stored at emailQueue/{emailId}."""

    def __init__(self, db: RealtimeDatabase) -> None:
        self._ref = db.reference(EMAIL_QUEUE)

    async def enqueue(self, data: EmailCreate) -> str:
        new_ref = await self._ref.push(data.to_record())
        return new_ref.key or ""

    async def list_pending(self, limit: int) -> list[EmailQueueRecord]:
        """Return up to limit pending records in key (creation) order."""
        snapshot = await (
            self._ref.order_by_child("status")
            .equal_to(EmailStatus.PENDING.value)
            .limit_to_first(limit)
            .get()
        )
        return [EmailQueueRecord.from_record(key, raw) for key, raw in snapshot.items()]

    async def mark_processing(self, email_id: str, started_at: str) -> None:
        await self._ref.child(email_id).update({
            "status": EmailStatus.PROCESSING.value,
            "processingStartedAt": started_at,
        })

    async def mark_sent(
        self, email_id: str, sent_at: str, provider_id: str | None
    ) -> None:
        await self._ref.child(email_id).update({
            "status": EmailStatus.SENT.value,
            "sentAt": sent_at,
            "resendId": provider_id,
        })

    async def mark_failed(self, email_id: str, failed_at: str, error: str) -> None:
        await self._ref.child(email_id).update({
            "status": EmailStatus.FAILED.value,
            "failedAt": failed_at,
            "error": error,
        })
