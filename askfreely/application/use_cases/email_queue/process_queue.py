"""Email queue processor: drains pending records through the renderer and mail provider."""

from __future__ import annotations

from askfreely.application.dtos.email_queue import (
    BatchReport,
    EmailOutcome,
    EmailQueueRecord,
)
from askfreely.application.interfaces.repositories import IEmailQueueRepository
from askfreely.application.interfaces.services import (
    IEmailTemplateRenderer,
    IMailSender,
)
from askfreely.domain.enums import EmailStatus
from askfreely.domain.exceptions import MailDeliveryError
from askfreely.shared.telemetry.logging import get_logger
from askfreely.shared.utils.datetime import to_iso, utc_now

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 10


class EmailQueueProcessor:
    """Processes one batch of pending emails, one record at a time.

    Each record moves pending -> processing -> sent | failed. A failure is
    recorded on that record and the batch continues; failed records are
    terminal and are not picked up again.
    """

    def __init__(
        self,
        queue_repo: IEmailQueueRepository,
        renderer: IEmailTemplateRenderer,
        mail_sender: IMailSender,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._queue_repo = queue_repo
        self._renderer = renderer
        self._mail_sender = mail_sender
        self._batch_size = batch_size

    async def _deliver(self, record: EmailQueueRecord) -> EmailOutcome:
        try:
            await self._queue_repo.mark_processing(record.id, to_iso(utc_now()))
            if not record.to or not isinstance(record.to, str):
                raise MailDeliveryError("Missing recipient address")
            html = self._renderer.render(record.template, record.data)
            provider_id = await self._mail_sender.send(
                record.to, record.subject or "", html
            )
            await self._queue_repo.mark_sent(record.id, to_iso(utc_now()), provider_id)
        except MailDeliveryError as e:
            return await self._fail(record, e.message)
        except Exception as e:
            # Render errors, status writes and anything unexpected from the
            # provider client stay scoped to this record.
            logger.exception("Unexpected error delivering email %s", record.id)
            return await self._fail(record, str(e) or e.__class__.__name__)
        logger.info("Email %s sent to %s", record.id, record.to)
        return EmailOutcome(id=record.id, status=EmailStatus.SENT, to=record.to)

    async def _fail(self, record: EmailQueueRecord, error: str) -> EmailOutcome:
        logger.error("Failed to send email %s: %s", record.id, error)
        try:
            await self._queue_repo.mark_failed(record.id, to_iso(utc_now()), error)
        except Exception:
            logger.exception("Could not mark email %s as failed", record.id)
        return EmailOutcome(id=record.id, status=EmailStatus.FAILED, error=error)

    async def process_batch(self) -> BatchReport:
        """Send up to batch_size pending emails; return per-record outcomes.

        A failing pending query propagates to the caller; every error after
        that is recorded on the record it belongs to.
        """
        report = BatchReport()
        pending = await self._queue_repo.list_pending(self._batch_size)
        if not pending:
            logger.debug("No pending emails")
            return report
        for record in pending:
            report.record(await self._deliver(record))
        logger.info("%s", report.message)
        return report
