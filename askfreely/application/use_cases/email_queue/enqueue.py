"""Email queue producer: appends pending records for the processor to send."""

from __future__ import annotations

from typing import Any

from askfreely.application.dtos.email_queue import EmailCreate
from askfreely.application.interfaces.repositories import IEmailQueueRepository
from askfreely.domain.enums import EmailTemplate
from askfreely.shared.telemetry.logging import get_logger
from askfreely.shared.utils.datetime import to_iso, utc_now

logger = get_logger(__name__)

SUBJECT_PREFIX = "[Ask Freely]"

# account status -> (template, subject)
_ACCOUNT_STATUS_EMAILS: dict[str, tuple[EmailTemplate, str]] = {
    "disabled": (
        EmailTemplate.ACCOUNT_DISABLED,
        f"{SUBJECT_PREFIX} Your account has been disabled",
    ),
    "enabled": (
        EmailTemplate.ACCOUNT_ENABLED,
        f"{SUBJECT_PREFIX} Your account has been re-enabled",
    ),
    "warning": (
        EmailTemplate.ACCOUNT_WARNING,
        f"{SUBJECT_PREFIX} Important notice about your account",
    ),
}
ACCOUNT_UPDATE_SUBJECT = f"{SUBJECT_PREFIX} Account Update"


class EmailQueueService:
    """Queues emails; delivery happens later in EmailQueueProcessor."""

    def __init__(self, queue_repo: IEmailQueueRepository) -> None:
        self._queue_repo = queue_repo

    async def enqueue(
        self,
        to: str,
        subject: str,
        template: EmailTemplate | str,
        data: dict[str, Any] | None = None,
    ) -> str:
        """Append a pending record and return its id."""
        template_id = template.value if isinstance(template, EmailTemplate) else template
        email_id = await self._queue_repo.enqueue(
            EmailCreate(
                to=to,
                subject=subject,
                template=template_id,
                data=data or {},
                created_at=to_iso(utc_now()),
            )
        )
        logger.info("Queued %s email %s", template_id, email_id)
        return email_id

    async def queue_announcement(self, email: str, title: str, message: str) -> str:
        return await self.enqueue(
            email,
            f"{SUBJECT_PREFIX} {title}",
            EmailTemplate.ANNOUNCEMENT,
            {"title": title, "message": message},
        )

    async def queue_account_status(
        self, email: str, status: str, reason: str = ""
    ) -> str:
        """Queue an account status notice; unknown statuses use the generic subject."""
        template, subject = _ACCOUNT_STATUS_EMAILS.get(
            status, (EmailTemplate.ACCOUNT_WARNING, ACCOUNT_UPDATE_SUBJECT)
        )
        return await self.enqueue(
            email, subject, template, {"status": status, "reason": reason}
        )

    async def queue_new_question(
        self, email: str, event_title: str, question_preview: str
    ) -> str:
        return await self.enqueue(
            email,
            f'{SUBJECT_PREFIX} New question on "{event_title}"',
            EmailTemplate.NEW_QUESTION,
            {"eventTitle": event_title, "questionPreview": question_preview},
        )
