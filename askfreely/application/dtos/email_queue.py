"""DTOs for the email queue (records, per-record outcomes, batch report)."""

from dataclasses import dataclass, field
from typing import Any

from askfreely.domain.enums import EmailStatus


@dataclass(frozen=True)
class EmailQueueRecord:
    """A queued email as stored under emailQueue/{id}."""

    id: str
    to: str | None
    subject: str | None
    template: str | None
    data: dict[str, Any]
    status: str

    @classmethod
    def from_record(cls, email_id: str, raw: Any) -> "EmailQueueRecord":
        raw = raw if isinstance(raw, dict) else {}
        data = raw.get("data")
        template = raw.get("template")
        return cls(
            id=email_id,
            to=raw.get("to"),
            subject=raw.get("subject"),
            template=template if isinstance(template, str) else None,
            data=data if isinstance(data, dict) else {},
            status=raw.get("status", ""),
        )


@dataclass(frozen=True)
class EmailCreate:
    """Write-model for a new queue entry."""

    to: str
    subject: str
    template: str
    data: dict[str, Any]
    created_at: str

    def to_record(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "subject": self.subject,
            "template": self.template,
            "data": self.data,
            "status": EmailStatus.PENDING.value,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class EmailOutcome:
    """Terminal result for one record in a batch."""

    id: str
    status: EmailStatus
    to: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "status": self.status.value}
        if self.status is EmailStatus.SENT:
            out["to"] = self.to
        else:
            out["error"] = self.error
        return out


@dataclass
class BatchReport:
    """Aggregate result of one processor invocation."""

    processed: int = 0
    failed: int = 0
    results: list[EmailOutcome] = field(default_factory=list)

    @property
    def message(self) -> str:
        if not self.results:
            return "No pending emails"
        return f"Processed {self.processed} emails, {self.failed} failed"

    def record(self, outcome: EmailOutcome) -> None:
        if outcome.status is EmailStatus.SENT:
            self.processed += 1
        else:
            self.failed += 1
        self.results.append(outcome)
