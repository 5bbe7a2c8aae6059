"""Email queue processing API schemas."""

from pydantic import BaseModel, Field

from askfreely.application.dtos.email_queue import BatchReport
from askfreely.domain.enums import EmailStatus


class EmailResultItem(BaseModel):
    """Outcome for one queue record; 'to' on success, 'error' on failure."""

    id: str
    status: EmailStatus
    to: str | None = None
    error: str | None = None


class ProcessQueueResponse(BaseModel):
    """Response for POST /email-queue/process."""

    message: str
    processed: int = 0
    failed: int = 0
    results: list[EmailResultItem] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: BatchReport) -> "ProcessQueueResponse":
        return cls(
            message=report.message,
            processed=report.processed,
            failed=report.failed,
            results=[EmailResultItem(**outcome.to_dict()) for outcome in report.results],
        )
