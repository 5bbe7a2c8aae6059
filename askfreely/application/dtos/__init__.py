"""Application DTOs (write-models, read-models, results)."""

from askfreely.application.dtos.email_queue import (
    BatchReport,
    EmailCreate,
    EmailOutcome,
    EmailQueueRecord,
)
from askfreely.application.dtos.question import (
    ClientIdentity,
    EventSettings,
    QuestionCreate,
    SubmitResult,
)

__all__ = [
    "BatchReport",
    "ClientIdentity",
    "EmailCreate",
    "EmailOutcome",
    "EmailQueueRecord",
    "EventSettings",
    "QuestionCreate",
    "SubmitResult",
]
