"""DTOs for question intake (no dependency on storage or presentation schemas)."""

from dataclasses import dataclass
from typing import Any

from askfreely.core.limiter import UNKNOWN_CLIENT
from askfreely.domain.enums import QuestionSource, QuestionStatus


@dataclass(frozen=True)
class ClientIdentity:
    """Transport-level identity used for rate limiting. Not authoritative."""

    ip: str = UNKNOWN_CLIENT
    fingerprint: str = UNKNOWN_CLIENT

    @property
    def has_fingerprint(self) -> bool:
        return bool(self.fingerprint) and self.fingerprint != UNKNOWN_CLIENT


@dataclass(frozen=True)
class EventSettings:
    """The parts of an event record that gate question submission."""

    id: str
    status: str | None
    enable_question_submission: Any = None
    accepting_questions: Any = None
    require_approval: bool = False

    @classmethod
    def from_record(cls, event_id: str, data: dict[str, Any]) -> "EventSettings":
        return cls(
            id=event_id,
            status=data.get("status"),
            enable_question_submission=data.get("enableQuestionSubmission"),
            accepting_questions=data.get("acceptingQuestions"),
            require_approval=bool(data.get("requireApproval")),
        )

    @property
    def accepts_questions(self) -> bool:
        # Only an explicit False closes submissions; missing flags mean open.
        return (
            self.enable_question_submission is not False
            and self.accepting_questions is not False
        )


@dataclass(frozen=True)
class QuestionCreate:
    """Write-model for a new audience question."""

    event_id: str
    question: str
    author: str
    source: QuestionSource
    status: QuestionStatus
    timestamp: str
    created_at: int
    answered: bool = False

    def to_record(self) -> dict[str, Any]:
        """Field names as read by the web client."""
        return {
            "question": self.question,
            "author": self.author,
            "source": self.source.value,
            "timestamp": self.timestamp,
            "createdAt": self.created_at,
            "answered": self.answered,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of an accepted submission."""

    question_id: str
    status: QuestionStatus
    message: str = "Question submitted successfully"
