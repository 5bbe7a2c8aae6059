"""Domain enumerations for Ask Freely.

Enums represent fixed sets of values stored in the Realtime Database
(question source/status, email queue lifecycle, template identifiers).
"""

from enum import Enum


class EventStatus(str, Enum):
    """Event lifecycle status as written by the organizer dashboard."""

    DRAFT = "draft"
    PUBLISHED = "published"
    UNLISTED = "unlisted"
    ACTIVE = "active"
    ARCHIVED = "archived"

    @classmethod
    def accepting_values(cls) -> frozenset[str]:
        """Return the statuses under which an event accepts audience questions."""
        return frozenset({cls.PUBLISHED.value, cls.UNLISTED.value, cls.ACTIVE.value})


class QuestionSource(str, Enum):
    """Whether the submitter asked to stay anonymous."""

    ANONYMOUS = "anonymous"
    AUDIENCE = "audience"


class QuestionStatus(str, Enum):
    """Moderation status set once at creation."""

    PENDING = "pending"
    APPROVED = "approved"


class EmailStatus(str, Enum):
    """Email queue record lifecycle: pending -> processing -> sent | failed.

    Transitions are one-way; sent and failed are terminal.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"


class EmailTemplate(str, Enum):
    """Fixed email template identifiers understood by the renderer."""

    WELCOME = "welcome"
    ANNOUNCEMENT = "announcement"
    ACCOUNT_WARNING = "account_warning"
    ACCOUNT_DISABLED = "account_disabled"
    ACCOUNT_ENABLED = "account_enabled"
    NEW_QUESTION = "new_question"
    EVENT_REMINDER = "event_reminder"
    VERIFICATION_REMINDER = "verification_reminder"
