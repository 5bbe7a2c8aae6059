"""Realtime Database repository implementations."""

from askfreely.infrastructure.firebase.repositories.email_queue_repo import (
    RealtimeEmailQueueRepository,
)
from askfreely.infrastructure.firebase.repositories.event_repo import (
    RealtimeEventRepository,
)
from askfreely.infrastructure.firebase.repositories.question_repo import (
    RealtimeQuestionRepository,
)

__all__ = [
    "RealtimeEmailQueueRepository",
    "RealtimeEventRepository",
    "RealtimeQuestionRepository",
]
