"""Realtime Database question repository (implements IQuestionRepository)."""

from __future__ import annotations

from askfreely.application.dtos.question import QuestionCreate
from askfreely.infrastructure.firebase.paths import QUESTIONS
from askfreely.infrastructure.firebase.reference import RealtimeDatabase


class RealtimeQuestionRepository:
    """Questions are appended under questions/{eventId} with push keys."""

    def __init__(self, db: RealtimeDatabase) -> None:
        self._ref = db.reference(QUESTIONS)

    async def add(self, data: QuestionCreate) -> str:
        new_ref = await self._ref.child(data.event_id).push(data.to_record())
        return new_ref.key or ""
