"""Realtime Database event repository (implements IEventRepository)."""

from __future__ import annotations

from askfreely.application.dtos.question import EventSettings
from askfreely.infrastructure.firebase.paths import EVENTS, QUESTION_COUNT_FIELD
from askfreely.infrastructure.firebase.reference import RealtimeDatabase


class RealtimeEventRepository:
    """Reads event settings; events are owned and written by the dashboard."""

    def __init__(self, db: RealtimeDatabase) -> None:
        self._ref = db.reference(EVENTS)

    async def get_by_id(self, event_id: str) -> EventSettings | None:
        """Return event settings, or None when nothing is stored at events/{id}."""
        data = await self._ref.child(event_id).get()
        if not isinstance(data, dict):
            return None
        return EventSettings.from_record(event_id, data)

    async def increment_question_count(self, event_id: str) -> None:
        """Server-side increment of questionCount (no read-modify-write)."""
        await self._ref.child(event_id).increment(QUESTION_COUNT_FIELD)
