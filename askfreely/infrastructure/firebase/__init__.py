"""Firebase Realtime Database integration (REST and in-memory backends)."""

from askfreely.infrastructure.firebase.client import (
    close_database,
    get_database,
    init_database,
    set_database,
)
from askfreely.infrastructure.firebase.memory import InMemoryRealtimeDatabase
from askfreely.infrastructure.firebase.reference import DatabaseReference, RealtimeDatabase

__all__ = [
    "DatabaseReference",
    "InMemoryRealtimeDatabase",
    "RealtimeDatabase",
    "close_database",
    "get_database",
    "init_database",
    "set_database",
]
