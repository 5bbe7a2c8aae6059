"""Realtime Database paths (schema-in-code).

The Realtime Database has no DDL. These constants keep paths consistent
with what the web client reads and writes:

    events/{eventId}                      event settings (owned by the dashboard)
    questions/{eventId}/{questionId}      audience questions
    emailQueue/{emailId}                  outbound email work items

The emailQueue path needs ``".indexOn": ["status"]`` in the database rules
for the pending-status query.
"""

import re

EVENTS = "events"
QUESTIONS = "questions"
EMAIL_QUEUE = "emailQueue"

QUESTION_COUNT_FIELD = "questionCount"

# Keys cannot contain . $ # [ ] / or ASCII control characters; max 768 bytes.
_INVALID_KEY_CHARS = re.compile(r"[.$#\[\]/\x00-\x1f\x7f]")
MAX_KEY_BYTES = 768


def is_valid_key(key: str) -> bool:
    """Return True if key can be used as a single path segment."""
    return (
        bool(key)
        and len(key.encode("utf-8")) <= MAX_KEY_BYTES
        and not _INVALID_KEY_CHARS.search(key)
    )
