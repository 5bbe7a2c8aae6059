"""Tests for the email queue producer."""

import pytest

from askfreely.application.use_cases.email_queue import EmailQueueService
from askfreely.infrastructure.firebase import InMemoryRealtimeDatabase
from askfreely.infrastructure.firebase.repositories import RealtimeEmailQueueRepository


@pytest.fixture
def db() -> InMemoryRealtimeDatabase:
    return InMemoryRealtimeDatabase()


@pytest.fixture
def service(db) -> EmailQueueService:
    return EmailQueueService(RealtimeEmailQueueRepository(db))


async def test_enqueue_writes_pending_record(service: EmailQueueService, db) -> None:
    email_id = await service.enqueue("a@example.com", "Hi", "welcome", {"name": "Ada"})
    record = db.snapshot()["emailQueue"][email_id]
    assert record["to"] == "a@example.com"
    assert record["subject"] == "Hi"
    assert record["template"] == "welcome"
    assert record["data"] == {"name": "Ada"}
    assert record["status"] == "pending"
    assert record["createdAt"].endswith("Z")


async def test_queue_announcement(service: EmailQueueService, db) -> None:
    email_id = await service.queue_announcement("a@example.com", "Maintenance", "Back soon")
    record = db.snapshot()["emailQueue"][email_id]
    assert record["subject"] == "[Ask Freely] Maintenance"
    assert record["template"] == "announcement"
    assert record["data"] == {"title": "Maintenance", "message": "Back soon"}


@pytest.mark.parametrize(
    ("status", "template", "subject"),
    [
        ("disabled", "account_disabled", "[Ask Freely] Your account has been disabled"),
        ("enabled", "account_enabled", "[Ask Freely] Your account has been re-enabled"),
        ("warning", "account_warning", "[Ask Freely] Important notice about your account"),
        ("suspended", "account_warning", "[Ask Freely] Account Update"),
    ],
)
async def test_queue_account_status(
    service: EmailQueueService, db, status: str, template: str, subject: str
) -> None:
    email_id = await service.queue_account_status("a@example.com", status, "Spam")
    record = db.snapshot()["emailQueue"][email_id]
    assert record["template"] == template
    assert record["subject"] == subject
    assert record["data"] == {"status": status, "reason": "Spam"}


async def test_queue_new_question(service: EmailQueueService, db) -> None:
    email_id = await service.queue_new_question("org@example.com", "Town Hall", "Why?")
    record = db.snapshot()["emailQueue"][email_id]
    assert record["subject"] == '[Ask Freely] New question on "Town Hall"'
    assert record["template"] == "new_question"
    assert record["data"] == {"eventTitle": "Town Hall", "questionPreview": "Why?"}
