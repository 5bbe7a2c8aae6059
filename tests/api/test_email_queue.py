"""Email queue processing API."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

from askfreely.domain.exceptions import MailDeliveryError

URL = "/api/v1/email-queue/process"


async def _queue(db, to: str, template: str = "announcement", status: str = "pending") -> str:
    ref = await db.reference("emailQueue").push({
        "to": to,
        "subject": "[Ask Freely] Hello",
        "template": template,
        "data": {"title": "Hello", "message": "Welcome aboard"},
        "status": status,
        "createdAt": "2026-01-01T00:00:00.000Z",
    })
    return ref.key


async def test_empty_queue(client: AsyncClient, memory_db) -> None:
    response = await client.post(URL)
    assert response.status_code == 200
    assert response.json() == {
        "message": "No pending emails",
        "processed": 0,
        "failed": 0,
        "results": [],
    }


async def test_processes_pending_and_records_failures(
    client: AsyncClient, memory_db, mail_sender: AsyncMock
) -> None:
    """One failure is recorded on its record; the rest of the batch is sent."""
    first = await _queue(memory_db, "a@example.com")
    second = await _queue(memory_db, "b@example.com")
    done = await _queue(memory_db, "c@example.com", status="sent")
    mail_sender.send.side_effect = [
        "re_1",
        MailDeliveryError('Resend API error: 500 - {"message":"boom"}', status_code=500),
    ]

    response = await client.post(URL)
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Processed 1 emails, 1 failed"
    assert data["processed"] == 1
    assert data["failed"] == 1
    assert data["results"] == [
        {"id": first, "status": "sent", "to": "a@example.com"},
        {"id": second, "status": "failed", "error": 'Resend API error: 500 - {"message":"boom"}'},
    ]

    queue = memory_db.snapshot()["emailQueue"]
    assert queue[first]["status"] == "sent"
    assert queue[first]["resendId"] == "re_1"
    assert "sentAt" in queue[first]
    assert "processingStartedAt" in queue[first]
    assert queue[second]["status"] == "failed"
    assert "failedAt" in queue[second]
    assert queue[done]["status"] == "sent"
    assert mail_sender.send.await_count == 2


async def test_failed_records_are_not_retried(
    client: AsyncClient, memory_db, mail_sender: AsyncMock
) -> None:
    await _queue(memory_db, "a@example.com")
    mail_sender.send.side_effect = MailDeliveryError("RESEND_API_KEY not configured")
    first = await client.post(URL)
    assert first.json()["failed"] == 1
    second = await client.post(URL)
    assert second.json()["message"] == "No pending emails"


async def test_scheduled_get_requires_scheduler_header(
    client: AsyncClient, memory_db
) -> None:
    response = await client.get(URL)
    assert response.status_code == 405
    assert response.json()["error"] == "Method not allowed"

    response = await client.get(URL, headers={"X-Scheduled-Event": "schedule"})
    assert response.status_code == 200
    assert response.json()["message"] == "No pending emails"


async def test_put_returns_405(client: AsyncClient) -> None:
    response = await client.put(URL)
    assert response.status_code == 405


async def test_preflight_returns_204(client: AsyncClient) -> None:
    response = await client.options(URL)
    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"


async def test_store_failure_returns_generic_500(
    lenient_client: AsyncClient, memory_db, monkeypatch
) -> None:
    async def broken_query(path, child, value, limit):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(memory_db, "query_equal", broken_query)
    response = await lenient_client.post(URL)
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process email queue"
