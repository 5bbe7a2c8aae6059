"""Question intake API: rate limits, validation, event gate, persistence."""

from httpx import AsyncClient

from askfreely.core.limiter import GLOBAL_PER_MINUTE, QUESTIONS_PER_IP

URL = "/api/v1/questions"


async def _seed_event(db, event_id: str = "ev1", **overrides) -> None:
    event = {"title": "Town hall", "status": "published", "questionCount": 0}
    event.update(overrides)
    await db.reference(f"events/{event_id}").set(event)


def _body(**overrides) -> dict:
    body = {"eventId": "ev1", "question": "What is on the roadmap?", "author": "Sam"}
    body.update(overrides)
    return body


async def test_submit_question_persists_record(client: AsyncClient, memory_db) -> None:
    """Accepted question is stored under questions/{eventId} and the counter goes up."""
    await _seed_event(memory_db)
    response = await client.post(URL, json=_body())
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Question submitted successfully"
    question_id = data["questionId"]

    tree = memory_db.snapshot()
    questions = tree["questions"]["ev1"]
    assert list(questions) == [question_id]
    record = questions[question_id]
    assert record["question"] == "What is on the roadmap?"
    assert record["author"] == "Sam"
    assert record["source"] == "audience"
    assert record["answered"] is False
    assert record["status"] == "approved"
    assert isinstance(record["createdAt"], int)
    assert record["timestamp"].endswith("Z")
    assert tree["events"]["ev1"]["questionCount"] == 1


async def test_submit_question_sanitizes_text(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db)
    response = await client.post(
        URL,
        json=_body(question="  <b>Why</b> is the sky blue?  ", author="<i>Ann</i>"),
    )
    assert response.status_code == 200
    record = memory_db.snapshot()["questions"]["ev1"][response.json()["questionId"]]
    assert record["question"] == "Why is the sky blue?"
    assert record["author"] == "Ann"


async def test_anonymous_question_hides_author(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db)
    response = await client.post(URL, json=_body(anonymous=True))
    assert response.status_code == 200
    record = memory_db.snapshot()["questions"]["ev1"][response.json()["questionId"]]
    assert record["author"] == "Anonymous"
    assert record["source"] == "anonymous"


async def test_require_approval_stores_pending(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db, requireApproval=True)
    response = await client.post(URL, json=_body())
    assert response.status_code == 200
    record = memory_db.snapshot()["questions"]["ev1"][response.json()["questionId"]]
    assert record["status"] == "pending"


async def test_question_count_increments_from_missing(client: AsyncClient, memory_db) -> None:
    await memory_db.reference("events/ev1").set({"status": "active"})
    for _ in range(3):
        response = await client.post(URL, json=_body())
        assert response.status_code == 200
    assert memory_db.snapshot()["events"]["ev1"]["questionCount"] == 3


async def test_inactive_event_is_forbidden_and_consumes_no_quota(
    client: AsyncClient, memory_db, rate_limiter
) -> None:
    """403 for a draft event; none of the limiter keys are consumed."""
    await _seed_event(memory_db, status="draft")
    response = await client.post(
        URL, json=_body(), headers={"X-Forwarded-For": "203.0.113.5"}
    )
    assert response.status_code == 403
    assert response.json()["error"] == "This event is not currently active"
    assert "questions" not in memory_db.snapshot()

    global_check = await rate_limiter.check("global", GLOBAL_PER_MINUTE)
    ip_check = await rate_limiter.check("ip:203.0.113.5", QUESTIONS_PER_IP)
    assert global_check.remaining == GLOBAL_PER_MINUTE.max - 1
    assert ip_check.remaining == QUESTIONS_PER_IP.max - 1


async def test_closed_event_is_forbidden(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db, acceptingQuestions=False)
    response = await client.post(URL, json=_body())
    assert response.status_code == 403
    assert response.json() == {
        "error": "This event is not accepting questions",
        "code": "FORBIDDEN",
    }


async def test_submission_disabled_event_is_forbidden(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db, enableQuestionSubmission=False)
    response = await client.post(URL, json=_body())
    assert response.status_code == 403


async def test_missing_event_returns_404(client: AsyncClient, memory_db) -> None:
    response = await client.post(URL, json=_body(eventId="missing"))
    assert response.status_code == 404
    assert response.json()["error"] == "Event not found"


async def test_malformed_body_returns_400(client: AsyncClient, memory_db) -> None:
    response = await client.post(
        URL, content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


async def test_non_object_body_returns_400(client: AsyncClient, memory_db) -> None:
    response = await client.post(URL, json=["ev1"])
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


async def test_missing_event_id_returns_400(client: AsyncClient, memory_db) -> None:
    response = await client.post(URL, json={"question": "What is on the roadmap?"})
    assert response.status_code == 400
    assert response.json()["error"] == "Event ID is required"


async def test_event_id_with_path_characters_returns_400(client: AsyncClient, memory_db) -> None:
    response = await client.post(URL, json=_body(eventId="ev1/../admin"))
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid event ID"


async def test_short_question_returns_400(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db)
    response = await client.post(URL, json=_body(question="  <p>Hi</p> "))
    assert response.status_code == 400
    assert response.json()["error"] == "Question must be at least 5 characters"


async def test_missing_question_returns_400(client: AsyncClient, memory_db) -> None:
    response = await client.post(URL, json={"eventId": "ev1"})
    assert response.status_code == 400
    assert response.json()["error"] == "Question is required"


async def test_spam_question_returns_400(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db)
    response = await client.post(URL, json=_body(question="Hello" + "!" * 11))
    assert response.status_code == 400
    assert response.json()["error"] == "Question appears to be spam"


async def test_ip_limit_returns_429_with_retry_after(client: AsyncClient, memory_db) -> None:
    """21st question from one address within the hour is rejected."""
    await _seed_event(memory_db)
    headers = {"X-Forwarded-For": "203.0.113.5, 10.0.0.1"}
    for _ in range(QUESTIONS_PER_IP.max):
        response = await client.post(URL, json=_body(), headers=headers)
        assert response.status_code == 200
    response = await client.post(URL, json=_body(), headers=headers)
    assert response.status_code == 429
    data = response.json()
    assert data["error"] == "Too many questions from your network. Please try again later."
    assert data["retryAfter"] > 0
    assert response.headers["retry-after"] == str(data["retryAfter"])
    assert len(memory_db.snapshot()["questions"]["ev1"]) == QUESTIONS_PER_IP.max


async def test_ip_limit_resets_after_window(
    client: AsyncClient, memory_db, fake_clock
) -> None:
    await _seed_event(memory_db)
    headers = {"Client-IP": "198.51.100.7"}
    for _ in range(QUESTIONS_PER_IP.max):
        await client.post(URL, json=_body(), headers=headers)
    assert (await client.post(URL, json=_body(), headers=headers)).status_code == 429
    fake_clock.advance(QUESTIONS_PER_IP.window_ms)
    assert (await client.post(URL, json=_body(), headers=headers)).status_code == 200


async def test_fingerprint_limit_returns_429(client: AsyncClient, memory_db) -> None:
    await _seed_event(memory_db)
    for i in range(10):
        response = await client.post(
            URL,
            json=_body(),
            headers={"X-Fingerprint": "fp-abc", "X-Forwarded-For": f"203.0.113.{i}"},
        )
        assert response.status_code == 200
    response = await client.post(
        URL,
        json=_body(),
        headers={"X-Fingerprint": "fp-abc", "X-Forwarded-For": "203.0.113.99"},
    )
    assert response.status_code == 429
    assert response.json()["error"] == (
        "Too many questions from this device. Please try again later."
    )


async def test_global_limit_checked_before_body_is_parsed(
    client: AsyncClient, memory_db, rate_limiter
) -> None:
    """When the global window is full, even a malformed body gets 429."""
    for _ in range(GLOBAL_PER_MINUTE.max):
        await rate_limiter.increment("global", GLOBAL_PER_MINUTE)
    response = await client.post(
        URL, content=b"garbage", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 429
    assert response.json()["error"] == "Server is busy. Please try again later."
    assert response.json()["code"] == "RATE_LIMITED"


async def test_preflight_returns_204_with_cors_headers(client: AsyncClient) -> None:
    response = await client.options(URL)
    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "X-Fingerprint" in response.headers["access-control-allow-headers"]
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"


async def test_get_returns_405(client: AsyncClient) -> None:
    response = await client.get(URL)
    assert response.status_code == 405
    assert response.json()["error"] == "Method not allowed"


async def test_store_failure_returns_generic_500(
    lenient_client: AsyncClient, memory_db, monkeypatch
) -> None:
    """Unexpected store errors map to the route's generic message without detail."""
    await _seed_event(memory_db)

    async def broken_append(path, value):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(memory_db, "append", broken_append)
    response = await lenient_client.post(URL, json=_body())
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to submit question. Please try again."
    assert "detail" not in data
    assert response.headers["access-control-allow-origin"] == "*"
