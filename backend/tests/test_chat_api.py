import pytest

from healthvault.schemas.records import PrescriptionCreate
from healthvault.services.assistant import FALLBACK_MESSAGE, RecordStoreUnavailable, UpstreamUnavailable

CHAT_URL = "/api/v1/medical-ai-chat"


def _seed(repo, user_id, **values):
    import anyio

    anyio.run(repo.create, user_id, PrescriptionCreate(**values))


def test_preflight_returns_empty_ok_with_cors_headers(client):
    response = client.options(CHAT_URL)

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert (
        response.headers["access-control-allow-headers"]
        == "authorization, x-client-info, apikey, content-type"
    )


def test_chat_success_envelope(client, prescription_repository):
    _seed(prescription_repository, "user-1", title="Cardiology", medication_names=["Aspirin"])
    _seed(prescription_repository, "user-1", title="Diabetes", medication_names=["Metformin"])
    _seed(prescription_repository, "user-2", title="Other", medication_names=["Warfarin"])

    response = client.post(CHAT_URL, json={"message": "What medicines am I on?", "userId": "user-1"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"response", "context"}
    assert body["context"] == "Based on 2 medical records"
    assert "Metformin\nAspirin" in body["response"]
    assert "Warfarin" not in body["response"]
    assert response.headers["access-control-allow-origin"] == "*"


def test_chat_without_records_reports_zero(client):
    response = client.post(CHAT_URL, json={"message": "hi", "userId": "new-user"})

    assert response.status_code == 200
    assert "0 record(s) available" in response.json()["response"]
    assert response.json()["context"] == "Based on 0 medical records"


@pytest.mark.parametrize(
    "payload",
    [
        {"message": "", "userId": "user-1"},
        {"message": "   ", "userId": "user-1"},
        {"message": "hi"},
        {"userId": "user-1"},
        {"message": 42, "userId": "user-1"},
        ["not", "an", "object"],
    ],
)
def test_chat_invalid_request_envelope(client, payload):
    response = client.post(CHAT_URL, json=payload)

    assert response.status_code == 400
    assert response.json()["fallback"] == FALLBACK_MESSAGE
    assert response.json()["error"]


def test_chat_malformed_json(client):
    response = client.post(
        CHAT_URL,
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["fallback"] == FALLBACK_MESSAGE


def test_chat_store_failure_envelope(client, prescription_repository, monkeypatch):
    async def _fail(_user_id):
        raise RecordStoreUnavailable("Failed to fetch user prescriptions")

    monkeypatch.setattr(prescription_repository, "list_for_user", _fail)

    response = client.post(CHAT_URL, json={"message": "hi", "userId": "user-1"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to fetch user prescriptions",
        "fallback": FALLBACK_MESSAGE,
    }


def test_chat_generator_failure_envelope(client, app):
    class FailingGenerator:
        name = "failing"

        async def generate(self, message, records):
            raise UpstreamUnavailable("Completion API returned HTTP 503")

    app.state.response_generator = FailingGenerator()

    response = client.post(CHAT_URL, json={"message": "hi", "userId": "user-1"})

    assert response.status_code == 500
    assert response.json()["error"] == "Completion API returned HTTP 503"
    assert response.json()["fallback"] == FALLBACK_MESSAGE


def test_chat_unexpected_error_uses_same_fallback(client, app):
    class BrokenGenerator:
        name = "broken"

        async def generate(self, message, records):
            raise KeyError("choices")

    app.state.response_generator = BrokenGenerator()

    response = client.post(CHAT_URL, json={"message": "hi", "userId": "user-1"})

    assert response.status_code == 500
    assert response.json()["fallback"] == FALLBACK_MESSAGE


def test_chat_welcome(client):
    response = client.get("/api/v1/chat/welcome")

    assert response.status_code == 200
    body = response.json()
    assert body["message"]["role"] == "assistant"
    assert len(body["message"]["suggestions"]) == 4
    assert body["message"]["timestamp"].endswith(("AM", "PM"))
    assert {q["category"] for q in body["quick_questions"]} == {
        "Medicines",
        "Records",
        "History",
        "Scheduling",
    }
