import pytest
from fastapi.testclient import TestClient

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


@pytest.fixture()
def app_client():
    from healthvault.main import app

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize(
    "requested_headers",
    ["content-type", "authorization, content-type, x-request-id"],
)
def test_browser_preflight_on_chat_is_empty_ok(app_client, requested_headers):
    response = app_client.options(
        "/api/v1/medical-ai-chat",
        headers={
            "Origin": "https://app.example.test",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": requested_headers,
        },
    )

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == ALLOW_HEADERS


def test_browser_preflight_on_records_is_empty_ok(app_client):
    response = app_client.options(
        "/api/v1/records/",
        headers={
            "Origin": "https://app.example.test",
            "Access-Control-Request-Method": "PATCH",
        },
    )

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-headers"] == ALLOW_HEADERS


def test_plain_responses_carry_cors_headers(app_client):
    response = app_client.get("/health", headers={"Origin": "https://app.example.test"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == ALLOW_HEADERS
    assert response.headers["x-request-id"]
