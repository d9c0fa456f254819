import pytest
from fastapi.testclient import TestClient

from app.api.send_message import get_dispatch_service
from app.core.config import ProviderConfig
from app.core.exceptions import ProviderError
from app.main import app
from app.services.dispatch_service import DispatchService
from conftest import StubProvider

URL = "/api/send-message"


def test_send_message_success(client, provider):
    response = client.post(
        URL,
        json={"fullName": "Alex Johnson", "phoneNumber": "+15551234567", "message": "Hi {{ Name }}, welcome!"},
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert provider.calls[0]["body"] == "Hi Alex Johnson, welcome!"
    assert provider.calls[0]["to"] == "whatsapp:+15551234567"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"fullName": "Alex", "phoneNumber": "+15551234567"},
        {"fullName": "  ", "phoneNumber": "+15551234567", "message": "Hi"},
        {"fullName": "Alex", "phoneNumber": None, "message": "Hi"},
    ],
)
def test_send_message_missing_fields_returns_400(client, provider, payload):
    response = client.post(URL, json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Full name, WhatsApp number, and message template are required."}
    assert provider.calls == []


def test_send_message_invalid_phone_returns_400(client, provider):
    response = client.post(URL, json={"fullName": "Alex", "phoneNumber": "12345", "message": "Hi"})

    assert response.status_code == 400
    assert "E.164" in response.json()["error"]
    assert provider.calls == []


def test_send_message_provider_error_returns_500():
    service = DispatchService(
        config=ProviderConfig(account_sid="AC1", auth_token="t", whatsapp_from="+14155238886"),
        provider=StubProvider(error=ProviderError("invalid number")),
    )
    app.dependency_overrides[get_dispatch_service] = lambda: service
    try:
        response = TestClient(app).post(
            URL, json={"fullName": "Alex", "phoneNumber": "+15551234567", "message": "Hi"}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "invalid number"}


def test_send_message_missing_config_returns_500():
    provider = StubProvider()
    service = DispatchService(config=ProviderConfig(), provider=provider)
    app.dependency_overrides[get_dispatch_service] = lambda: service
    try:
        response = TestClient(app).post(
            URL, json={"fullName": "Alex", "phoneNumber": "+15551234567", "message": "Hi"}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {
        "error": "Missing required environment variables: "
                 "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_WHATSAPP_FROM."
    }
    assert provider.calls == []


def test_send_message_unexpected_error_is_generic():
    service = DispatchService(
        config=ProviderConfig(account_sid="AC1", auth_token="t", whatsapp_from="+14155238886"),
        provider=StubProvider(error=KeyError("boom")),
    )
    app.dependency_overrides[get_dispatch_service] = lambda: service
    try:
        response = TestClient(app).post(
            URL, json={"fullName": "Alex", "phoneNumber": "+15551234567", "message": "Hi"}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Unexpected server error"}


def test_send_message_malformed_json_returns_422(client, provider):
    response = client.post(URL, content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert provider.calls == []


def test_get_dispatch_service_reads_settings_once():
    first = get_dispatch_service()
    assert first is get_dispatch_service()
    assert first.config.account_sid == "ACtest"
