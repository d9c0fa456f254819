import asyncio
import base64
from urllib.parse import parse_qs

import httpx
import pytest

from app.core.config import ProviderConfig
from app.core.exceptions import ProviderError
from app.schemas.dispatch import DispatchRequest
from app.services.dispatch_service import DispatchService
from app.services.twilio_service import TwilioService

CONFIG = ProviderConfig(account_sid="ACtest", auth_token="secret", whatsapp_from="whatsapp:+14155238886")


def send_with(handler):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = TwilioService(CONFIG, client=client)
            return await service.send_message(
                from_="whatsapp:+14155238886",
                to="whatsapp:+15551234567",
                body="Hi Alex",
            )

    return asyncio.run(run())


def test_send_message_posts_form_to_twilio():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(201, json={"sid": "SM123", "status": "queued"})

    sent = send_with(handler)

    assert sent.sid == "SM123"
    assert sent.status == "queued"
    assert seen["url"] == "https://api.twilio.com/2010-04-01/Accounts/ACtest/Messages.json"
    assert seen["auth"] == "Basic " + base64.b64encode(b"ACtest:secret").decode()
    assert seen["form"] == {
        "From": ["whatsapp:+14155238886"],
        "To": ["whatsapp:+15551234567"],
        "Body": ["Hi Alex"],
    }


def test_send_message_raises_twilio_error_message():
    def handler(request):
        return httpx.Response(
            400,
            json={
                "code": 21211,
                "message": "The 'To' number whatsapp:+15551234567 is not a valid phone number.",
                "status": 400,
            },
        )

    with pytest.raises(ProviderError) as exc_info:
        send_with(handler)

    assert exc_info.value.message == "The 'To' number whatsapp:+15551234567 is not a valid phone number."
    assert exc_info.value.details == {"status": 400, "code": 21211}


def test_send_message_falls_back_to_status_for_non_json_errors():
    def handler(request):
        return httpx.Response(503, text="Service Unavailable")

    with pytest.raises(ProviderError) as exc_info:
        send_with(handler)

    assert exc_info.value.message == "Twilio API error: 503"


def test_send_message_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError) as exc_info:
        send_with(handler)

    assert exc_info.value.message == "connection refused"


def test_send_message_is_attempted_once():
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(500, json={"message": "Internal error", "code": 20500})

    with pytest.raises(ProviderError):
        send_with(handler)

    assert len(attempts) == 1


def test_send_message_accepts_non_json_success_body():
    def handler(request):
        return httpx.Response(201, text="OK")

    sent = send_with(handler)

    assert sent.sid is None
    assert sent.status is None


def test_dispatch_reports_success_when_twilio_body_is_not_json():
    def handler(request):
        return httpx.Response(201, text="OK")

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = DispatchService(config=CONFIG, provider=TwilioService(CONFIG, client=client))
            return await service.dispatch(
                DispatchRequest(fullName="Alex", phoneNumber="+15551234567", message="Hi {{name}}")
            )

    result = asyncio.run(run())

    assert result.ok
    assert result.status_code == 200
