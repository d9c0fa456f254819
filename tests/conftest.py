import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("TWILIO_ACCOUNT_SID", "ACtest")
os.environ.setdefault("TWILIO_AUTH_TOKEN", "test-token")
os.environ.setdefault("TWILIO_WHATSAPP_FROM", "+14155238886")

from app.api.send_message import get_dispatch_service
from app.core.config import ProviderConfig
from app.main import app
from app.services.dispatch_service import DispatchService
from app.services.twilio_service import MessagingProvider, SentMessage


class StubProvider(MessagingProvider):
    """Records every send; optionally raises instead of sending."""

    def __init__(self, error: Exception = None):
        self.error = error
        self.calls = []

    async def send_message(self, from_: str, to: str, body: str) -> SentMessage:
        self.calls.append({"from": from_, "to": to, "body": body})
        if self.error is not None:
            raise self.error
        return SentMessage(sid="SM123", status="queued")


VALID_CONFIG = ProviderConfig(
    account_sid="ACtest",
    auth_token="test-token",
    whatsapp_from="+14155238886",
)


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def config():
    return VALID_CONFIG


@pytest.fixture
def service(config, provider):
    return DispatchService(config=config, provider=provider)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_dispatch_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
