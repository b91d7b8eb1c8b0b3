import json
import os
from typing import Callable, Generator, List

import httpx
import pytest
from fastapi.testclient import TestClient

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from tone_reply.main import app  # noqa: E402
from tone_reply.webhook import WebhookClient, get_webhook_client  # noqa: E402

WEBHOOK_URL = "https://n8n.example.com/webhook/reply"


class RecordingWebhook:
    """Fake webhook endpoint that records every request it receives."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: object = {"output": "Olá!"}
        self.raw_body: bytes = b""
        self.error: Exception | None = None

    def respond_with(self, body=None, status_code: int = 200, raw: bytes = b"") -> None:
        self.body = body
        self.status_code = status_code
        self.raw_body = raw

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]

    def client(self) -> WebhookClient:
        return WebhookClient(timeout=5.0, transport=httpx.MockTransport(self.handler))


@pytest.fixture()
def fake_webhook() -> RecordingWebhook:
    return RecordingWebhook()


@pytest.fixture()
def client(fake_webhook) -> Generator[TestClient, None, None]:
    """Test client whose outbound webhook calls hit the recording fake."""
    app.dependency_overrides[get_webhook_client] = fake_webhook.client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def submit_form(client) -> Callable[..., httpx.Response]:
    def _submit(input_text="Oi, tudo bem?", tone="formal", webhook_url=WEBHOOK_URL, **kwargs):
        return client.post(
            "/generate",
            data={"input_text": input_text, "tone": tone, "webhook_url": webhook_url},
            **kwargs,
        )

    return _submit
