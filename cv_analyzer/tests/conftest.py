import json

import httpx
import pytest
from fastapi.testclient import TestClient

from cv_analyzer.app.api.v1.routes import get_webhook_client
from cv_analyzer.app.main import app
from cv_analyzer.app.services.webhook import WebhookClient

ANALYZE_URL = "http://n8n.test/webhook/analyze"
SCORE_URL = "http://n8n.test/webhook/score"


class FakeWebhook:
    """Records every request and answers with a canned (status, body)."""

    def __init__(self):
        self.requests = []
        self.status = 200
        self.body = {}

    def reply(self, body, status=200):
        self.body, self.status = body, status

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status, content=self.body)
        return httpx.Response(self.status, content=json.dumps(self.body).encode("utf-8"),
                              headers={"content-type": "application/json"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def webhook():
    return FakeWebhook()


@pytest.fixture
def webhook_client(webhook):
    return WebhookClient(
        analyze_url=ANALYZE_URL,
        score_url=SCORE_URL,
        timeout=5,
        transport=httpx.MockTransport(webhook.handler),
    )


@pytest.fixture
def client(webhook_client):
    app.dependency_overrides[get_webhook_client] = lambda: webhook_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def pdf(name: str, content: bytes = b"%PDF-1.4 fake"):
    return ("files", (name, content, "application/pdf"))
