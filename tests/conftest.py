"""
Shared fixtures for campaign proxy tests.

Mock strategy:
- The Gemini API is never contacted. Endpoint tests inject `FakeGeminiClient`,
  which records every payload it receives; transport tests patch
  `requests.post`.
"""

import json

import pytest
from fastapi.testclient import TestClient

from campaign_proxy.api.http_api import create_app
from campaign_proxy.core.result import Failure, Success
from campaign_proxy.llm.provider_config import ProxyConfig

FRONTEND_ORIGIN = "https://campaigns.example.com"

VALID_DRAFT = {
    "audienceCategoryId": "A",
    "subject": "حراج ویژه آخر هفته",
    "subjectB": "تخفیف‌های آخر هفته را از دست ندهید",
    "body": "سلام {{firstName}}، حراج بزرگ ما شروع شد!",
    "sendTime": "10:30",
}


class FakeGeminiClient:
    """Stand-in for `GeminiClient` that replays queued results."""

    def __init__(self, *results):
        self.results = list(results)
        self.payloads = []

    def generate(self, payload):
        self.payloads.append(payload)
        if not self.results:
            return Failure("no result queued")
        return self.results.pop(0)

    @property
    def called(self):
        return bool(self.payloads)

    @property
    def last_prompt(self):
        return self.payloads[-1]["contents"][0]["parts"][0]["text"]


def json_success(data):
    return Success(json.dumps(data))


@pytest.fixture
def config():
    return ProxyConfig(api_key="test-key", frontend_origin=FRONTEND_ORIGIN)


@pytest.fixture
def fake_client():
    return FakeGeminiClient()


@pytest.fixture
def api(config, fake_client):
    return TestClient(create_app(config, client=fake_client))
