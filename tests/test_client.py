"""Tests for the Gemini transport client."""

import pytest
import requests
from unittest.mock import MagicMock, patch

from campaign_proxy.core.result import Failure, Success
from campaign_proxy.llm.client import MAX_ERROR_BODY_CHARS, GeminiClient, extract_text
from campaign_proxy.llm.provider_config import ProxyConfig


def envelope(*texts):
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": t} for t in texts]},
                "finishReason": "STOP",
            }
        ]
    }


def mock_response(data=None, status_code=200, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


@pytest.fixture
def client():
    return GeminiClient(ProxyConfig(api_key="test-key", model_name="gemini-2.5-flash", request_timeout=12))


def test_generate_posts_once_with_key_header(client):
    payload = {"contents": [{"role": "user", "parts": [{"text": "hi"}]}]}

    with patch("campaign_proxy.llm.client.requests.post", return_value=mock_response(envelope("hello"))) as post:
        result = client.generate(payload)

    assert result == Success("hello")
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent"
    )
    assert kwargs["headers"]["x-goog-api-key"] == "test-key"
    assert kwargs["json"] is payload
    assert kwargs["timeout"] == 12


def test_generate_joins_text_parts(client):
    with patch("campaign_proxy.llm.client.requests.post", return_value=mock_response(envelope("a", "b"))):
        assert client.generate({}) == Success("ab")


def test_http_error_becomes_failure(client):
    body = '{"error": {"code": 400, "message": "API key not valid. Please pass a valid API key."}}'
    with patch("campaign_proxy.llm.client.requests.post", return_value=mock_response({}, 400, text=body)):
        result = client.generate({})

    assert isinstance(result, Failure)
    assert result.reason.startswith("GEMINI HTTP ERROR (400)")
    assert "API key not valid" in result.reason


def test_http_error_body_is_truncated(client):
    body = "x" * (MAX_ERROR_BODY_CHARS + 500)
    with patch("campaign_proxy.llm.client.requests.post", return_value=mock_response({}, 503, text=body)):
        result = client.generate({})

    assert result.reason.startswith("GEMINI HTTP ERROR (503)")
    assert "x" * MAX_ERROR_BODY_CHARS in result.reason
    assert "x" * (MAX_ERROR_BODY_CHARS + 1) not in result.reason


def test_timeout_becomes_failure(client):
    with patch("campaign_proxy.llm.client.requests.post",
               side_effect=requests.exceptions.Timeout("read timed out after 12s")):
        result = client.generate({})

    assert result.reason.startswith("GEMINI TIMEOUT")
    assert "read timed out after 12s" in result.reason


def test_connection_error_becomes_failure(client):
    with patch("campaign_proxy.llm.client.requests.post",
               side_effect=requests.exceptions.ConnectionError("dns failure for internal host")):
        result = client.generate({})

    assert result.reason.startswith("GEMINI HTTP ERROR")
    assert "dns failure for internal host" in result.reason


def test_non_json_envelope_becomes_failure(client):
    response = mock_response()
    response.json.side_effect = ValueError("Expecting value")

    with patch("campaign_proxy.llm.client.requests.post", return_value=response):
        result = client.generate({})

    assert result == Failure("GEMINI MALFORMED RESPONSE: Expecting value")


@pytest.mark.parametrize("data", [
    {"candidates": [None]},
    {"candidates": "x"},
    {"candidates": ["x"]},
    {"candidates": [{"content": "x"}]},
    {"candidates": [{"content": {"parts": "x"}}]},
    {"promptFeedback": "x"},
])
def test_non_object_envelope_members_become_failure(client, data):
    with patch("campaign_proxy.llm.client.requests.post", return_value=mock_response(data)):
        result = client.generate({})

    assert isinstance(result, Failure)


def test_extract_text_blocked_prompt():
    result = extract_text({"promptFeedback": {"blockReason": "SAFETY"}})

    assert result == Failure("GEMINI PROMPT BLOCKED (SAFETY)")


def test_extract_text_empty_parts():
    data = {"candidates": [{"content": {"parts": []}, "finishReason": "MAX_TOKENS"}]}

    assert extract_text(data) == Failure("GEMINI EMPTY RESPONSE (MAX_TOKENS)")


@pytest.mark.parametrize("data", [None, [], "text", {}, {"candidates": []}])
def test_extract_text_malformed(data):
    assert not extract_text(data).ok
