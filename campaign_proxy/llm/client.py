"""Gemini transport client.

Architectural role:
    Executes one HTTP request against the Gemini `generateContent` endpoint and
    normalizes the outcome into a result value.

Model invocation flow:
    `service.generate_text` / `service.generate_json` -> `GeminiClient.generate`
    -> `requests.post` -> response envelope -> concatenated candidate text.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with the
    configured timeout.

Failure handling model:
    HTTP errors, timeouts, malformed envelopes and empty candidates become
    `Failure` values; nothing is raised. The reason keeps the exception text
    and the upstream error body because it is only logged server-side; the
    HTTP layer never returns it to the client.
"""

import logging

import requests

from campaign_proxy.core.result import Failure, Result, Success
from campaign_proxy.llm.provider_config import ProxyConfig

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_CHARS = 1000


def _describe_http_error(err: requests.exceptions.RequestException) -> str:
    """Build a failure reason with the status code, exception text and error body.

    The reason is only logged server-side, so it keeps whatever Gemini returned
    (for example "API key not valid") to make failures diagnosable.
    """
    status_code = None
    body = ""
    response = getattr(err, "response", None)
    if response is not None:
        status_code = getattr(response, "status_code", None)
        text = getattr(response, "text", "")
        if isinstance(text, str):
            body = text.strip()[:MAX_ERROR_BODY_CHARS]

    if isinstance(err, requests.exceptions.Timeout):
        label = "GEMINI TIMEOUT"
    elif status_code:
        label = f"GEMINI HTTP ERROR ({status_code})"
    else:
        label = "GEMINI HTTP ERROR"

    detail = f"{label}: {err}"
    if body:
        detail += f" | body: {body}"
    return detail


def extract_text(data) -> Result[str]:
    """Concatenate the text parts of the first candidate.

    Edge cases:
        - No candidates (for example a prompt blocked by safety settings)
          returns `Failure` tagged with the block reason when present.
        - A candidate without text parts returns `Failure`.
    """
    if not isinstance(data, dict):
        return Failure(f"GEMINI MALFORMED RESPONSE: envelope is {type(data).__name__}")

    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        return Failure(f"GEMINI MALFORMED RESPONSE: candidates is {type(candidates).__name__}")
    if not candidates:
        feedback = data.get("promptFeedback")
        block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if block_reason:
            return Failure(f"GEMINI PROMPT BLOCKED ({block_reason})")
        return Failure("GEMINI EMPTY RESPONSE")

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return Failure(f"GEMINI MALFORMED RESPONSE: candidate is {type(candidate).__name__}")

    content = candidate.get("content") or {}
    if not isinstance(content, dict):
        return Failure(f"GEMINI MALFORMED RESPONSE: content is {type(content).__name__}")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        return Failure(f"GEMINI MALFORMED RESPONSE: parts is {type(parts).__name__}")
    texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
    if not texts:
        finish_reason = candidate.get("finishReason")
        if finish_reason:
            return Failure(f"GEMINI EMPTY RESPONSE ({finish_reason})")
        return Failure("GEMINI EMPTY RESPONSE")

    return Success("".join(texts))


class GeminiClient:
    """Stateless handle to the Gemini API.

    One instance is created at startup and shared by all requests. It holds
    only read-only configuration, so concurrent use from worker threads is safe.
    """

    def __init__(self, config: ProxyConfig):
        self.config = config

    def generate(self, payload: dict) -> Result[str]:
        """Send one `generateContent` request.

        Args:
            payload: Gemini request body built by `service.build_payload`.

        Returns:
            `Success` with the generated text, or `Failure` whose reason carries
            the upstream detail for server-side logging.
        """
        headers = {
            "x-goog-api-key": self.config.api_key,
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.config.generate_url,
                headers=headers,
                json=payload,
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
            data = response.json()

        except ValueError as err:
            # Also covers requests.exceptions.JSONDecodeError.
            return Failure(f"GEMINI MALFORMED RESPONSE: {err}")

        except requests.exceptions.RequestException as err:
            return Failure(_describe_http_error(err))

        result = extract_text(data)
        if result.ok:
            logger.debug("Gemini response text: %r", result.value)
        return result
