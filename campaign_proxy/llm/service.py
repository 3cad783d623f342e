"""Prompt-to-payload adapter for Gemini invocation.

Architectural role:
    Bridges prompt construction (`campaign_proxy.prompting`) to transport
    (`campaign_proxy.llm.client`). Every endpoint calls exactly one of the
    functions below, which performs exactly one outbound call.

Model call flow:
    prompt (+ system instruction, + response schema) -> payload ->
    `client.generate(payload)` -> text or decoded JSON as a result value.

Determinism:
    Payload construction is deterministic for fixed inputs. Generated output is
    not, because inference runs remotely.
"""

import json
import logging
from typing import Any, Optional

from campaign_proxy.core.result import Failure, Result, Success

logger = logging.getLogger(__name__)


def build_payload(
    prompt: str,
    system_instruction: Optional[str] = None,
    response_schema: Optional[dict] = None,
) -> dict:
    """Build a Gemini `generateContent` request body.

    Args:
        prompt: User-turn text.
        system_instruction: Optional persona/task instruction.
        response_schema: Optional schema. When set, JSON output is requested.

    Returns:
        Request payload with `contents`, and `systemInstruction` /
        `generationConfig` only when they apply.
    """
    payload = {
        "contents": [
            {"role": "user", "parts": [{"text": prompt}]},
        ],
    }

    if system_instruction:
        payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

    if response_schema is not None:
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": response_schema,
        }

    return payload


def decode_json(text: str) -> Result[Any]:
    """Decode model output as JSON after trimming surrounding whitespace."""
    try:
        return Success(json.loads(text.strip()))
    except ValueError:
        return Failure("GEMINI INVALID JSON")


def generate_text(client, prompt: str, system_instruction: Optional[str] = None) -> Result[str]:
    """Request free-text output."""
    logger.debug("Prompt: %r", prompt)
    return client.generate(build_payload(prompt, system_instruction))


def generate_json(
    client,
    prompt: str,
    response_schema: dict,
    system_instruction: Optional[str] = None,
) -> Result[Any]:
    """Request JSON output constrained to `response_schema` and decode it."""
    logger.debug("Prompt: %r", prompt)
    result = client.generate(build_payload(prompt, system_instruction, response_schema))
    return result.and_then(decode_json)
