"""Prompt assembly for the campaign endpoints.

This module only builds strings and response schemas from already validated
requests. Validation and model invocation happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - No I/O and no global state mutation.

Prompt safety model:
    - User text is interpolated as a raw quoted string.
    - Safety is instruction-led; the model's JSON output is validated by the
      caller against the response models.
"""

from typing import List, Tuple

from campaign_proxy.core.schemas import SEND_TIME_PATTERN, AudienceCategory

PLACEHOLDER_EXAMPLE = "{{firstName}}"
SUBJECT_SUGGESTION_COUNT = 3


# =========================================================
# GENERATE CAMPAIGN
# =========================================================

CAMPAIGN_SYSTEM_INSTRUCTION = (
    "You are an expert marketing campaign creator for an Iranian audience, speaking Persian. "
    "Your goal is to generate a complete campaign draft in JSON format.\n"
    "- Analyze the user's prompt to understand the campaign goal.\n"
    "- Select the MOST relevant audience category from the provided list based on the prompt.\n"
    "- Create a compelling, primary subject line (subject).\n"
    "- Create a slightly different, alternative subject line for A/B testing (subjectB).\n"
    "- Write a concise, engaging, and professional email body (body). "
    f"Use placeholders like {PLACEHOLDER_EXAMPLE} for personalization. "
    "The tone should be appropriate for the campaign goal.\n"
    '- Suggest an optimal send time in "HH:MM" format (sendTime).\n'
    "- Your entire output MUST be a single, valid JSON object and nothing else."
)

CAMPAIGN_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "audienceCategoryId": {"type": "STRING"},
        "subject": {"type": "STRING"},
        "subjectB": {"type": "STRING"},
        "body": {"type": "STRING"},
        "sendTime": {"type": "STRING", "pattern": SEND_TIME_PATTERN},
    },
    "required": ["audienceCategoryId", "subject", "subjectB", "body", "sendTime"],
}


def format_categories(categories: List[AudienceCategory]) -> str:
    """Flatten categories into a single `; `-separated line, order preserved."""
    return "; ".join(
        f'ID: "{category.id}", Name: "{category.name_fa}", '
        f"Description: Members interested in {category.name_en}"
        for category in categories
    )


def build_campaign_prompt(user_prompt: str, categories: List[AudienceCategory]) -> Tuple[str, str]:
    """Build the campaign prompt and its system instruction.

    Args:
        user_prompt: Campaign goal as typed by the user.
        categories: Non-empty list of audience categories.

    Returns:
        `(prompt, system_instruction)`.

    Edge cases:
        Category ids are rendered verbatim so the model can echo one back as
        `audienceCategoryId`.
    """
    prompt = (
        f'User Goal: "{user_prompt}"\n\n'
        f"Available Audience Categories: [{format_categories(categories)}]"
    )
    return prompt, CAMPAIGN_SYSTEM_INSTRUCTION


# =========================================================
# SUBJECT SUGGESTIONS
# =========================================================

SUBJECT_SYSTEM_INSTRUCTION = (
    "You are a Persian email marketing expert. Based on the email body provided, "
    f"generate {SUBJECT_SUGGESTION_COUNT} diverse and compelling subject line suggestions. "
    "The output must be a valid JSON object."
)

SUBJECT_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
    },
    "required": ["suggestions"],
}


def build_subject_prompt(context: str) -> Tuple[str, str]:
    return f'Email Body: "{context}"', SUBJECT_SYSTEM_INSTRUCTION


# =========================================================
# IMPROVE BODY / BEST SEND TIME
# =========================================================
# Free-text endpoints: the whole instruction travels in the user turn and no
# response schema is sent.

def build_improve_body_prompt(email_body: str) -> str:
    return (
        "Improve this Persian email body to be more engaging, professional, and clear. "
        f"Do not change the core message. Keep personalization placeholders like {PLACEHOLDER_EXAMPLE}.\n"
        f'Email Body: "{email_body}"'
    )


def build_send_time_prompt(audience_description: str) -> str:
    return (
        f'For an Iranian audience described as "{audience_description}", what is the best day '
        "and time to send a marketing email for maximum engagement? Provide a concise "
        'suggestion, for example: "Saturday at 10:00 AM" or "Monday evening around 6:30 PM".'
    )
