"""Request and response shapes for the proxy endpoints.

Architectural role:
    Explicit schema validation at the request boundary, before any prompt is
    built. Upstream JSON output is validated against the response models before
    it is returned to the caller.

Validation behavior:
    - Required text fields must contain at least one non-whitespace character.
      The text itself is kept as sent; it is not stripped.
    - Unknown extra fields in requests are ignored.
    - Each request model carries the client-visible 400 message in
      `error_message`.
"""

from typing import Annotated, ClassVar, List, Union

from pydantic import AfterValidator, BaseModel, Field

SEND_TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_require_text)]


# ============================================================
# Requests
# ============================================================

class AudienceCategory(BaseModel):
    """Audience segment offered to the model for campaign targeting.

    Attributes:
        id: Identifier echoed back as `audienceCategoryId`. Numeric ids from the
            frontend are accepted and rendered as text.
        name_fa: Localized display name.
        name_en: English name used as the description fragment.
    """

    id: Union[str, int]
    name_fa: str = ""
    name_en: str = ""


class CampaignRequest(BaseModel):
    error_message: ClassVar[str] = "userPrompt and categories are required."

    userPrompt: NonBlankStr
    categories: List[AudienceCategory] = Field(min_length=1)


class SubjectSuggestionRequest(BaseModel):
    error_message: ClassVar[str] = "context (email body) is required."

    context: NonBlankStr


class ImproveBodyRequest(BaseModel):
    error_message: ClassVar[str] = "emailBody is required."

    emailBody: NonBlankStr


class SendTimeRequest(BaseModel):
    error_message: ClassVar[str] = "audienceDescription is required."

    audienceDescription: NonBlankStr


# ============================================================
# Responses
# ============================================================

class CampaignDraft(BaseModel):
    """Structured campaign draft produced by the model."""

    audienceCategoryId: str
    subject: str
    subjectB: str
    body: str
    sendTime: str = Field(pattern=SEND_TIME_PATTERN)


class SuggestionList(BaseModel):
    suggestions: List[str]


class ImprovedBody(BaseModel):
    improvedBody: str


class SendTimeSuggestion(BaseModel):
    suggestion: str
