"""
HTTP API adapter for the campaign AI proxy.

Architectural role:
- Expose the four `/api/ai/*` endpoints used by the marketing frontend.
- Validate request bodies before any prompt is built.
- Delegate model invocation to `campaign_proxy.llm.service`.
- Translate result values and errors into HTTP responses.

Endpoint responsibilities:
- `POST /api/ai/generate-campaign`: structured campaign draft.
- `POST /api/ai/subject-suggestions`: alternative subject lines.
- `POST /api/ai/improve-body`: rewritten email body.
- `POST /api/ai/best-send-time`: free-text scheduling advice.
- `GET /`: liveness string, independent of upstream health.

Request lifecycle (POST endpoints):
1. Parse the JSON body and validate it against the endpoint's request model.
2. Build the prompt (and schema) via `campaign_proxy.prompting`.
3. Run exactly one upstream call in a worker thread.
4. Unwrap the result value; failures become `UpstreamError`.
5. Validate structured output and return the decoded JSON unchanged.

Error handling strategy:
- `ValidationError` -> HTTP 400 `{"error": <message>}`. The upstream client is
  never called for invalid requests.
- `UpstreamError` -> HTTP 500 `{"error": "An error occurred in <endpoint>."}`.
  The failure reason is logged server-side only.

Cross-origin handling:
- With `frontend_origin` configured, only that origin is granted CORS access
  and requests carrying any other `Origin` header are rejected with 403.
  The liveness route `GET /` is exempt.
- Without it, CORS is open.

Side effects:
- Outbound HTTPS calls to the Gemini API.
- Log records for failures and, at DEBUG level, prompts.
"""

import asyncio
import logging
from typing import Type, TypeVar

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from campaign_proxy import __version__
from campaign_proxy.core.errors import UpstreamError, ValidationError
from campaign_proxy.core.result import Failure, Result
from campaign_proxy.core.schemas import (
    CampaignDraft,
    CampaignRequest,
    ImproveBodyRequest,
    ImprovedBody,
    SendTimeRequest,
    SendTimeSuggestion,
    SubjectSuggestionRequest,
    SuggestionList,
)
from campaign_proxy.llm import service
from campaign_proxy.llm.client import GeminiClient
from campaign_proxy.llm.provider_config import ProxyConfig
from campaign_proxy.prompting import prompt_builder

logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "AI Proxy is running!"

# Liveness probes are answered whatever Origin header they carry.
ORIGIN_EXEMPT_PATHS = frozenset({"/"})

ModelT = TypeVar("ModelT", bound=BaseModel)


# ============================================================
# Boundary helpers
# ============================================================

async def parse_body(request: Request, model: Type[ModelT]) -> ModelT:
    """Decode the JSON body and validate it against `model`.

    Non-JSON bodies, non-object JSON and schema violations all raise
    `ValidationError` with the model's client-visible message.
    """
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError(model.error_message) from None

    if not isinstance(body, dict):
        raise ValidationError(model.error_message)

    try:
        return model.model_validate(body)
    except SchemaError as err:
        logger.debug("Rejected %s body: %s", request.url.path, err)
        raise ValidationError(model.error_message) from None


def unwrap(result: Result, context: str):
    """Return the success value or raise `UpstreamError` tagged with `context`."""
    if isinstance(result, Failure):
        raise UpstreamError(context, result.reason)
    return result.value


def validate_output(data, model: Type[BaseModel], context: str):
    """Check decoded model output against `model` and return it unchanged.

    Keys outside the model are passed through to the caller as returned.
    """
    try:
        model.model_validate(data)
    except SchemaError as err:
        raise UpstreamError(context, f"unexpected model output: {err}") from None
    return data


def get_client(request: Request) -> GeminiClient:
    return request.app.state.client


# ============================================================
# Application factory
# ============================================================

def create_app(config: ProxyConfig, client=None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Startup configuration.
        client: Object with `generate(payload) -> Result[str]`. Defaults to a
            `GeminiClient` built from `config`.

    Returns:
        Configured application with middleware, error handlers and routes.
    """
    app = FastAPI(title="Campaign AI Proxy", version=__version__)
    app.state.config = config
    app.state.client = client if client is not None else GeminiClient(config)

    _install_cors(app, config.frontend_origin)
    _install_error_handlers(app)
    _install_routes(app)

    return app


def _install_cors(app: FastAPI, frontend_origin):
    if frontend_origin is None:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs before CORSMiddleware, preflights included.
    @app.middleware("http")
    async def reject_foreign_origin(request: Request, call_next):
        if request.url.path in ORIGIN_EXEMPT_PATHS:
            return await call_next(request)
        origin = request.headers.get("origin")
        if origin is not None and origin != frontend_origin:
            logger.warning("Rejected request from origin %r to %s", origin, request.url.path)
            return JSONResponse(status_code=403, content={"error": "Origin not allowed."})
        return await call_next(request)


def _install_error_handlers(app: FastAPI):

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        logger.error("Error in %s: %s", exc.context, exc.reason or "unknown failure")
        return JSONResponse(status_code=500, content={"error": exc.public_message})


# ============================================================
# Routes
# ============================================================

def _install_routes(app: FastAPI):

    @app.post("/api/ai/generate-campaign")
    async def generate_campaign(request: Request, client=Depends(get_client)):
        context = "generate-campaign"
        payload = await parse_body(request, CampaignRequest)

        prompt, system_instruction = prompt_builder.build_campaign_prompt(
            payload.userPrompt, payload.categories
        )
        result = await asyncio.to_thread(
            service.generate_json,
            client,
            prompt,
            prompt_builder.CAMPAIGN_RESPONSE_SCHEMA,
            system_instruction,
        )
        return validate_output(unwrap(result, context), CampaignDraft, context)

    @app.post("/api/ai/subject-suggestions")
    async def subject_suggestions(request: Request, client=Depends(get_client)):
        context = "subject-suggestions"
        payload = await parse_body(request, SubjectSuggestionRequest)

        prompt, system_instruction = prompt_builder.build_subject_prompt(payload.context)
        result = await asyncio.to_thread(
            service.generate_json,
            client,
            prompt,
            prompt_builder.SUBJECT_RESPONSE_SCHEMA,
            system_instruction,
        )
        return validate_output(unwrap(result, context), SuggestionList, context)

    @app.post("/api/ai/improve-body")
    async def improve_body(request: Request, client=Depends(get_client)):
        payload = await parse_body(request, ImproveBodyRequest)

        prompt = prompt_builder.build_improve_body_prompt(payload.emailBody)
        result = await asyncio.to_thread(service.generate_text, client, prompt)
        return ImprovedBody(improvedBody=unwrap(result, "improve-body")).model_dump()

    @app.post("/api/ai/best-send-time")
    async def best_send_time(request: Request, client=Depends(get_client)):
        payload = await parse_body(request, SendTimeRequest)

        prompt = prompt_builder.build_send_time_prompt(payload.audienceDescription)
        result = await asyncio.to_thread(service.generate_text, client, prompt)
        return SendTimeSuggestion(suggestion=unwrap(result, "best-send-time")).model_dump()

    @app.get("/", response_class=PlainTextResponse)
    def health():
        return HEALTH_MESSAGE
