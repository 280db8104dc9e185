"""Chat and health endpoints.

The chat endpoint validates the raw JSON body itself so malformed input is
reported as 400 with the service's own error body rather than FastAPI's 422.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from gemini_chatbot.api.dependencies import get_service
from gemini_chatbot.errors import InputValidationError, classify_provider_error, utc_timestamp
from gemini_chatbot.models.schemas import ChatResponse, ChatTurn, ErrorResponse, HealthResponse
from gemini_chatbot.provider.gemini_service import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

HEALTH_MESSAGE = "Gemini AI Chatbot API is running"


async def read_json_body(request: Request) -> Any:
    """Return the decoded JSON body, or None when it is absent or malformed."""
    try:
        return await request.json()
    except ValueError:
        return None


def parse_messages(payload: Any) -> list[ChatTurn]:
    """Validate the ``messages`` array of a chat request.

    Raises:
        InputValidationError: If messages is missing, not a list, empty, or
            holds an element that is not an object or has no content.
    """
    messages = payload.get("messages") if isinstance(payload, dict) else None
    if not isinstance(messages, list):
        raise InputValidationError("Invalid input format. Expected messages array.")
    if not messages:
        raise InputValidationError("Messages array cannot be empty.")
    try:
        return [ChatTurn.model_validate(message) for message in messages]
    except ValidationError as e:
        raise InputValidationError(
            "Each message must be an object with role and content."
        ) from e


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    request: Request,
    service: GeminiService = Depends(get_service),
) -> ChatResponse:
    """Generate a reply using the whole conversation as context.

    Body: ``{"messages": [{"role": ..., "content": ...}, ...]}``.

    Raises:
        400: Missing, non-list or empty messages.
        401: Provider rejected the API key or none is configured.
        429: Provider quota exceeded.
        500: Any other provider failure.
    """
    messages = parse_messages(await read_json_body(request))
    logger.info(f"Received chat request with {len(messages)} messages")

    try:
        result = await service.generate_chat(messages)
    except Exception as e:
        logger.error(f"Chat endpoint error: {e}")
        raise classify_provider_error(e) from e

    logger.debug(f"Gemini response: {result}")
    return ChatResponse(result=result, status="success", timestamp=utc_timestamp())


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report that the API is up. Carries no business meaning."""
    return HealthResponse(status="ok", message=HEALTH_MESSAGE, timestamp=utc_timestamp())
