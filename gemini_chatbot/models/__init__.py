"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatTurn: Individual message in a conversation
    - Attachment: Base64 file payload inlined into a request
    - ChatResponse: Chat endpoint reply with status and timestamp
    - GenerateResponse: Reply of the single-shot endpoints
    - HealthResponse: Service health status
    - ErrorResponse: Error body shared by every endpoint
"""

from gemini_chatbot.models.schemas import (
    Attachment,
    AttachmentKind,
    ChatResponse,
    ChatTurn,
    ErrorResponse,
    GenerateResponse,
    HealthResponse,
)

__all__ = [
    "Attachment",
    "AttachmentKind",
    "ChatResponse",
    "ChatTurn",
    "ErrorResponse",
    "GenerateResponse",
    "HealthResponse",
]
