import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class AttachmentKind(str, Enum):
    """Categories of attachment endpoints."""

    IMAGE = "image"
    DOCUMENT = "document"
    AUDIO = "audio"


class ChatTurn(BaseModel):
    """A single message in the conversation.

    Attributes:
        role: The speaker. ``assistant`` marks model turns; anything else,
            including a null or non-text role, is treated as the user.
        content: The message text. Other JSON values are kept as their
            text form; only a missing or null content is rejected.
    """

    role: str = "user"
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, v: Any) -> str:
        if v is None:
            return "user"
        return v if isinstance(v, str) else str(v)

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (dict, list)):
            return json.dumps(v, ensure_ascii=False)
        return str(v)


class Attachment(BaseModel):
    """A file inlined into a generation request.

    Attributes:
        mime_type: MIME type reported by the uploader.
        data: Base64 encoding of the file content.
    """

    mime_type: str
    data: str


class ChatResponse(BaseModel):
    """Response of the chat endpoint.

    Attributes:
        result: The model's reply text.
        status: Always ``success``.
        timestamp: ISO 8601 generation time.
    """

    result: str
    status: str = "success"
    timestamp: str


class GenerateResponse(BaseModel):
    """Response of the single-shot generation endpoints."""

    result: str


class HealthResponse(BaseModel):
    """Response of the health endpoint."""

    status: str = "ok"
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Body of every error response.

    Attributes:
        error: Short error text.
        message: Optional detail.
        timestamp: Optional ISO 8601 time of failure.
    """

    error: str
    message: str | None = Field(default=None)
    timestamp: str | None = Field(default=None)
