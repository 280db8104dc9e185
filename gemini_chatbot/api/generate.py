"""Single-shot generation endpoints.

Handles a bare text prompt and three attachment endpoints (image, document,
audio). Attachment uploads are staged on disk for the duration of the
request and always removed afterwards.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from gemini_chatbot.api.chat import read_json_body
from gemini_chatbot.api.config import ServerConfig
from gemini_chatbot.api.dependencies import get_config, get_service
from gemini_chatbot.errors import InputValidationError, ProviderError
from gemini_chatbot.models.schemas import AttachmentKind, ErrorResponse, GenerateResponse
from gemini_chatbot.parsing.attachments import encode_attachment, staged_upload
from gemini_chatbot.provider.gemini_service import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}

DEFAULT_PROMPTS = {
    AttachmentKind.IMAGE: "Describe the following image:",
    AttachmentKind.DOCUMENT: "Summarize the following document:",
    AttachmentKind.AUDIO: "Transcribe and analyze the following audio:",
}

MISSING_FILE_MESSAGES = {
    AttachmentKind.IMAGE: "File Gambar Dibutuhkan!",
    AttachmentKind.DOCUMENT: "File Dokumen Dibutuhkan!",
    AttachmentKind.AUDIO: "File Audio Dibutuhkan!",
}

MISSING_PROMPT_MESSAGE = "Tulis sebuah prompt!"

ATTACHMENT_PATHS = {
    "/generate-from-image": AttachmentKind.IMAGE,
    "/generate-from-document": AttachmentKind.DOCUMENT,
    "/generate-from-audio": AttachmentKind.AUDIO,
}


def missing_file_message(path: str) -> str | None:
    """Return the missing-file error of an attachment route, None for other paths."""
    kind = ATTACHMENT_PATHS.get(path)
    return MISSING_FILE_MESSAGES[kind] if kind is not None else None


async def resolve_prompt(request: Request, prompt: str | None, kind: AttachmentKind) -> str:
    """Pick the prompt sent with an attachment.

    FastAPI reports an empty ``prompt`` form field as absent, but an empty
    prompt that was actually sent is kept; only a missing field falls back
    to the default.
    """
    if prompt is not None:
        return prompt
    raw = (await request.form()).get("prompt")
    return raw if isinstance(raw, str) else DEFAULT_PROMPTS[kind]


@router.post("/generate-text", response_model=GenerateResponse, responses=ERROR_RESPONSES)
async def generate_text(
    request: Request,
    service: GeminiService = Depends(get_service),
) -> GenerateResponse:
    """Generate a reply to a single prompt, without conversation history.

    Body: ``{"prompt": "..."}``.
    """
    payload = await read_json_body(request)
    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    if not prompt or not isinstance(prompt, str):
        raise InputValidationError(MISSING_PROMPT_MESSAGE)

    try:
        result = await service.generate_text(prompt)
    except Exception as e:
        logger.error(f"Text generation error: {e}")
        raise ProviderError(str(e)) from e

    return GenerateResponse(result=result)


async def generate_from_upload(
    request: Request,
    kind: AttachmentKind,
    upload: UploadFile | None,
    prompt: str | None,
    service: GeminiService,
    config: ServerConfig,
) -> GenerateResponse:
    """Run one attachment request.

    Args:
        request: The incoming request, read for an empty ``prompt`` field.
        kind: Attachment category, selects the default prompt and messages.
        upload: The uploaded file, None when the field was not sent.
        prompt: Optional prompt overriding the default.
        service: Gemini service.
        config: Server configuration (uploads directory).

    Returns:
        GenerateResponse with the extracted text.

    Raises:
        InputValidationError: If no file was attached.
        ProviderError: If encoding or generation fails.
    """
    if upload is None:
        raise InputValidationError(MISSING_FILE_MESSAGES[kind])

    prompt = await resolve_prompt(request, prompt, kind)

    try:
        async with staged_upload(upload, config.upload_dir) as staged:
            attachment = encode_attachment(staged)
            result = await service.generate_from_attachment(prompt, attachment)
    except Exception as e:
        logger.error(f"{kind.value.capitalize()} processing error: {e}")
        raise ProviderError(str(e)) from e

    return GenerateResponse(result=result)


@router.post("/generate-from-image", response_model=GenerateResponse, responses=ERROR_RESPONSES)
async def generate_from_image(
    request: Request,
    image: UploadFile | None = File(default=None),
    prompt: str | None = Form(default=None),
    service: GeminiService = Depends(get_service),
    config: ServerConfig = Depends(get_config),
) -> GenerateResponse:
    """Describe an uploaded image (multipart field ``image``)."""
    return await generate_from_upload(
        request, AttachmentKind.IMAGE, image, prompt, service, config
    )


@router.post(
    "/generate-from-document", response_model=GenerateResponse, responses=ERROR_RESPONSES
)
async def generate_from_document(
    request: Request,
    document: UploadFile | None = File(default=None),
    prompt: str | None = Form(default=None),
    service: GeminiService = Depends(get_service),
    config: ServerConfig = Depends(get_config),
) -> GenerateResponse:
    """Summarize an uploaded document (multipart field ``document``)."""
    return await generate_from_upload(
        request, AttachmentKind.DOCUMENT, document, prompt, service, config
    )


@router.post("/generate-from-audio", response_model=GenerateResponse, responses=ERROR_RESPONSES)
async def generate_from_audio(
    request: Request,
    audio: UploadFile | None = File(default=None),
    prompt: str | None = Form(default=None),
    service: GeminiService = Depends(get_service),
    config: ServerConfig = Depends(get_config),
) -> GenerateResponse:
    """Transcribe and analyze an uploaded audio file (multipart field ``audio``)."""
    return await generate_from_upload(
        request, AttachmentKind.AUDIO, audio, prompt, service, config
    )
