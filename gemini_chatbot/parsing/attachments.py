"""Upload staging and encoding for attachment endpoints.

An upload is written to the uploads directory under a random name, read
back once and base64-encoded. The staged file is removed when the handler
leaves the ``staged_upload`` block, whatever the outcome.
"""

import base64
import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import UploadFile
from pydantic import BaseModel

from gemini_chatbot.models.schemas import Attachment

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
CHUNK_SIZE = 1024 * 1024


class StagedUpload(BaseModel):
    """An upload written to disk for the duration of one request.

    Attributes:
        path: Location of the staged file.
        mime_type: MIME type reported by the uploader.
        filename: Original filename, if any.
    """

    path: Path
    mime_type: str
    filename: str | None = None


async def _write_upload(upload: UploadFile, path: Path) -> None:
    with path.open("wb") as fh:
        while chunk := await upload.read(CHUNK_SIZE):
            fh.write(chunk)


@asynccontextmanager
async def staged_upload(upload: UploadFile, directory: Path) -> AsyncIterator[StagedUpload]:
    """Stage an upload on disk and remove it on exit.

    Args:
        upload: The multipart file received by the route.
        directory: Uploads directory, created if missing.

    Yields:
        The staged file description.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / uuid.uuid4().hex
    try:
        await _write_upload(upload, path)
        logger.debug(f"Staged upload {upload.filename!r} at {path}")
        yield StagedUpload(
            path=path,
            mime_type=upload.content_type or DEFAULT_MIME_TYPE,
            filename=upload.filename,
        )
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed staged upload {path}")


def encode_attachment(staged: StagedUpload) -> Attachment:
    """Read a staged file fully and encode it as base64.

    Args:
        staged: The staged upload.

    Returns:
        Attachment carrying the MIME type and base64 payload.
    """
    content = staged.path.read_bytes()
    return Attachment(
        mime_type=staged.mime_type,
        data=base64.b64encode(content).decode("ascii"),
    )
