"""Chat client state and API calls, independent of the widget toolkit.

``ChatSession`` owns the in-memory conversation and talks to the API with
httpx. Everything visible goes through a ``ChatView`` so the same logic
drives the NiceGUI page and the tests.
"""

import logging
import os
from typing import Any, Protocol

import httpx

from gemini_chatbot.models.schemas import AttachmentKind, ChatTurn

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")
REQUEST_TIMEOUT = 120.0

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
CONTEXT_WINDOW = 10

FILE_PROMPT = "Tolong analisis file ini dan berikan ringkasan yang berguna."

NO_RESPONSE_MESSAGE = "🤔 Maaf, saya tidak menerima respons yang proper. Coba tanya lagi?"
CONNECTION_ERROR_MESSAGE = "⚠️ Tidak bisa terhubung ke server. Pastikan backend berjalan."
GENERIC_ERROR_MESSAGE = "⚠️ Terjadi kesalahan. Silakan coba lagi."
FILE_NO_RESULT_MESSAGE = "🤔 Maaf, saya tidak bisa memproses file ini. Coba dengan file lain."
FILE_ERROR_MESSAGE = "⚠️ Terjadi kesalahan saat memproses file. Pastikan server backend berjalan."
FILE_TOO_LARGE_MESSAGE = "File terlalu besar. Maksimal 10MB."
BACKEND_DOWN_MESSAGE = "Backend tidak terhubung. Pastikan server berjalan."
BROWSER_ONLINE_MESSAGE = "Koneksi internet pulih!"
BROWSER_OFFLINE_MESSAGE = "Koneksi internet terputus."

ATTACHMENT_ENDPOINTS = {
    AttachmentKind.IMAGE: "/generate-from-image",
    AttachmentKind.DOCUMENT: "/generate-from-document",
    AttachmentKind.AUDIO: "/generate-from-audio",
}


class ChatView(Protocol):
    """What the session needs from the interface that renders it."""

    def append_message(self, sender: str, text: str) -> None: ...

    async def type_message(self, sender: str, text: str) -> None: ...

    def notify(self, message: str, type: str) -> None: ...

    def set_connection_status(self, online: bool) -> None: ...

    def show_typing_indicator(self) -> None: ...

    def hide_typing_indicator(self) -> None: ...


def format_file_size(num_bytes: int) -> str:
    """Format a byte count as ``0 Bytes``, ``12.5 KB``, ``3 MB`` and so on."""
    if num_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while num_bytes >= 1024 ** (i + 1) and i < len(units) - 1:
        i += 1
    value = round(num_bytes / 1024**i, 2)
    return f"{value:g} {units[i]}"


def attachment_kind(mime_type: str | None) -> AttachmentKind:
    """Pick the endpoint category from a MIME type prefix."""
    mime_type = mime_type or ""
    if mime_type.startswith("image/"):
        return AttachmentKind.IMAGE
    if mime_type.startswith("audio/"):
        return AttachmentKind.AUDIO
    return AttachmentKind.DOCUMENT


class ChatSession:
    """Conversation state and operations for one chat page.

    Attributes:
        conversation_history: Prior turns, most recent last.
        is_processing: Set while a request is in flight. Advisory only:
            a second submit is ignored, but nothing stops an attachment
            request from running alongside a chat request.
    """

    def __init__(
        self,
        view: ChatView,
        base_url: str = API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.view = view
        self.base_url = base_url.rstrip("/")
        self.conversation_history: list[ChatTurn] = []
        self.is_processing: bool = False
        self._http_client = http_client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._http_client is not None:
            return await self._http_client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
            return await client.request(method, url, **kwargs)

    def build_chat_payload(self, text: str) -> dict[str, list[dict[str, str]]]:
        """Request body: the last ``CONTEXT_WINDOW`` turns plus the new one."""
        window = [*self.conversation_history[-CONTEXT_WINDOW:], ChatTurn(role="user", content=text)]
        return {"messages": [turn.model_dump() for turn in window]}

    async def submit(self, text: str) -> None:
        """Send a user message and render the reply.

        Ignored while another request is in flight or when ``text`` is blank.
        """
        if self.is_processing:
            return
        text = text.strip()
        if not text:
            return

        payload = self.build_chat_payload(text)
        self.conversation_history.append(ChatTurn(role="user", content=text))
        self.view.append_message("user", text)
        self.is_processing = True
        self.view.show_typing_indicator()

        try:
            response = await self._request("POST", "/api/chat", json=payload)
            response.raise_for_status()
            data = response.json()
            result = data.get("result") if isinstance(data, dict) else None

            if result:
                self.conversation_history.append(ChatTurn(role="assistant", content=result))
                await self.view.type_message("bot", result)
            else:
                await self.view.type_message("bot", NO_RESPONSE_MESSAGE)
        except httpx.TransportError as e:
            logger.error(f"Chat request failed to connect: {e}")
            await self.view.type_message("bot", CONNECTION_ERROR_MESSAGE)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Chat error: {e}")
            await self.view.type_message("bot", GENERIC_ERROR_MESSAGE)
        finally:
            self.view.hide_typing_indicator()
            self.is_processing = False

    async def attach_file(self, name: str, content: bytes, mime_type: str | None) -> None:
        """Send one file to the matching attachment endpoint and render the reply.

        Files over ``MAX_FILE_SIZE`` are rejected before any request is made.
        The exchange is not added to the conversation history.
        """
        if len(content) > MAX_FILE_SIZE:
            self.view.notify(FILE_TOO_LARGE_MESSAGE, "negative")
            return

        self.view.append_message(
            "user", f"📎 File terpilih: {name} ({format_file_size(len(content))})"
        )
        self.is_processing = True
        self.view.show_typing_indicator()

        kind = attachment_kind(mime_type)
        files = {kind.value: (name, content, mime_type or "application/octet-stream")}

        try:
            response = await self._request(
                "POST",
                ATTACHMENT_ENDPOINTS[kind],
                data={"prompt": FILE_PROMPT},
                files=files,
            )
            response.raise_for_status()
            data = response.json()
            result = data.get("result") if isinstance(data, dict) else None

            if result:
                await self.view.type_message("bot", result)
            else:
                await self.view.type_message("bot", FILE_NO_RESULT_MESSAGE)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"File processing error: {e}")
            await self.view.type_message("bot", FILE_ERROR_MESSAGE)
        finally:
            self.view.hide_typing_indicator()
            self.is_processing = False

    async def check_connection(self) -> bool:
        """Poll the health endpoint and update the status indicator.

        Returns:
            True if the backend answered successfully.
        """
        try:
            response = await self._request("GET", "/api/health")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Backend connection failed: {e}")
            self.view.set_connection_status(False)
            self.view.notify(BACKEND_DOWN_MESSAGE, "negative")
            return False

        logger.info("Backend connected successfully")
        self.view.set_connection_status(True)
        return True

    async def on_browser_online(self) -> None:
        self.view.set_connection_status(True)
        self.view.notify(BROWSER_ONLINE_MESSAGE, "positive")
        await self.check_connection()

    def on_browser_offline(self) -> None:
        self.view.set_connection_status(False)
        self.view.notify(BROWSER_OFFLINE_MESSAGE, "warning")

    def clear_conversation(self) -> None:
        self.conversation_history.clear()
