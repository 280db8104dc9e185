"""Gemini generation service built on the google-genai SDK.

Core module for turning chat turns and attachments into Gemini requests.

Architecture Decisions:

1. **Singleton Client** - The ``genai.Client`` is created once per process
   and reused across requests. It is built lazily on the first call so a
   missing API key never prevents the server from starting.

2. **Fixed Generation Parameters** - Chat requests always use the same
   sampling settings; callers cannot override them per request.

3. **Service Wrapper** - Routes only see plain strings and our own models.
   Building ``types.Content`` and reading the response shape stay here and
   in ``extraction``.
"""

import base64
import logging
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from gemini_chatbot.errors import ProviderError
from gemini_chatbot.models.schemas import Attachment, ChatTurn
from gemini_chatbot.provider.config import AgentConfig, get_agent_config
from gemini_chatbot.provider.extraction import extract_text

logger = logging.getLogger(__name__)

CHAT_TEMPERATURE = 0.7
CHAT_TOP_P = 0.9
CHAT_TOP_K = 40
CHAT_MAX_OUTPUT_TOKENS = 1024


def map_role(role: str) -> str:
    """Map a chat role to a Gemini role. Only ``assistant`` becomes ``model``."""
    return "model" if role == "assistant" else "user"


def build_chat_contents(messages: Sequence[ChatTurn]) -> list[types.Content]:
    """Convert every chat turn into a single-part Gemini content entry."""
    return [
        types.Content(
            role=map_role(turn.role),
            parts=[types.Part.from_text(text=turn.content)],
        )
        for turn in messages
    ]


def build_attachment_contents(prompt: str, attachment: Attachment) -> list[types.Content]:
    """Build a single user turn holding the prompt followed by the inlined file."""
    return [
        types.Content(
            role="user",
            parts=[
                types.Part.from_text(text=prompt),
                types.Part.from_bytes(
                    data=base64.b64decode(attachment.data),
                    mime_type=attachment.mime_type,
                ),
            ],
        )
    ]


def chat_generation_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=CHAT_TEMPERATURE,
        top_p=CHAT_TOP_P,
        top_k=CHAT_TOP_K,
        max_output_tokens=CHAT_MAX_OUTPUT_TOKENS,
    )


class GeminiService:
    """Service wrapping the Gemini ``generate_content`` API.

    Provides:
    - Multi-turn chat with fixed sampling parameters
    - Single-turn text prompts
    - Prompt plus one inlined attachment (image, document or audio)
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the service.

        Args:
            config: Optional provider configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._client: genai.Client | None = None

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _get_client(self) -> genai.Client:
        """Return the shared client, creating it on first use.

        Raises:
            ProviderError: If no API key is configured.
        """
        if self._client is None:
            if not self._config.has_api_key:
                raise ProviderError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self._config.api_key)
            logger.info(f"Gemini client initialized for model {self.model_name}")
        return self._client

    async def _generate(
        self,
        contents: list[types.Content],
        config: types.GenerateContentConfig | None = None,
    ) -> Any:
        client = self._get_client()
        return await client.aio.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=config,
        )

    async def generate_chat(self, messages: Sequence[ChatTurn]) -> str:
        """Generate a reply using every turn as conversation context.

        Args:
            messages: The conversation, oldest first.

        Returns:
            The extracted reply text.
        """
        contents = build_chat_contents(messages)
        logger.debug(f"Sending {len(contents)} turns to {self.model_name}")
        response = await self._generate(contents, chat_generation_config())
        return extract_text(response)

    async def generate_text(self, prompt: str) -> str:
        """Generate a reply to a single prompt without history."""
        contents = [types.Content(role="user", parts=[types.Part.from_text(text=prompt)])]
        response = await self._generate(contents)
        return extract_text(response)

    async def generate_from_attachment(self, prompt: str, attachment: Attachment) -> str:
        """Generate a reply to a prompt about one inlined file.

        Args:
            prompt: Instruction sent before the file.
            attachment: Base64 file payload and its MIME type.

        Returns:
            The extracted reply text.
        """
        contents = build_attachment_contents(prompt, attachment)
        logger.info(
            f"Sending {attachment.mime_type} attachment "
            f"({len(attachment.data)} base64 chars) to {self.model_name}"
        )
        response = await self._generate(contents)
        return extract_text(response)


# Module-level singleton instance
_gemini_service: GeminiService | None = None


def get_gemini_service() -> GeminiService:
    """Get or create the global Gemini service.

    Returns:
        The GeminiService instance.
    """
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService()
    return _gemini_service
