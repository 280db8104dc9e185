"""Gemini provider integration.

Responsibilities:
    - Client construction from the configured API key
    - Mapping chat turns and attachments onto Gemini request contents
    - Fixed generation parameters for chat
    - Text extraction from variably shaped responses

Keeps the HTTP layer free of SDK types.
"""

from gemini_chatbot.provider.config import AgentConfig, get_agent_config
from gemini_chatbot.provider.extraction import extract_text
from gemini_chatbot.provider.gemini_service import GeminiService, get_gemini_service

__all__ = [
    "AgentConfig",
    "GeminiService",
    "extract_text",
    "get_agent_config",
    "get_gemini_service",
]
