from fastapi import Request

from gemini_chatbot.api.config import ServerConfig
from gemini_chatbot.provider.gemini_service import GeminiService, get_gemini_service


def get_config(request: Request) -> ServerConfig:
    config: ServerConfig | None = getattr(request.app.state, "config", None)
    if config is None:
        raise RuntimeError("Application config is not initialized.")
    return config


def get_service() -> GeminiService:
    return get_gemini_service()
