"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - upload_dir: Temporary uploads directory, empty at test start
    - server_config: ServerConfig pointing at the temporary uploads directory
    - fake_service: GeminiService stand-in with async generation mocks
    - app: FastAPI application wired to the fake service
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from gemini_chatbot.api.app import create_app
from gemini_chatbot.api.config import ServerConfig
from gemini_chatbot.api.dependencies import get_service
from gemini_chatbot.provider.gemini_service import GeminiService


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Return a per-test uploads directory.

    Returns:
        Path that does not exist yet; staging creates it.
    """
    return tmp_path / "uploads"


@pytest.fixture
def server_config(upload_dir: Path) -> ServerConfig:
    """Server configuration using the temporary uploads directory."""
    return ServerConfig(upload_dir=upload_dir)


@pytest.fixture
def fake_service() -> MagicMock:
    """GeminiService stand-in whose generation methods return canned text.

    Returns:
        MagicMock specced on GeminiService with AsyncMock methods.
    """
    service = MagicMock(spec=GeminiService)
    service.generate_chat = AsyncMock(return_value="hi there")
    service.generate_text = AsyncMock(return_value="text reply")
    service.generate_from_attachment = AsyncMock(return_value="attachment reply")
    return service


@pytest.fixture
def app(server_config: ServerConfig, fake_service: MagicMock) -> FastAPI:
    """Application with the Gemini service replaced by ``fake_service``."""
    application = create_app(server_config)
    application.dependency_overrides[get_service] = lambda: fake_service
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
