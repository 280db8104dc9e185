"""Integration tests for the chat, health and text generation endpoints.

Uses the real FastAPI app through httpx ASGITransport with the Gemini
service replaced by a mock.
"""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from gemini_chatbot.api.app import create_app
from gemini_chatbot.api.config import ServerConfig
from gemini_chatbot.api.dependencies import get_service
from gemini_chatbot.errors import ProviderError
from gemini_chatbot.models.schemas import ChatResponse, ChatTurn


class TestChatEndpoint:
    """Tests for POST /api/chat."""

    async def test_hello_returns_candidate_text(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """A single user turn returns the provider text with status and timestamp."""
        response = await async_client.post(
            "/api/chat",
            json={"messages": [{"role": "user", "content": "hello"}]},
        )

        assert response.status_code == 200
        data = ChatResponse.model_validate(response.json())
        assert data.result == "hi there"
        assert data.status == "success"
        assert datetime.fromisoformat(data.timestamp)

    async def test_all_turns_are_forwarded(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """Every turn is passed to the service, not only the last one."""
        messages = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello, how can I help?"},
            {"role": "user", "content": "tell me a joke"},
        ]

        response = await async_client.post("/api/chat", json={"messages": messages})

        assert response.status_code == 200
        (turns,) = fake_service.generate_chat.call_args.args
        assert turns == [ChatTurn.model_validate(m) for m in messages]

    async def test_missing_role_defaults_to_user(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """A turn without role is accepted and treated as a user turn."""
        response = await async_client.post(
            "/api/chat", json={"messages": [{"content": "no role here"}]}
        )

        assert response.status_code == 200
        (turns,) = fake_service.generate_chat.call_args.args
        assert turns[0].role == "user"

    @pytest.mark.parametrize(
        "body",
        [{}, {"messages": None}, {"messages": "hello"}, {"messages": {"role": "user"}}],
    )
    async def test_messages_not_a_list_returns_400(
        self, async_client: AsyncClient, fake_service: MagicMock, body: dict
    ) -> None:
        """Absent or non-array messages are rejected before calling the provider."""
        response = await async_client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid input format. Expected messages array."}
        fake_service.generate_chat.assert_not_called()

    async def test_empty_messages_returns_400(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """An empty messages array is rejected."""
        response = await async_client.post("/api/chat", json={"messages": []})

        assert response.status_code == 400
        assert response.json() == {"error": "Messages array cannot be empty."}
        fake_service.generate_chat.assert_not_called()

    async def test_invalid_json_returns_400(self, async_client: AsyncClient) -> None:
        """Malformed JSON body is treated as missing messages."""
        response = await async_client.post(
            "/api/chat",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "messages array" in response.json()["error"]

    async def test_message_without_content_returns_400(
        self, async_client: AsyncClient
    ) -> None:
        """Elements must carry text content."""
        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user"}]}
        )

        assert response.status_code == 400
        assert "role and content" in response.json()["error"]

    @pytest.mark.parametrize(
        "message",
        [{"role": "user", "content": None}, "just a string", ["user", "hi"], 42],
    )
    async def test_element_without_object_or_content_returns_400(
        self, async_client: AsyncClient, fake_service: MagicMock, message: object
    ) -> None:
        response = await async_client.post("/api/chat", json={"messages": [message]})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Each message must be an object with role and content."
        }
        fake_service.generate_chat.assert_not_called()

    @pytest.mark.parametrize(
        ("role", "expected"),
        [(None, "user"), (5, "5"), ("system", "system"), ("assistant", "assistant")],
    )
    async def test_any_role_is_accepted(
        self,
        async_client: AsyncClient,
        fake_service: MagicMock,
        role: object,
        expected: str,
    ) -> None:
        """Unknown, null and numeric roles are forwarded and later mapped to user."""
        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": role, "content": "x"}]}
        )

        assert response.status_code == 200
        (turns,) = fake_service.generate_chat.call_args.args
        assert turns[0].role == expected

    @pytest.mark.parametrize(
        ("content", "expected"),
        [(42, "42"), (True, "True"), ({"a": 1}, '{"a": 1}')],
    )
    async def test_non_text_content_is_forwarded_as_text(
        self,
        async_client: AsyncClient,
        fake_service: MagicMock,
        content: object,
        expected: str,
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": content}]}
        )

        assert response.status_code == 200
        (turns,) = fake_service.generate_chat.call_args.args
        assert turns[0].content == expected

    async def test_api_key_error_returns_401(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """Provider errors mentioning API_KEY map to 401."""
        fake_service.generate_chat.side_effect = RuntimeError(
            "400 INVALID_ARGUMENT. API key not valid. reason: API_KEY_INVALID"
        )

        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "hello"}]}
        )

        assert response.status_code == 401
        assert response.json() == {
            "error": "Invalid API key or API key not configured",
            "message": "Please check your Gemini API key configuration",
        }

    async def test_missing_api_key_returns_401(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """The service's own missing-key error is reported as 401."""
        fake_service.generate_chat.side_effect = ProviderError("GEMINI_API_KEY is not configured")

        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "hello"}]}
        )

        assert response.status_code == 401

    async def test_quota_error_returns_429(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """Provider errors mentioning quota map to 429."""
        fake_service.generate_chat.side_effect = RuntimeError(
            "429 RESOURCE_EXHAUSTED. You exceeded your current quota"
        )

        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "hello"}]}
        )

        assert response.status_code == 429
        assert response.json() == {
            "error": "API quota exceeded",
            "message": "Please try again later",
        }

    async def test_other_provider_error_returns_500_with_message(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        """Any other provider failure is 500 with the raw error text."""
        fake_service.generate_chat.side_effect = RuntimeError("503 UNAVAILABLE. Model overloaded")

        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "hello"}]}
        )

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to generate response"
        assert data["message"] == "503 UNAVAILABLE. Model overloaded"
        assert "timestamp" in data

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        """GET request to POST endpoint returns 405 Method Not Allowed."""
        response = await async_client.get("/api/chat")

        assert response.status_code == 405


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    async def test_health_reports_ok(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["message"] == "Gemini AI Chatbot API is running"
        assert datetime.fromisoformat(data["timestamp"])


class TestGenerateTextEndpoint:
    """Tests for POST /generate-text."""

    async def test_prompt_returns_result(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        response = await async_client.post("/generate-text", json={"prompt": "Write a haiku"})

        assert response.status_code == 200
        assert response.json() == {"result": "text reply"}
        fake_service.generate_text.assert_awaited_once_with("Write a haiku")

    @pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": None}])
    async def test_missing_prompt_returns_400(
        self, async_client: AsyncClient, fake_service: MagicMock, body: dict
    ) -> None:
        response = await async_client.post("/generate-text", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Tulis sebuah prompt!"}
        fake_service.generate_text.assert_not_called()

    async def test_provider_error_returns_500(
        self, async_client: AsyncClient, fake_service: MagicMock
    ) -> None:
        fake_service.generate_text.side_effect = RuntimeError("boom")

        response = await async_client.post("/generate-text", json={"prompt": "hi"})

        assert response.status_code == 500
        assert response.json() == {"error": "boom"}


class TestStaticAndCors:
    """Tests for the index page and the CORS allow-list."""

    async def test_index_serves_html(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Gemini AI Chatbot" in response.text

    async def test_allowed_origin_gets_cors_headers(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/health", headers={"Origin": "http://localhost:3000"}
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    async def test_preflight_from_allowed_origin(self, async_client: AsyncClient) -> None:
        response = await async_client.options(
            "/api/chat",
            headers={
                "Origin": "http://127.0.0.1:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://127.0.0.1:3000"

    @pytest.mark.parametrize(
        "origin", ["http://localhost", "http://localhost:30", "0", "http://127.0.0.1:3000,"]
    )
    async def test_origins_from_environment_match_exactly(
        self, upload_dir: Path, fake_service: MagicMock, origin: str
    ) -> None:
        """Origins configured as a comma separated string do not match by substring."""
        env = {"CORS_ALLOWED_ORIGINS": "http://localhost:3000,http://127.0.0.1:3000"}
        with patch.dict("os.environ", env):
            application = create_app(ServerConfig(upload_dir=upload_dir))
        application.dependency_overrides[get_service] = lambda: fake_service

        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            allowed = await client.get("/api/health", headers={"Origin": "http://localhost:3000"})
            rejected = await client.get("/api/health", headers={"Origin": origin})

        assert allowed.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "access-control-allow-origin" not in rejected.headers

    async def test_disallowed_origin_gets_no_cors_headers(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.get(
            "/api/health", headers={"Origin": "http://evil.example.com"}
        )

        assert "access-control-allow-origin" not in response.headers
