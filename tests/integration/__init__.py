"""Integration tests for the HTTP API.

Requests go through the full FastAPI stack (CORS, validation, error
handler, upload staging) via httpx's ASGITransport, with a fake
GeminiService injected through ``dependency_overrides``.

Coverage:
    - Chat and health endpoints, error status mapping
    - Text and attachment generation endpoints
    - Staged upload cleanup on success and failure
    - Static index page and CORS policy
"""
