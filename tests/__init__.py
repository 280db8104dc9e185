"""Test package for the Gemini chatbot.

Structure:
    - unit/: Individual function and class tests
    - integration/: API tests through the ASGI app

The Gemini SDK is never called for real: unit tests patch ``genai.Client``
and integration tests override the service dependency. Leverages pytest
with pytest-check for soft assertions.
"""
