"""Unit tests for individual components in isolation.

Coverage:
    - provider/: Configuration, request building, text extraction
    - parsing/: Upload staging and base64 encoding
    - ui/: Client session behaviour and typing animation

Uses mocks for the Gemini SDK and httpx transports for the backend.
"""
