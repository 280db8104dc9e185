"""Gemini Chatbot - multi-modal chat mediation between a web client and Google Gemini.

Combines FastAPI for the HTTP API, google-genai for generation,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints, error handlers and static files
    - provider: Gemini client, request building and text extraction
    - parsing: Upload staging and base64 encoding
    - ui: Chat interface and its session logic
    - models: Request/response schemas
"""

__version__ = "0.1.0"
