"""FastAPI endpoints for the Gemini chatbot.

Endpoints:
    - GET /: Static landing page
    - POST /api/chat: Multi-turn chat completion
    - GET /api/health: Service health status
    - POST /generate-text: Single prompt, no history
    - POST /generate-from-image: Prompt plus image upload
    - POST /generate-from-document: Prompt plus document upload
    - POST /generate-from-audio: Prompt plus audio upload
"""

from gemini_chatbot.api.app import app, create_app

__all__ = ["app", "create_app"]
