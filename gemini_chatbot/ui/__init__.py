"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with a word-by-word typing effect
    - File attachment routed to the image, audio or document endpoint
    - Connectivity status from the health endpoint
    - In-memory conversation history for the current page

Conversation state and API calls live in ``session``; ``chat_page`` only
renders them.
"""
