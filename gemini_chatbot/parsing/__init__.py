"""Upload handling for attachment endpoints.

Responsibilities:
    - Staging multipart uploads in the uploads directory
    - Guaranteed removal of staged files after each request
    - Base64 encoding of file content for inline request parts
"""

from gemini_chatbot.parsing.attachments import StagedUpload, encode_attachment, staged_upload

__all__ = ["StagedUpload", "encode_attachment", "staged_upload"]
