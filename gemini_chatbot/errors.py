"""Error taxonomy for the mediation service.

Every error carries the HTTP status and the JSON body fields it is rendered
with by the exception handler registered in ``gemini_chatbot.api.app``.
"""

from datetime import UTC, datetime


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO 8601 string with a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChatbotError(Exception):
    """Base class for errors rendered as ``{error, message?, timestamp?}``.

    Attributes:
        status_code: HTTP status of the error response.
        error: Short error text, always present in the body.
        message: Optional detail text.
        timestamp: Optional ISO 8601 time the error was raised.
    """

    status_code = 500

    def __init__(
        self,
        error: str,
        message: str | None = None,
        *,
        with_timestamp: bool = False,
    ) -> None:
        super().__init__(error if message is None else f"{error}: {message}")
        self.error = error
        self.message = message
        self.timestamp = utc_timestamp() if with_timestamp else None

    def to_body(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        if self.timestamp is not None:
            body["timestamp"] = self.timestamp
        return body


class InputValidationError(ChatbotError):
    """Missing or malformed request input."""

    status_code = 400


class AuthError(ChatbotError):
    """The provider rejected or never received credentials."""

    status_code = 401


class QuotaError(ChatbotError):
    """The provider reported a rate or quota limit."""

    status_code = 429


class ProviderError(ChatbotError):
    """Any other provider failure."""

    status_code = 500


def classify_provider_error(exc: Exception) -> ChatbotError:
    """Map a failed chat generation to the error the chat endpoint returns.

    The provider's error text decides the category: ``API_KEY`` means a
    credentials problem, ``quota`` a rate limit, anything else is passed
    through verbatim as a generic failure.
    """
    text = str(exc)
    if "API_KEY" in text:
        return AuthError(
            "Invalid API key or API key not configured",
            "Please check your Gemini API key configuration",
        )
    if "quota" in text:
        return QuotaError("API quota exceeded", "Please try again later")
    return ProviderError(
        "Failed to generate response",
        text or "Internal server error",
        with_timestamp=True,
    )
