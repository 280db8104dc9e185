"""Provider configuration with environment variable loading.

Pydantic-based configuration for the Gemini client. The API key may be
absent: the server still starts and every generation call then fails with
an authentication error.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"


class AgentConfig(BaseModel):
    """Configuration for the Gemini generation client.

    Attributes:
        api_key: Gemini API key (empty when not configured).
        model_name: Model identifier used for every request.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for the Gemini API",
        validate_default=True,
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        description="Model to use",
        validate_default=True,
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @field_validator("model_name")
    @classmethod
    def normalize_model_name(cls, v: str) -> str:
        """Accept both ``gemini-x`` and ``models/gemini-x`` spellings."""
        v = v.strip() or DEFAULT_MODEL
        if v.startswith("models/"):
            v = v.split("/", 1)[1]
        return v

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def get_agent_config() -> AgentConfig:
    """Create provider configuration from environment.

    Returns:
        Configured AgentConfig instance.
    """
    return AgentConfig()
