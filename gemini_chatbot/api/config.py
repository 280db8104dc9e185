"""HTTP server configuration loaded from the environment."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

_PACKAGE_DIR = Path(__file__).parent.parent
_PROJECT_DIR = _PACKAGE_DIR.parent

DEFAULT_ALLOWED_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


class ServerConfig(BaseModel):
    """Configuration for the FastAPI application.

    Attributes:
        allowed_origins: Origins permitted by the CORS policy.
        upload_dir: Directory where uploads are staged during a request.
        public_dir: Directory holding the static index page and assets.
    """

    allowed_origins: list[str] = Field(
        default_factory=lambda: os.getenv("CORS_ALLOWED_ORIGINS") or list(DEFAULT_ALLOWED_ORIGINS),
        description="Origins allowed to call the API from a browser",
        validate_default=True,
    )
    upload_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("UPLOAD_DIR") or _PROJECT_DIR / "uploads"),
        description="Scoped directory for staged uploads",
    )
    public_dir: Path = Field(
        default=_PACKAGE_DIR / "public",
        description="Static files served at / and /static",
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_origins(cls, value: list[str] | str) -> list[str]:
        """Accept a comma separated string as well as a list."""
        if isinstance(value, str):
            value = [origin.strip() for origin in value.split(",")]
        cleaned = [origin for origin in value if origin]
        return cleaned or list(DEFAULT_ALLOWED_ORIGINS)


def get_server_config() -> ServerConfig:
    """Create server configuration from environment."""
    return ServerConfig()
