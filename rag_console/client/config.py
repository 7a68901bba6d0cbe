"""Client configuration with environment variable loading.

Pydantic-based configuration for the RAG backend client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "http://localhost:5001"


class ClientConfig(BaseModel):
    """Configuration for the RAG backend client.

    Attributes:
        base_url: Root URL of the RAG backend.
        request_timeout: Per-request timeout in seconds (None waits forever).
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("RAG_API_BASE_URL", DEFAULT_BASE_URL),
        description="Base URL of the RAG backend",
        validate_default=True,
    )
    request_timeout: float | None = Field(
        default_factory=lambda: os.getenv("RAG_API_TIMEOUT") or None,
        gt=0,
        description="Request timeout in seconds, unset for no timeout",
        validate_default=True,
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "RAG_API_BASE_URL must start with http:// or https://"
            )
        return v.rstrip("/")

    @field_validator("request_timeout", mode="before")
    @classmethod
    def blank_timeout_is_none(cls, v: object) -> object:
        """Treat a blank timeout value as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        pydantic.ValidationError: If an environment value is malformed.
    """
    return ClientConfig()
