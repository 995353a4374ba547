"""Completion service configuration with environment variable loading.

Pydantic-based configuration for the completion client.
Targets Groq by default and works with any OpenAI-compatible API via a
custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "deepseek-r1-distill-llama-70b"


class CompletionConfig(BaseModel):
    """Configuration for the completion client.

    Attributes:
        api_key: Credential for the completion service.
        base_url: API base URL, without the ``/chat/completions`` suffix.
        model_name: Model identifier sent with every request.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        timeout: Request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GROQ_API_KEY") or os.getenv("LLM_API_KEY", ""),
        description="API key for the completion service",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=1000,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    timeout: float = Field(
        default=120.0,
        gt=0.0,
        description="Request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set GROQ_API_KEY or LLM_API_KEY in .env"
            )
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.rstrip("/")


def get_completion_config() -> CompletionConfig:
    """Create completion configuration from environment.

    Returns:
        Configured CompletionConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return CompletionConfig()
