"""Completion service access.

Responsibilities:
    - Configuration loaded from the environment and .env
    - One request per user send, carrying the full turn history
    - Reasoning trace extraction and elapsed-time measurement

Maintains clean separation from the session state and the UI.
"""

from src.agent.completion_client import (
    CompletionClient,
    CompletionError,
    get_completion_client,
)
from src.agent.config import CompletionConfig, get_completion_config

__all__ = [
    "CompletionClient",
    "CompletionConfig",
    "CompletionError",
    "get_completion_client",
    "get_completion_config",
]
