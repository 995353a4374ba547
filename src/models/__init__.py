"""Pydantic models shared by every layer of the chat client.

Provides type safety and validation for in-memory state and for the JSON
records kept in local storage.

Models:
    - Turn: One message authored by the user or the assistant
    - Chat: Titled, ordered sequence of turns
    - Settings: Theme, font size and timestamp preferences
    - CompletionResult: Parsed answer, reasoning trace and elapsed time
    - ChatStats: Aggregate numbers for the welcome screen
    - SendResult: Outcome of sending a user message
"""

from src.models.schemas import (
    Chat,
    ChatStats,
    CompletionResult,
    FontSize,
    Role,
    SendResult,
    SendStatus,
    Settings,
    Theme,
    Turn,
    utc_now,
)

__all__ = [
    "Chat",
    "ChatStats",
    "CompletionResult",
    "FontSize",
    "Role",
    "SendResult",
    "SendStatus",
    "Settings",
    "Theme",
    "Turn",
    "utc_now",
]
