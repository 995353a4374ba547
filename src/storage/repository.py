"""Local persistence for chats and settings.

Stores two independent JSON records in a key-value mapping. At runtime the
mapping is NiceGUI's ``app.storage.general``, which NiceGUI writes to a JSON
file next to the application. Persistence is best-effort: read and write
problems are logged and replaced by empty or default values, never raised.
"""

import logging
import math
from collections.abc import MutableMapping, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.models.schemas import Chat, ChatStats, Role, Settings

logger = logging.getLogger(__name__)

CHATS_KEY = "ai_chats"
SETTINGS_KEY = "ai_settings"

_chat_list_adapter = TypeAdapter(list[Chat])


class ChatRepository:
    """Reads and writes chat and settings records.

    Timestamps are stored as ISO-8601 strings with microsecond precision,
    so a save/load cycle reproduces every datetime exactly.
    """

    def __init__(self, storage: MutableMapping[str, Any]) -> None:
        """Initialize the repository.

        Args:
            storage: Key-value mapping that holds the serialized records.
        """
        self._storage = storage

    def save_chats(self, chats: Sequence[Chat]) -> None:
        """Serialize all chats, overwriting the previous record."""
        try:
            self._storage[CHATS_KEY] = _chat_list_adapter.dump_json(
                list(chats), exclude_none=True
            ).decode()
        except Exception as e:
            logger.error(f"Error saving chats: {e}")

    def load_chats(self) -> list[Chat]:
        """Load all chats, or an empty list when absent or malformed."""
        try:
            saved = self._storage.get(CHATS_KEY)
            if not saved:
                return []
            return _chat_list_adapter.validate_json(saved)
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Error loading chats: {e}")
            return []

    def save_settings(self, settings: Settings) -> None:
        """Serialize settings, overwriting the previous record."""
        try:
            self._storage[SETTINGS_KEY] = settings.model_dump_json()
        except Exception as e:
            logger.error(f"Error saving settings: {e}")

    def load_settings(self) -> Settings:
        """Load settings, or the defaults when absent or malformed."""
        try:
            saved = self._storage.get(SETTINGS_KEY)
            if not saved:
                return Settings()
            return Settings.model_validate_json(saved)
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Error loading settings: {e}")
            return Settings()

    def get_chat_stats(self) -> ChatStats:
        """Summarize the stored chats.

        The average response time covers assistant turns that recorded a
        non-zero elapsed time.
        """
        chats = self.load_chats()
        total_messages = 0
        total_response_time = 0
        response_count = 0

        for chat in chats:
            total_messages += len(chat.turns)
            for turn in chat.turns:
                if turn.role == Role.ASSISTANT and turn.reasoning_elapsed_ms:
                    total_response_time += turn.reasoning_elapsed_ms
                    response_count += 1

        # Halves round up
        average = (
            math.floor(total_response_time / response_count + 0.5) if response_count else 0
        )
        return ChatStats(
            total_chats=len(chats),
            total_messages=total_messages,
            average_response_time_ms=average,
        )
