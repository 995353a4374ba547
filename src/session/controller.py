"""Orchestration between the session store, the completion client and settings.

The UI talks to this controller rather than wiring the store and the client
together itself.
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol

from src.agent.completion_client import CompletionError
from src.models.schemas import (
    ChatStats,
    CompletionResult,
    Role,
    SendResult,
    SendStatus,
    Settings,
    Turn,
)
from src.session.store import SessionStore
from src.storage.repository import ChatRepository

logger = logging.getLogger(__name__)


class Completer(Protocol):
    async def complete(self, turns: list[dict[str, str]]) -> CompletionResult: ...


class ChatController:
    """Sends user messages and records the assistant's answers.

    Only one completion call is in flight at a time. While it runs the store
    still accepts other mutations; the answer is appended to the chat the
    message was sent from, or dropped if that chat has been deleted.
    """

    def __init__(
        self,
        store: SessionStore,
        client: Completer,
        repository: ChatRepository,
    ) -> None:
        self.store = store
        self._client = client
        self._repository = repository
        self.settings: Settings = repository.load_settings()
        self.is_loading = False

    async def send_message(
        self,
        content: str,
        on_sent: Callable[[], None] | None = None,
    ) -> SendResult:
        """Send a user message and wait for the assistant's answer.

        Args:
            content: The message text typed by the user.
            on_sent: Called once the user turn is recorded and the request
                is about to start, so the UI can redraw.

        Returns:
            SendResult describing whether the answer was appended.
        """
        if not content.strip() or self.is_loading:
            return SendResult(status=SendStatus.REJECTED)

        turns = self.store.send_user_turn(content)
        chat_id = self.store.selected_chat_id
        history = [{"role": turn.role.value, "content": turn.content} for turn in turns]

        self.is_loading = True
        try:
            if on_sent is not None:
                on_sent()
            result = await self._client.complete(history)
        except CompletionError as e:
            logger.error(f"Error getting AI response for chat {chat_id}: {e}")
            return SendResult(status=SendStatus.FAILED, error=str(e))
        finally:
            self.is_loading = False

        turn = Turn(
            role=Role.ASSISTANT,
            content=result.answer,
            reasoning=result.reasoning or None,
            reasoning_elapsed_ms=result.reasoning_elapsed_ms,
        )
        if chat_id is None or not self.store.append_assistant_turn(chat_id, turn):
            return SendResult(status=SendStatus.DROPPED)
        return SendResult(status=SendStatus.ANSWERED, turn=turn)

    def update_settings(self, **changes: Any) -> Settings:
        """Apply and persist settings changes.

        Raises:
            ValidationError: If a changed value is not a valid setting.
        """
        self.settings = Settings.model_validate(
            {**self.settings.model_dump(), **changes}
        )
        self._repository.save_settings(self.settings)
        return self.settings

    def stats(self) -> ChatStats:
        return self._repository.get_chat_stats()
