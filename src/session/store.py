"""In-memory session state: all chats, the selected chat and a pending edit.

The store is the only writer of chat state. Each public mutation runs to
completion, re-checks that the selection and the pending edit still point at
something that exists, and then flushes the chats through the repository.

Operations that reference an unknown chat or an invalid turn index are
no-ops that return False instead of raising.
"""

import logging

from src.models.schemas import Chat, Role, Turn, utc_now
from src.storage.repository import ChatRepository

logger = logging.getLogger(__name__)

NEW_CHAT_TITLE = "New Chat"
TITLE_PREVIEW_CHARS = 30
TITLE_ELLIPSIS = "..."


class SessionStateError(RuntimeError):
    """Raised when selection or pending edit no longer match the chats."""

    pass


class SessionStore:
    """Owner of chats, selection and edit state.

    Chats are kept most-recently-created first. The selected chat is held
    as an id and resolved on every read, so deleting a chat can never leave
    a stale reference behind.
    """

    def __init__(self, repository: ChatRepository) -> None:
        """Initialize the store from persisted chats.

        Args:
            repository: Persistence adapter used to load and flush chats.
        """
        self._repository = repository
        self._chats: list[Chat] = repository.load_chats()
        self._selected_chat_id: str | None = None
        self._pending_edit_index: int | None = None
        logger.info(f"Loaded {len(self._chats)} chats")

    # === Read access ===
    # Chats handed out are deep copies; changes go through the mutations.

    @property
    def chats(self) -> list[Chat]:
        return [chat.model_copy(deep=True) for chat in self._chats]

    @property
    def selected_chat_id(self) -> str | None:
        if self._find_selected() is None:
            return None
        return self._selected_chat_id

    @property
    def selected_chat(self) -> Chat | None:
        chat = self._find_selected()
        return chat.model_copy(deep=True) if chat is not None else None

    @property
    def pending_edit_index(self) -> int | None:
        return self._pending_edit_index

    def get_chat(self, chat_id: str) -> Chat | None:
        """Return a copy of the chat with the given id, or None."""
        chat = self._find_chat(chat_id)
        return chat.model_copy(deep=True) if chat is not None else None

    def search_chats(self, query: str) -> list[Chat]:
        """Return chats whose title or any turn contains the query.

        Matching is case-insensitive and keeps the list order. A blank
        query matches every chat.
        """
        needle = query.strip().casefold()
        if not needle:
            return self.chats
        return [
            chat.model_copy(deep=True)
            for chat in self._chats
            if needle in chat.title.casefold()
            or any(needle in turn.content.casefold() for turn in chat.turns)
        ]

    # === Mutations ===

    def create_chat(self, title: str = NEW_CHAT_TITLE) -> Chat:
        """Create an empty chat at the front of the list and select it."""
        now = utc_now()
        chat = Chat(id=self._new_chat_id(), title=title, last_updated=now)
        self._chats.insert(0, chat)
        self._selected_chat_id = chat.id
        self._pending_edit_index = None
        self._commit()
        logger.debug(f"Created chat {chat.id}")
        return chat.model_copy(deep=True)

    def select_chat(self, chat_id: str) -> bool:
        """Select a chat by id. Unknown ids are ignored."""
        if self._find_chat(chat_id) is None:
            logger.debug(f"Ignoring selection of unknown chat {chat_id}")
            return False
        if chat_id != self._selected_chat_id:
            self._pending_edit_index = None
        self._selected_chat_id = chat_id
        self._commit()
        return True

    def delete_chat(self, chat_id: str) -> bool:
        """Delete a chat, moving the selection to the first remaining chat."""
        chat = self._find_chat(chat_id)
        if chat is None:
            return False

        remaining = [c for c in self._chats if c.id != chat_id]
        if self._selected_chat_id == chat_id:
            self._selected_chat_id = remaining[0].id if remaining else None
            self._pending_edit_index = None
        self._chats = remaining
        self._commit()
        logger.debug(f"Deleted chat {chat_id}")
        return True

    def rename_chat(self, chat_id: str, title: str) -> bool:
        """Set a chat's title. The title is stored as given."""
        chat = self._find_chat(chat_id)
        if chat is None:
            return False
        chat.title = title
        self._commit()
        return True

    def begin_edit(self, index: int) -> bool:
        """Mark a user turn of the selected chat as being edited."""
        chat = self._find_selected()
        if chat is None or not 0 <= index < len(chat.turns):
            return False
        if chat.turns[index].role != Role.USER:
            return False
        self._pending_edit_index = index
        self._commit()
        return True

    def cancel_edit(self) -> None:
        """Forget the pending edit, if any."""
        self._pending_edit_index = None
        self._commit()

    def send_user_turn(self, content: str) -> list[Turn]:
        """Append a user turn to the selected chat.

        Creates a chat titled after the content when nothing is selected.
        With a pending edit, the edited turn and everything after it are
        discarded first.

        Args:
            content: The message text.

        Returns:
            The selected chat's turns after the append.
        """
        chat = self._find_selected()
        if chat is None:
            chat = Chat(
                id=self._new_chat_id(),
                title=content[:TITLE_PREVIEW_CHARS] + TITLE_ELLIPSIS,
            )
            self._chats.insert(0, chat)
            self._selected_chat_id = chat.id
            self._pending_edit_index = None

        if self._pending_edit_index is not None:
            del chat.turns[self._pending_edit_index:]
            self._pending_edit_index = None

        turn = Turn(role=Role.USER, content=content)
        chat.turns.append(turn)
        chat.last_updated = turn.created_at
        self._commit()
        return list(chat.turns)

    def append_assistant_turn(self, chat_id: str, turn: Turn) -> bool:
        """Append an assistant turn to a chat by id.

        Returns False when the chat was deleted while the answer was
        being generated.
        """
        chat = self._find_chat(chat_id)
        if chat is None:
            logger.info(f"Dropping response for deleted chat {chat_id}")
            return False
        chat.turns.append(turn)
        chat.last_updated = utc_now()
        self._commit()
        return True

    # === Internals ===

    def _find_chat(self, chat_id: str) -> Chat | None:
        for chat in self._chats:
            if chat.id == chat_id:
                return chat
        return None

    def _find_selected(self) -> Chat | None:
        if self._selected_chat_id is None:
            return None
        return self._find_chat(self._selected_chat_id)

    def _new_chat_id(self) -> str:
        candidate = int(utc_now().timestamp() * 1000)
        while self._find_chat(str(candidate)) is not None:
            candidate += 1
        return str(candidate)

    def _check_consistency(self) -> None:
        if self._selected_chat_id is not None and self._find_chat(self._selected_chat_id) is None:
            raise SessionStateError(f"Selected chat {self._selected_chat_id} does not exist")
        if self._pending_edit_index is not None:
            chat = self._find_selected()
            if chat is None or not 0 <= self._pending_edit_index < len(chat.turns):
                raise SessionStateError(
                    f"Pending edit index {self._pending_edit_index} is out of range"
                )

    def _commit(self) -> None:
        self._check_consistency()
        self._repository.save_chats(self._chats)
