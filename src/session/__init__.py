"""Chat session state and the send/answer flow.

Responsibilities:
    - Chat list, selection and edit-in-place state
    - Truncate-and-resend when a past user turn is edited
    - Routing completion results back to the chat they belong to
    - Settings updates

Every mutation is flushed to local storage through ChatRepository.
"""

from src.session.controller import ChatController
from src.session.store import SessionStateError, SessionStore

__all__ = ["ChatController", "SessionStateError", "SessionStore"]
