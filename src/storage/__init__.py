"""Local key-value persistence for chats and settings."""

from src.storage.repository import CHATS_KEY, SETTINGS_KEY, ChatRepository

__all__ = ["CHATS_KEY", "SETTINGS_KEY", "ChatRepository"]
