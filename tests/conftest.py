"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - memory_storage: Plain dict standing in for NiceGUI general storage
    - repository: ChatRepository over memory_storage
    - store: SessionStore over the repository
    - completion_config: Config with a dummy API key
    - fake_completer: Scripted completion client recording its calls
    - sample_chats: Chats with sub-second timestamps and awkward content
"""

from datetime import UTC, datetime
from typing import Any

import pytest

from src.agent.completion_client import CompletionError
from src.agent.config import CompletionConfig
from src.models.schemas import Chat, CompletionResult, Role, Turn
from src.session.store import SessionStore
from src.storage.repository import ChatRepository


class FakeCompleter:
    """Completion client double that returns queued results in order.

    Queue a CompletionError instance to make the next call fail.
    """

    def __init__(self) -> None:
        self.calls: list[list[dict[str, str]]] = []
        self.results: list[CompletionResult | CompletionError] = []
        self.before_return = None

    async def complete(self, turns: list[dict[str, str]]) -> CompletionResult:
        self.calls.append(list(turns))
        if self.before_return is not None:
            self.before_return()
        result = self.results.pop(0) if self.results else CompletionResult(answer="ok")
        if isinstance(result, CompletionError):
            raise result
        return result


@pytest.fixture
def memory_storage() -> dict[str, Any]:
    """Return an empty in-memory key-value store."""
    return {}


@pytest.fixture
def repository(memory_storage: dict[str, Any]) -> ChatRepository:
    """Return a repository backed by memory_storage."""
    return ChatRepository(memory_storage)


@pytest.fixture
def store(repository: ChatRepository) -> SessionStore:
    """Return a session store with no persisted chats."""
    return SessionStore(repository)


@pytest.fixture
def completion_config() -> CompletionConfig:
    """Return a config that never reads the real environment key."""
    return CompletionConfig(
        api_key="gsk-test-key",
        base_url="https://llm.test/openai/v1",
        model_name="test-model",
    )


@pytest.fixture
def fake_completer() -> FakeCompleter:
    """Return a scripted completion client."""
    return FakeCompleter()


@pytest.fixture
def sample_chats() -> list[Chat]:
    """Return two chats with sub-second timestamps and special characters."""
    return [
        Chat(
            id="1760875200123",
            title='Quotes "and" newlines',
            turns=[
                Turn(
                    role=Role.USER,
                    content='He said "hi"\nthen left',
                    created_at=datetime(2026, 10, 19, 12, 0, 0, 123456, tzinfo=UTC),
                ),
                Turn(
                    role=Role.ASSISTANT,
                    content="Line one\n\tLine two \\ backslash",
                    created_at=datetime(2026, 10, 19, 12, 0, 1, 987001, tzinfo=UTC),
                    reasoning="consider 'quotes'",
                    reasoning_elapsed_ms=1864,
                ),
            ],
            last_updated=datetime(2026, 10, 19, 12, 0, 1, 987001, tzinfo=UTC),
        ),
        Chat(
            id="1760875100000",
            title="Empty chat",
            last_updated=datetime(2026, 10, 19, 11, 58, 20, 500, tzinfo=UTC),
        ),
    ]
