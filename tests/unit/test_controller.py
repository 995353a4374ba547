"""Unit tests for ChatController orchestration."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from src.agent.completion_client import CompletionError
from src.models.schemas import (
    CompletionResult,
    FontSize,
    Role,
    SendStatus,
    Settings,
    Theme,
)
from src.session.controller import ChatController
from src.session.store import SessionStore
from src.storage.repository import ChatRepository
from tests.conftest import FakeCompleter


@pytest.fixture
def controller(
    store: SessionStore, fake_completer: FakeCompleter, repository: ChatRepository
) -> ChatController:
    return ChatController(store=store, client=fake_completer, repository=repository)


class TestSendMessage:
    """Tests for send_message."""

    async def test_appends_assistant_turn(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """A successful call appends answer, reasoning and elapsed time."""
        fake_completer.results.append(
            CompletionResult(answer="Paris", reasoning="capital of France", reasoning_elapsed_ms=420)
        )

        result = await controller.send_message("Capital of France?")

        assert result.status == SendStatus.ANSWERED
        turns = controller.store.selected_chat.turns
        check.equal([t.role for t in turns], [Role.USER, Role.ASSISTANT])
        check.equal(turns[1].content, "Paris")
        check.equal(turns[1].reasoning, "capital of France")
        check.equal(turns[1].reasoning_elapsed_ms, 420)
        check.equal(result.turn, turns[1])

    async def test_sends_full_history(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """Each call carries every prior turn as role/content pairs."""
        fake_completer.results.extend(
            [CompletionResult(answer="one"), CompletionResult(answer="two")]
        )

        await controller.send_message("first")
        await controller.send_message("second")

        assert fake_completer.calls[1] == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "one"},
            {"role": "user", "content": "second"},
        ]

    async def test_empty_reasoning_is_not_stored(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """Answers without thinking have no reasoning on the turn."""
        fake_completer.results.append(CompletionResult(answer="plain"))

        result = await controller.send_message("hi")

        assert result.turn.reasoning is None

    async def test_failure_appends_nothing(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """A failed call leaves only the user turn and clears loading."""
        fake_completer.results.append(CompletionError("Failed to get AI response"))

        result = await controller.send_message("hi")

        check.equal(result.status, SendStatus.FAILED)
        check.equal(result.error, "Failed to get AI response")
        check.is_none(result.turn)
        check.is_false(controller.is_loading)
        check.equal(
            [t.role for t in controller.store.selected_chat.turns], [Role.USER]
        )

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_blank_message_is_rejected(
        self, controller: ChatController, fake_completer: FakeCompleter, content: str
    ) -> None:
        """Blank input creates no chat and makes no call."""
        result = await controller.send_message(content)

        check.equal(result.status, SendStatus.REJECTED)
        check.equal(controller.store.chats, [])
        check.equal(fake_completer.calls, [])

    async def test_rejects_while_loading(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """Only one request may be in flight."""
        controller.is_loading = True

        result = await controller.send_message("hi")

        assert result.status == SendStatus.REJECTED
        assert fake_completer.calls == []

    async def test_loading_flag_during_call(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """is_loading is set while the call is pending and cleared after."""
        seen: list[bool] = []
        fake_completer.before_return = lambda: seen.append(controller.is_loading)

        await controller.send_message("hi")

        assert seen == [True]
        assert controller.is_loading is False

    async def test_on_sent_sees_user_turn(
        self, controller: ChatController
    ) -> None:
        """on_sent runs after the user turn is recorded."""
        seen: list[int] = []

        await controller.send_message(
            "hi", on_sent=lambda: seen.append(len(controller.store.selected_chat.turns))
        )

        assert seen == [1]

    async def test_failing_on_sent_clears_loading(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """An exception from on_sent propagates without leaving loading stuck."""

        def broken_redraw() -> None:
            raise RuntimeError("redraw failed")

        with pytest.raises(RuntimeError, match="redraw failed"):
            await controller.send_message("hi", on_sent=broken_redraw)

        check.is_false(controller.is_loading)
        check.equal(fake_completer.calls, [])

        result = await controller.send_message("again")

        check.equal(result.status, SendStatus.ANSWERED)

    async def test_response_for_deleted_chat_is_dropped(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """Deleting the chat mid-flight drops the answer."""

        def delete_origin() -> None:
            controller.store.delete_chat(controller.store.selected_chat_id)

        fake_completer.before_return = delete_origin

        result = await controller.send_message("hi")

        assert result.status == SendStatus.DROPPED
        assert controller.store.chats == []

    async def test_answer_goes_to_origin_after_switch(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """Switching chats mid-flight does not redirect the answer."""
        origin = controller.store.create_chat()
        fake_completer.before_return = controller.store.create_chat

        result = await controller.send_message("hi")

        assert result.status == SendStatus.ANSWERED
        assert len(controller.store.get_chat(origin.id).turns) == 2
        assert controller.store.selected_chat.turns == []


class TestSettings:
    """Tests for settings handling."""

    def test_loads_settings_on_init(
        self, store: SessionStore, fake_completer: FakeCompleter, repository: ChatRepository
    ) -> None:
        """Controller starts with the persisted settings."""
        repository.save_settings(Settings(theme=Theme.LIGHT))

        controller = ChatController(store=store, client=fake_completer, repository=repository)

        assert controller.settings.theme == Theme.LIGHT

    def test_update_persists(
        self, controller: ChatController, repository: ChatRepository
    ) -> None:
        """Updated settings are saved immediately."""
        controller.update_settings(font_size="large", show_timestamps=False)

        saved = repository.load_settings()
        check.equal(saved.font_size, FontSize.LARGE)
        check.is_false(saved.show_timestamps)
        check.equal(saved.theme, Theme.DARK)

    def test_invalid_update_raises_and_keeps_settings(
        self, controller: ChatController
    ) -> None:
        """Invalid values are rejected without changing settings."""
        with pytest.raises(ValidationError):
            controller.update_settings(theme="sepia")

        assert controller.settings == Settings()


class TestStats:
    """Tests for stats."""

    async def test_counts_answered_messages(
        self, controller: ChatController, fake_completer: FakeCompleter
    ) -> None:
        """Stats reflect persisted chats and response times."""
        fake_completer.results.append(CompletionResult(answer="a", reasoning_elapsed_ms=300))

        await controller.send_message("q")
        stats = controller.stats()

        check.equal(stats.total_chats, 1)
        check.equal(stats.total_messages, 2)
        check.equal(stats.average_response_time_ms, 300)
