from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class FontSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Turn(BaseModel):
    """A single message in a chat.

    Turns are frozen once created; editing a past user turn replaces it
    together with everything after it.

    Attributes:
        role: Who authored the turn.
        content: The visible message text.
        created_at: When the turn was created (UTC).
        reasoning: Thinking trace split out of an assistant answer.
        reasoning_elapsed_ms: Wall-clock duration of the completion call.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    created_at: datetime = Field(default_factory=utc_now)
    reasoning: str | None = None
    reasoning_elapsed_ms: int | None = Field(None, ge=0)


class Chat(BaseModel):
    """A titled conversation.

    Attributes:
        id: Creation-time-derived identifier, unique and immutable.
        title: Display title shown in the sidebar.
        turns: Turns in conversational order.
        last_updated: Time of the last change to the turn list.
    """

    id: str
    title: str
    turns: list[Turn] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=utc_now)


class Settings(BaseModel):
    """User display preferences."""

    theme: Theme = Theme.DARK
    font_size: FontSize = FontSize.MEDIUM
    show_timestamps: bool = True


class CompletionResult(BaseModel):
    """Parsed response from the completion service.

    Attributes:
        answer: Visible answer with the thinking segment removed.
        reasoning: Thinking trace, empty when the model emitted none.
        reasoning_elapsed_ms: Wall-clock duration of the whole call.
    """

    answer: str
    reasoning: str = ""
    reasoning_elapsed_ms: int = Field(0, ge=0)


class ChatStats(BaseModel):
    """Aggregate usage numbers for the welcome screen."""

    total_chats: int = Field(0, ge=0)
    total_messages: int = Field(0, ge=0)
    average_response_time_ms: int = Field(0, ge=0)


class SendStatus(str, Enum):
    """Outcome of sending a user message."""

    ANSWERED = "answered"
    FAILED = "failed"
    DROPPED = "dropped"
    REJECTED = "rejected"


class SendResult(BaseModel):
    """Result of a send through the chat controller.

    Attributes:
        status: What happened to the message.
        turn: The appended assistant turn when answered.
        error: Error message when the completion call failed.
    """

    status: SendStatus
    turn: Turn | None = None
    error: str | None = None
