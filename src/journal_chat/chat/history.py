"""In-memory conversation history with a single journal context slot.

The context (the journal text plus the assistant's acknowledgement) always
sits at the head of the message list. Loading a new range replaces it
instead of stacking another copy in front of the conversation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

USER = "user"
ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single chat message."""

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class ChatHistory:
    """Ordered chat log plus an optional context pair."""

    def __init__(self) -> None:
        self._context: tuple[Message, Message] | None = None
        self._turns: list[Message] = []

    @property
    def context(self) -> tuple[Message, Message] | None:
        return self._context

    @property
    def has_context(self) -> bool:
        return self._context is not None

    @property
    def turns(self) -> list[Message]:
        return list(self._turns)

    def set_context(self, user_content: str, assistant_content: str) -> None:
        """Fill (or replace) the context slot."""
        self._context = (Message(USER, user_content), Message(ASSISTANT, assistant_content))

    def clear_context(self) -> None:
        self._context = None

    def append(self, role: str, content: str) -> Message:
        message = Message(role, content)
        self._turns.append(message)
        return message

    def clear(self) -> None:
        """Drop every turn and the context."""
        self._context = None
        self._turns.clear()

    def as_messages(self) -> list[dict[str, str]]:
        """Messages in send order: context pair first, then the turns."""
        messages = list(self._context) if self._context else []
        messages.extend(self._turns)
        return [m.to_dict() for m in messages]

    def __len__(self) -> int:
        return len(self._turns) + (2 if self._context else 0)
