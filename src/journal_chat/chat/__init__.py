"""Chat layer: conversation history with a journal context slot, and the session that drives it."""

from .history import ChatHistory, Message
from .session import JournalChatSession

__all__ = ["ChatHistory", "JournalChatSession", "Message"]
