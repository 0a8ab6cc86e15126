"""Journal chat session — ties the journal context, history and LLM together.

A front-end (terminal, bot, editor plugin) forwards commands to the
session and renders what comes back; the session owns no UI.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from loguru import logger

from journal_chat.core.exceptions import JournalChatError
from journal_chat.journal.config import JournalConfig
from journal_chat.journal.context import get_journal_context
from journal_chat.journal.dates import DateRangeResolver
from journal_chat.journal.models import AggregationResult
from journal_chat.journal.store import DocumentStore

from .history import ASSISTANT, USER, ChatHistory
from .prompts import JOURNAL_CONTEXT_ACK, build_context_prompt


class ChatClient(Protocol):
    """The part of ``LLMClient`` the session relies on."""

    model: str

    async def astream(
        self,
        messages: list[dict[str, Any]],
        *,
        on_chunk: Callable[[str], None] | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> str: ...

    def set_model(self, model: str) -> None: ...

    def list_models(self) -> list[str]: ...


class JournalChatSession:
    """One conversation about a user's journal.

    Args:
        store: Where journal notes are read from.
        journal_config: Journal folder and size cap.
        client: Streaming chat client.
        resolver: Date range resolver override.
    """

    def __init__(
        self,
        store: DocumentStore,
        journal_config: JournalConfig,
        client: ChatClient,
        *,
        resolver: DateRangeResolver | None = None,
    ):
        self.store = store
        self.journal_config = journal_config
        self.client = client
        self.resolver = resolver
        self.history = ChatHistory()
        self.is_streaming = False
        self._stop_requested = False

    @property
    def model(self) -> str:
        return self.client.model

    async def load_context(self, text: str) -> AggregationResult | None:
        """Load journal entries for the range in ``text`` into the context slot.

        Returns None (and leaves any existing context alone) when ``text``
        names no date.
        """
        result = await get_journal_context(self.store, self.journal_config, text, resolver=self.resolver)
        if result is None:
            return None

        self.history.set_context(build_context_prompt(result.combined_text), JOURNAL_CONTEXT_ACK)
        return result

    async def ask(self, message: str, on_chunk: Callable[[str], None] | None = None) -> str:
        """Send a user message and stream the reply.

        The reply is recorded in the history only if it was not stopped.

        Raises:
            JournalChatError: If a reply is already streaming.
            LLMError: If the model call fails.
        """
        if self.is_streaming:
            raise JournalChatError("A reply is already streaming")

        self.history.append(USER, message)
        self.is_streaming = True
        self._stop_requested = False
        try:
            reply = await self.client.astream(
                self.history.as_messages(),
                on_chunk=on_chunk,
                should_stop=lambda: self._stop_requested,
            )
        finally:
            self.is_streaming = False

        if self._stop_requested:
            logger.info("Reply stopped before completion; not added to history")
            return reply

        self.history.append(ASSISTANT, reply)
        return reply

    def stop(self) -> bool:
        """Ask a streaming reply to stop. Returns False if nothing was streaming."""
        if not self.is_streaming:
            return False
        self._stop_requested = True
        return True

    def clear(self) -> bool:
        """Clear history and context. Refused (returns False) while streaming."""
        if self.is_streaming:
            return False
        self.history.clear()
        return True

    def set_model(self, text: str) -> str:
        """Switch model using the first word of ``text``.

        Raises:
            ValueError: If ``text`` holds no model name.
        """
        words = text.split()
        if not words:
            raise ValueError("Invalid model name.")
        self.client.set_model(words[0])
        return self.client.model

    def list_models(self) -> list[str]:
        return self.client.list_models()
