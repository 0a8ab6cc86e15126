"""Base gateway — abstract interface for chat front-ends.

A gateway owns the user-facing loop (terminal, messaging platform, editor
panel) and hands each line of input to a journal chat session.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BotGateway(ABC):
    """Abstract base for chat front-ends.

    Usage::

        class TerminalGateway(BotGateway):
            async def start(self):
                while True:
                    print(await self.handle_message(input("> "), "me"))

            async def handle_message(self, message, user_id):
                return await self.session.ask(message)
    """

    @abstractmethod
    async def start(self) -> None:
        """Start the gateway (begin reading input)."""

    @abstractmethod
    async def handle_message(self, message: str, user_id: str) -> str:
        """Handle one line of user input and return the text to show.

        Args:
            message: User input, either a ``/command`` or a chat message.
            user_id: Front-end specific user identifier.
        """

    async def stop(self) -> None:  # noqa: B027
        """Stop the gateway. Optional override."""
