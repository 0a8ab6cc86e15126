"""CLI gateway — terminal journal chat with rich formatting."""

from __future__ import annotations

import asyncio
import signal

from loguru import logger

from journal_chat.chat.session import JournalChatSession
from journal_chat.core.config import Config
from journal_chat.core.exceptions import ConfigurationError, JournalStoreError, LLMError
from journal_chat.gateway.base import BotGateway

HELP_TEXT = (
    "Load journal entries, then ask about them.\n\n"
    "Commands:\n"
    "  /context <range> — Load journals, e.g. '/context 1 jan 2023 to 31 jan 2023'\n"
    "  /clear, /c       — Clear chat and context\n"
    "  /stop            — Stop a streaming reply (Ctrl-C does the same in the terminal)\n"
    "  /model <name>    — Change model\n"
    "  /list            — List available models\n"
    "  /exit            — Quit\n"
    "  /help            — Show this help"
)

ERROR_REPLY = "Sorry, there was an error processing your request."


class CliGateway(BotGateway):
    """Terminal-based journal chat using rich for formatting.

    Runs an input loop, dispatches slash commands to the session and renders
    replies as markdown. Ctrl-C while a reply is streaming stops it. When a
    ``config`` loaded from a file is given, model changes are saved back to it.
    """

    def __init__(self, session: JournalChatSession, *, user_id: str = "cli_user", config: Config | None = None):
        self.session = session
        self.user_id = user_id
        self.config = config
        self._running = False
        self._interrupted = False

    async def start(self) -> None:
        """Start the interactive terminal chat loop."""
        from rich.console import Console
        from rich.markdown import Markdown
        from rich.panel import Panel

        console = Console()
        self._running = True

        console.print(
            Panel(
                "Type /context <date range> to load journals, then ask away. Commands: /help, /exit",
                title="Journal Chat",
            )
        )
        console.print()

        while self._running:
            try:
                user_input = console.input("[bold cyan]You:[/] ").strip()
            except (EOFError, KeyboardInterrupt):
                console.print("\nGoodbye!")
                break

            if not user_input:
                continue

            if user_input.lower() == "/exit":
                console.print("Goodbye!")
                break

            if user_input.startswith("/"):
                response = await self.handle_message(user_input, self.user_id)
                console.print(response, style="dim", markup=False)
                console.print()
                continue

            with console.status("[bold green]Thinking... (Ctrl-C to stop)"):
                response = await self.reply(user_input)

            console.print()
            console.print(Markdown(response))
            if self._interrupted:
                console.print("Streaming stopped.", style="dim")
            console.print()

    async def reply(self, message: str) -> str:
        """Answer a chat message, stopping the stream on SIGINT.

        Where the loop cannot take signal handlers (Windows, non-main
        threads) the reply simply runs to completion.
        """
        self._interrupted = False
        loop = asyncio.get_running_loop()
        previous = signal.getsignal(signal.SIGINT)
        try:
            loop.add_signal_handler(signal.SIGINT, self._interrupt)
        except (NotImplementedError, RuntimeError, ValueError):
            return await self.handle_message(message, self.user_id)

        try:
            return await self.handle_message(message, self.user_id)
        finally:
            loop.remove_signal_handler(signal.SIGINT)
            if previous is not None:
                signal.signal(signal.SIGINT, previous)

    def _interrupt(self) -> None:
        if self.session.stop():
            self._interrupted = True
            logger.debug("Reply interrupted from the terminal")

    async def handle_message(self, message: str, user_id: str) -> str:
        """Dispatch a command, or send a chat message and return the reply."""
        text = message.strip()
        command, _, argument = text.partition(" ")
        command = command.lower()

        if not text.startswith("/"):
            return await self._chat(text)
        if command in ("/clear", "/c"):
            return self._clear()
        if command == "/context":
            return await self._load_context(argument)
        if command == "/stop":
            return "Streaming stopped." if self.session.stop() else "Nothing is streaming."
        if command == "/model":
            return self._set_model(argument)
        if command == "/list":
            return self._list_models()
        if command == "/help":
            return HELP_TEXT
        return f"Unknown command: {command}. Type /help for the list of commands."

    async def _chat(self, message: str) -> str:
        try:
            return await self.session.ask(message)
        except LLMError as e:
            logger.error(f"Error fetching response: {e}")
            return ERROR_REPLY

    def _clear(self) -> str:
        if self.session.clear():
            return "Conversation and context cleared."
        return "Cannot clear while a reply is streaming."

    async def _load_context(self, argument: str) -> str:
        if self.session.is_streaming:
            return "Wait for the current reply to finish before loading journals."
        try:
            result = await self.session.load_context(argument)
        except JournalStoreError as e:
            logger.error(f"Could not load journals: {e}")
            return f"Could not read your journal folder: {e}"

        if result is None:
            return "No valid date range found."
        count = len(result.included)
        return (
            f"Successfully added {count} journal entr{'y' if count == 1 else 'ies'} "
            f"from {result.start_date} to {result.end_date} with {len(result.combined_text):,} characters"
            + (" (trimmed)" if result.truncated else "")
        )

    def _set_model(self, argument: str) -> str:
        try:
            model = self.session.set_model(argument)
        except ValueError:
            return "Invalid model name."

        if self.config is not None and self.config.file_loaded:
            try:
                self.config.save_value("llm.model", model)
            except (OSError, ConfigurationError) as e:
                logger.warning(f"Model changed but not saved: {e}")
        return f"Model changed to {model}."

    def _list_models(self) -> str:
        try:
            models = self.session.list_models()
        except LLMError as e:
            logger.error(str(e))
            return f"Could not list models: {e}"
        if not models:
            return "No models available."
        return "".join(f"\n - {name}" for name in models)

    async def stop(self) -> None:
        """Stop the chat loop."""
        self._running = False
