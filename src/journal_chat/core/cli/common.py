"""Shared setup logic for CLI commands."""

from __future__ import annotations

from pathlib import Path

JOURNAL_CHAT_DIR = Path.home() / ".journal-chat"
CONFIG_PATH = JOURNAL_CHAT_DIR / "config.yaml"


def load_config(config_file: str | None = None, vault: str | None = None, journal: str | None = None):
    """Load config from ``config_file`` (default ~/.journal-chat/config.yaml).

    Command-line ``vault``/``journal`` values override the file and env.
    """
    from journal_chat.core.config import Config
    from journal_chat.core.utils.logging import setup_logging_from_config

    config = Config(config_file=config_file or str(CONFIG_PATH), data_dir=str(JOURNAL_CHAT_DIR))
    if vault:
        config.set("vault.path", vault)
    if journal:
        config.set("journal.path", journal)

    setup_logging_from_config(config)
    return config


def create_store(config):
    """Open the vault named by ``vault.path``."""
    from journal_chat.journal.store import VaultStore

    return VaultStore(config.get_vault_path())


def create_session(config):
    """Create a JournalChatSession wired to the vault and the configured model."""
    from journal_chat.chat.session import JournalChatSession
    from journal_chat.core.llm.client import LLMClient
    from journal_chat.journal.config import JournalConfig

    client = LLMClient(
        model=config.get("llm.model"),
        api_base=config.get("llm.api_base"),
        temperature=float(config.get("llm.temperature", 0.7)),
    )
    return JournalChatSession(create_store(config), JournalConfig.from_config(config), client)
