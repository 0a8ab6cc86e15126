"""Configuration dataclass for journal context extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from journal_chat.core.config import Config

MAX_CHARS = 128_000


@dataclass
class JournalConfig:
    """Settings for locating and combining journal entries.

    Attributes:
        journal_path: Folder (relative to the vault root) holding ``YYYY-MM-DD`` notes.
        max_chars: Hard cap on the combined text handed to the model.
    """

    journal_path: str = "Journal"
    max_chars: int = MAX_CHARS

    @classmethod
    def from_config(cls, config: Config) -> JournalConfig:
        """Build from the ``journal`` section of the app Config."""
        return cls(journal_path=str(config.get("journal.path", "Journal") or ""))
