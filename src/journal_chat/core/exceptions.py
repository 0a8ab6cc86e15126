"""
Journal Chat exception hierarchy.

All exceptions inherit from JournalChatError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class JournalChatError(Exception):
    """Base exception class for all journal-chat errors."""


class ConfigurationError(JournalChatError):
    """Raised for configuration errors (missing keys, invalid values)."""


class JournalStoreError(JournalChatError):
    """Raised when the document store cannot be listed or accessed."""


class FolderNotFoundError(JournalStoreError):
    """Raised when a configured folder does not exist in the store."""


class DocumentReadError(JournalStoreError):
    """Raised when a single document's content cannot be read."""


class LLMError(JournalChatError):
    """Raised for LLM API errors."""
