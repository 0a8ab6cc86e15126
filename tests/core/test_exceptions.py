"""Tests for journal_chat.core.exceptions."""

from journal_chat.core.exceptions import (
    ConfigurationError,
    DocumentReadError,
    FolderNotFoundError,
    JournalChatError,
    JournalStoreError,
    LLMError,
)


def test_hierarchy():
    """All exceptions should inherit from JournalChatError."""
    for exc_cls in [ConfigurationError, JournalStoreError, FolderNotFoundError, DocumentReadError, LLMError]:
        assert issubclass(exc_cls, JournalChatError)


def test_store_errors():
    assert issubclass(FolderNotFoundError, JournalStoreError)
    assert issubclass(DocumentReadError, JournalStoreError)
    assert not issubclass(LLMError, JournalStoreError)


def test_exception_message():
    err = FolderNotFoundError("Folder not found in vault: Journal")
    assert "Journal" in str(err)


def test_catch_base():
    """Catching JournalChatError should catch all subtypes."""
    try:
        raise DocumentReadError("permission denied")
    except JournalChatError as e:
        assert "permission denied" in str(e)
