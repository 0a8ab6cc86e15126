"""Shared test fixtures for journal-chat."""

import os
import tempfile
from datetime import datetime

import pytest

from journal_chat.core.exceptions import DocumentReadError, FolderNotFoundError
from journal_chat.journal.models import DateCandidate, Document


class StaticDateParser:
    """DateParser returning fixed candidates regardless of input."""

    def __init__(self, candidates=None):
        self.candidates = list(candidates or [])
        self.calls = []

    def parse(self, text):
        self.calls.append(text)
        return list(self.candidates)


class MemoryStore:
    """In-memory DocumentStore keyed by folder, with optional failing reads."""

    def __init__(self, folders=None, failing=()):
        self.folders = folders or {}
        self.failing = set(failing)
        self.reads = []

    def list_children(self, path):
        if path not in self.folders:
            raise FolderNotFoundError(f"Folder not found in vault: {path}")
        return [Document(name=name, path=f"{path}/{name}") for name in self.folders[path]]

    async def read(self, document):
        self.reads.append(document.name)
        if document.name in self.failing:
            raise DocumentReadError(f"Cannot read {document.path}: boom")
        folder = document.path.rsplit("/", 1)[0]
        return self.folders[folder][document.name]


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def static_parser():
    """Factory for a DateParser that always returns the given (start, end) pairs."""

    def _make(*ranges):
        return StaticDateParser([DateCandidate(start=start, end=end) for start, end in ranges])

    return _make


@pytest.fixture
def memory_store():
    """Factory for an in-memory store: memory_store({"Journal": {"2023-01-01.md": "..."}})."""

    def _make(folders=None, failing=()):
        return MemoryStore(folders, failing)

    return _make


@pytest.fixture
def journal_vault(tmp_dir):
    """A vault directory with a Journal folder of dated notes."""
    journal = os.path.join(tmp_dir, "Journal")
    os.makedirs(os.path.join(journal, "attachments"))
    notes = {
        "2023-01-01.md": "New year, new notebook.",
        "2023-01-15 Sunday.md": "Long walk by the river.",
        "2023-02-15.md": "Snow day.",
        "bad-name.md": "Undated scribbles.",
        ".hidden.md": "Should never be listed.",
    }
    for name, content in notes.items():
        with open(os.path.join(journal, name), "w", encoding="utf-8") as f:
            f.write(content)
    return tmp_dir


@pytest.fixture
def fixed_now():
    return datetime(2024, 6, 15, 10, 30)


@pytest.fixture
def memory_store_cls():
    """The in-memory store class, for tests that subclass it."""
    return MemoryStore


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "vault": {"path": tmp_dir},
        "journal": {"path": "Daily Notes"},
        "llm": {"model": "ollama/mistral"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path
