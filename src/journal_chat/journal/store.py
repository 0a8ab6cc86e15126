"""DocumentStore protocol and the local vault implementation.

The aggregator only needs two operations from a store: list the documents
directly inside a folder, and read one document's text. Anything that can
do that (an Obsidian vault on disk, a Notion export, an in-memory fixture)
plugs in.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

import aiofiles
from loguru import logger

from journal_chat.core.exceptions import DocumentReadError, FolderNotFoundError, JournalStoreError
from journal_chat.core.types import PathLike

from .models import Document


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for read-only access to a folder tree of text documents."""

    def list_children(self, path: str) -> list[Document]:
        """Return the documents directly inside ``path``.

        Raises:
            FolderNotFoundError: If ``path`` does not name an existing folder.
            JournalStoreError: If the folder exists but cannot be listed.
        """
        ...

    async def read(self, document: Document) -> str:
        """Return the full text of ``document``.

        Raises:
            DocumentReadError: If the content cannot be read.
        """
        ...


class VaultStore:
    """A folder of markdown notes on the local filesystem.

    Folder and document paths are relative to ``base_path`` and use ``/``
    separators. Subfolders and hidden files are not listed.

    Example::

        store = VaultStore("~/Documents/Vault")
        docs = store.list_children("Journal")
        text = await store.read(docs[0])
    """

    def __init__(self, base_path: PathLike):
        self.base_path = Path(base_path).expanduser().resolve()

    def _get_full_path(self, relative: str) -> Path:
        """Resolve a store-relative path, rejecting anything outside the vault."""
        raw = relative.strip()
        if "\x00" in raw:
            raise JournalStoreError("Path cannot contain null bytes.")
        if not raw or raw in (".", "/"):
            return self.base_path

        rel_path = Path(raw)
        if rel_path.is_absolute() or raw.startswith("~"):
            raise JournalStoreError(f"Unsafe path '{relative}': absolute paths are not allowed.")

        full_path = (self.base_path / rel_path).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise JournalStoreError(f"Unsafe path '{relative}': path traversal is not allowed.") from e
        return full_path

    def list_children(self, path: str) -> list[Document]:
        folder = self._get_full_path(path)
        if not folder.is_dir():
            raise FolderNotFoundError(f"Folder not found in vault: {path}")

        try:
            with os.scandir(folder) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise JournalStoreError(f"Cannot list {path}: {e}") from e

        prefix = PurePosixPath(path.strip().strip("/")) if path.strip() not in ("", ".", "/") else None
        documents = []
        for entry in entries:
            if entry.name.startswith(".") or not entry.is_file():
                continue
            rel = str(prefix / entry.name) if prefix else entry.name
            documents.append(Document(name=entry.name, path=rel))

        logger.debug(f"Listed {len(documents)} document(s) in {path!r}")
        return documents

    async def read(self, document: Document) -> str:
        full_path = self._get_full_path(document.path)
        try:
            async with aiofiles.open(full_path, encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(f"Cannot read {document.path}: {e}") from e
