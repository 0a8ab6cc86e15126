"""Combine dated journal entries into one bounded block of text.

Documents are filtered by the date their file name encodes, read
concurrently, and concatenated with a provenance header per entry::

    ---
    My Journal Entry from Jan 5, 2023
    <raw content>

Reads are gathered into slots matching the listing order, so the combined
text is deterministic even though the reads finish in any order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from loguru import logger

from .config import MAX_CHARS
from .dates import DateExtractor, filename_date, format_display_date, format_entry_date
from .models import AggregationResult, CandidateDocument, DateInterval, Document
from .store import DocumentStore

ENTRY_SEPARATOR = "---"
ENTRY_HEADER = "My Journal Entry from {date}"


def format_entry(entry_date_text: str, content: str) -> str:
    """Render one journal entry block, trailing newline included."""
    return f"{ENTRY_SEPARATOR}\n{ENTRY_HEADER.format(date=entry_date_text)}\n{content}\n"


class DocumentAggregator:
    """Filters, reads and concatenates documents for a date interval.

    Args:
        store: Where document content is read from.
        date_extractor: Maps a document name to its date. The default reads a
            ``YYYY-MM-DD`` prefix; swap it for other naming schemes.
        max_chars: Hard cap on the combined text length.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        date_extractor: DateExtractor = filename_date,
        max_chars: int = MAX_CHARS,
    ):
        self.store = store
        self.date_extractor = date_extractor
        self.max_chars = max_chars

    def select(self, documents: Sequence[Document], interval: DateInterval) -> list[CandidateDocument]:
        """Keep the documents whose derived date falls inside ``interval``."""
        selected = []
        for document in documents:
            candidate = CandidateDocument(document=document, document_date=self.date_extractor(document.name))
            if interval.contains(candidate.document_date):
                selected.append(candidate)
        return selected

    async def _read_all(self, candidates: list[CandidateDocument]) -> list[str | None]:
        """Read every candidate concurrently; failed reads come back as None.

        Raises:
            asyncio.CancelledError: If any read was cancelled.
        """
        results = await asyncio.gather(
            *(self.store.read(c.document) for c in candidates),
            return_exceptions=True,
        )

        contents: list[str | None] = []
        for candidate, result in zip(candidates, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.warning(f"Error with {candidate.document.name}, {result}")
                contents.append(None)
            else:
                contents.append(result)
        return contents

    async def aggregate(self, documents: Sequence[Document], interval: DateInterval) -> AggregationResult:
        """Build the combined text for ``interval`` from ``documents``.

        A document that fails to read is logged and left out; it never
        aborts the aggregation.
        """
        candidates = self.select(documents, interval)
        logger.debug(f"{len(candidates)} of {len(documents)} document(s) fall within {interval}")

        contents = await self._read_all(candidates)

        blocks: list[str] = []
        included: list[str] = []
        for candidate, content in zip(candidates, contents):
            if content is None:
                continue
            blocks.append(format_entry(format_entry_date(candidate.document_date), content))
            included.append(candidate.document.name)

        combined_text = "".join(blocks)
        logger.debug(f"Combined length: {len(combined_text)} characters")

        truncated = len(combined_text) > self.max_chars
        if truncated:
            combined_text = combined_text[: self.max_chars]
            logger.info(f"Text too long, trimmed to {self.max_chars:,} characters")

        return AggregationResult(
            combined_text=combined_text,
            start_date=format_display_date(interval.start_date),
            end_date=format_display_date(interval.end_date),
            interval=interval,
            included=tuple(included),
            truncated=truncated,
        )
