"""Journal context extraction.

Resolves free-text date ranges, selects dated notes from a DocumentStore by
their ``YYYY-MM-DD`` file names, and combines them into one bounded text
blob for an LLM conversation.
"""

from .aggregator import DocumentAggregator
from .config import MAX_CHARS, JournalConfig
from .context import get_journal_context
from .dates import (
    SENTINEL_DATE,
    DateparserBackend,
    DateParser,
    DateRangeResolver,
    filename_date,
    format_display_date,
    format_entry_date,
)
from .models import AggregationResult, CandidateDocument, DateCandidate, DateInterval, Document
from .store import DocumentStore, VaultStore

__all__ = [
    "MAX_CHARS",
    "SENTINEL_DATE",
    "AggregationResult",
    "CandidateDocument",
    "DateCandidate",
    "DateInterval",
    "DateParser",
    "DateRangeResolver",
    "DateparserBackend",
    "Document",
    "DocumentAggregator",
    "DocumentStore",
    "JournalConfig",
    "VaultStore",
    "filename_date",
    "format_display_date",
    "format_entry_date",
    "get_journal_context",
]
