"""Journal context extraction — the entry point chat front-ends call.

``get_journal_context`` resolves a free-text date range, gathers the
matching journal entries and returns them as one bounded text blob, or
None when the text names no date.
"""

from __future__ import annotations

from loguru import logger

from journal_chat.core.exceptions import FolderNotFoundError

from .aggregator import DocumentAggregator
from .config import JournalConfig
from .dates import DateRangeResolver
from .models import AggregationResult, Document
from .store import DocumentStore


async def get_journal_context(
    store: DocumentStore,
    config: JournalConfig,
    text: str,
    *,
    resolver: DateRangeResolver | None = None,
    aggregator: DocumentAggregator | None = None,
) -> AggregationResult | None:
    """Collect journal entries for the date range named in ``text``.

    Args:
        store: Document store holding the journal folder.
        config: Which folder to read and the size cap to apply.
        text: Free-form range such as ``"1 jan 2023 to 31 jan 2023"``.
        resolver: Date resolver override (defaults to the dateparser backend).
        aggregator: Aggregator override (defaults to filename-date filtering).

    Returns:
        The aggregation, or None when no date could be found in ``text``.
        A missing journal folder yields an empty combined text rather than
        an error.

    Raises:
        JournalStoreError: If the journal folder exists but cannot be listed.
    """
    resolver = resolver or DateRangeResolver()
    aggregator = aggregator or DocumentAggregator(store, max_chars=config.max_chars)

    interval = resolver.resolve(text)
    if interval is None:
        return None

    try:
        documents: list[Document] = store.list_children(config.journal_path)
    except FolderNotFoundError as e:
        logger.warning(f"{e}; continuing with no journal entries")
        documents = []

    result = await aggregator.aggregate(documents, interval)
    logger.info(
        f"Loaded {len(result.included)} journal entr{'y' if len(result.included) == 1 else 'ies'} "
        f"from {result.start_date} to {result.end_date} ({len(result.combined_text):,} characters)"
    )
    return result
