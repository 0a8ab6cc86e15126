"""Core data models for journal context extraction.

Plain dataclasses shared by the date resolver, the document store and the
aggregator. Nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

DAY_START = time.min
# Millisecond precision end-of-day boundary
DAY_END = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class DateInterval:
    """An inclusive range of calendar timestamps.

    Built through ``for_days()`` the start sits at 00:00:00.000 of its day
    and the end at 23:59:59.999 of its day.

    Attributes:
        start: First eligible instant.
        end: Last eligible instant.
    """

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Interval start {self.start} is after end {self.end}")

    @classmethod
    def for_days(cls, first: date, last: date) -> DateInterval:
        """Build the interval covering whole days ``first`` through ``last``."""
        return cls(
            start=datetime.combine(first, DAY_START),
            end=datetime.combine(last, DAY_END),
        )

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    def contains(self, day: date) -> bool:
        """Whether a calendar day (taken at midnight) falls inside the interval."""
        return self.start <= datetime.combine(day, DAY_START) <= self.end

    def __str__(self) -> str:
        return f"{self.start_date.isoformat()}..{self.end_date.isoformat()}"


@dataclass(frozen=True)
class DateCandidate:
    """One date or date range detected in free text.

    Attributes:
        start: Start point of the mention.
        end: End point when the text named an explicit range, else None.
        text: The substring the parser matched, for diagnostics.
    """

    start: datetime
    end: datetime | None = None
    text: str = ""


@dataclass(frozen=True)
class Document:
    """A read-only handle to a document owned by a store.

    Attributes:
        name: File name including extension (``2024-03-01.md``).
        path: Store-relative path used to read the content.
    """

    name: str
    path: str

    def __repr__(self) -> str:
        return f"Document(name='{self.name}')"


@dataclass(frozen=True)
class CandidateDocument:
    """A document paired with the date derived from its name."""

    document: Document
    document_date: date


@dataclass(frozen=True)
class AggregationResult:
    """Combined journal text for a resolved interval.

    Attributes:
        combined_text: Concatenated entries with provenance headers, capped.
        start_date: Interval start formatted for display.
        end_date: Interval end formatted for display.
        interval: The interval the text was gathered for.
        included: Names of documents whose content made it into the text,
            in enumeration order.
        truncated: True when the combined text hit the size cap.
    """

    combined_text: str
    start_date: str
    end_date: str
    interval: DateInterval
    included: tuple[str, ...] = ()
    truncated: bool = False

    def __repr__(self) -> str:
        return (
            f"AggregationResult({self.start_date} - {self.end_date}, "
            f"documents={len(self.included)}, chars={len(self.combined_text)})"
        )
