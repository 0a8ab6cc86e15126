"""Date handling for journal context: free-text range resolution and
filename date extraction.

``DateRangeResolver`` turns text like ``"1 jan 2023 to 31 jan 2023"`` or
``"2 months ago to today"`` into a whole-day ``DateInterval``. The natural
language parsing itself is delegated to a ``DateParser``; the default
backend uses the ``dateparser`` library.

Policy: only the first date mention in the text is used. Input such as
``"march and june"`` resolves to March alone.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from .models import DateCandidate, DateInterval

SENTINEL_DATE = date(1900, 1, 1)
FILENAME_DATE_FORMAT = "%Y-%m-%d"
FILENAME_DATE_LENGTH = 10

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Separator between the two ends of a range. A bare dash only counts when a
# letter sits on one side of it, so ISO dates are not split.
_SEPARATOR = (
    r"(?:\s+(?:to|until|till|through|thru)\s+|\s+[-–—]\s+"
    r"|(?<=[a-z0-9])[-–—](?=[a-z])|(?<=[a-z])[-–—](?=[0-9]))"
)
_TAIL = r"[\s?.!]*$"
_BETWEEN_PATTERN = re.compile(rf"\bbetween\s+(?P<start>.+?)\s+and\s+(?P<end>.+?){_TAIL}", re.IGNORECASE)
_FROM_RANGE_PATTERN = re.compile(rf"\bfrom\s+(?P<start>.+?){_SEPARATOR}(?P<end>.+?){_TAIL}", re.IGNORECASE)
_RANGE_PATTERN = re.compile(rf"^\s*(?P<start>.+?){_SEPARATOR}(?P<end>.+?){_TAIL}", re.IGNORECASE)
_CONNECTOR_PATTERN = re.compile(r"\s*(?:to|until|till|through|thru|[-–—])\s*", re.IGNORECASE)

# A lone letter or number ("a", "5", "2023") is not a date.
_BARE_TOKEN_PATTERN = re.compile(r"\W*(?:[^\W\d]|\d{1,4})\W*")

_CALENDAR_TOKEN = re.compile(r"\d+(?:st|nd|rd|th)?|[a-z]+")
_MONTH_PATTERN = re.compile(
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_FILLER_WORDS = frozenset({"of", "the"})

# (day, month, year); any part may be missing
CalendarParts = tuple[int | None, int | None, int | None]

DateExtractor = Callable[[str], date]


# ---------------------------------------------------------------------------
# Filename dates and display formats
# ---------------------------------------------------------------------------


def filename_date(name: str) -> date:
    """Date encoded in the first 10 characters of a file name (``YYYY-MM-DD``).

    Names that do not start with a valid date get ``SENTINEL_DATE`` so they
    fall outside any realistic interval instead of raising.
    """
    try:
        return datetime.strptime(name[:FILENAME_DATE_LENGTH], FILENAME_DATE_FORMAT).date()
    except ValueError:
        return SENTINEL_DATE


def format_display_date(value: date) -> str:
    """Short numeric US format, e.g. ``1/5/2023``."""
    return f"{value.month}/{value.day}/{value.year}"


def format_entry_date(value: date) -> str:
    """Header format for journal entries, e.g. ``Jan 5, 2023``."""
    return f"{_MONTH_ABBR[value.month - 1]} {value.day}, {value.year}"


# ---------------------------------------------------------------------------
# Shared context between the two ends of a range
# ---------------------------------------------------------------------------


def calendar_parts(text: str) -> CalendarParts | None:
    """Split a plain calendar phrase into ``(day, month, year)``.

    Only phrases made of a day number, a month name and a four digit year
    (in any order, with "of"/"the" allowed) qualify: ``"15th of march 2023"``,
    ``"jan 5"``, ``"31 2023"``. Anything else returns None.
    """
    day = month = year = None
    tokens = _CALENDAR_TOKEN.findall(text.lower())
    if not tokens or _CALENDAR_TOKEN.sub("", text.lower()).strip(" ,") != "":
        return None

    for token in tokens:
        if token in _FILLER_WORDS:
            continue
        if _MONTH_PATTERN.fullmatch(token):
            if month is not None:
                return None
            month = _MONTH_ABBR.index(token[:3].capitalize()) + 1
            continue
        digits = token.rstrip("stndrh")
        if not digits.isdigit():
            return None
        if len(digits) == 4 and year is None:
            year = int(digits)
        elif len(digits) <= 2 and day is None and 1 <= int(digits) <= 31:
            day = int(digits)
        else:
            return None
    return day, month, year


def share_context(start: CalendarParts, end: CalendarParts) -> tuple[CalendarParts, CalendarParts]:
    """Fill the month and year one end of a range leaves out from the other.

    ``"5 to 10 jan 2023"`` becomes 5 Jan 2023 to 10 Jan 2023, and
    ``"dec 20 to jan 5 2023"`` starts in December 2022. Without a month on
    either side nothing is shared.
    """
    s_day, s_month, s_year = start
    e_day, e_month, e_year = end
    if s_month is None and e_month is None:
        return start, end

    s_month = s_month or e_month
    e_month = e_month or s_month
    if s_year is None and e_year is not None:
        s_year = e_year - 1 if (s_month, s_day or 1) > (e_month, e_day or 1) else e_year
    elif e_year is None and s_year is not None:
        e_year = s_year + 1 if (e_month, e_day or 1) < (s_month, s_day or 1) else s_year
    return (s_day, s_month, s_year), (e_day, e_month, e_year)


def _format_parts(parts: CalendarParts) -> str:
    day, month, year = parts
    pieces = [str(day) if day else "", _MONTH_ABBR[month - 1] if month else "", str(year) if year else ""]
    return " ".join(p for p in pieces if p)


# ---------------------------------------------------------------------------
# Natural-language parsing
# ---------------------------------------------------------------------------


@runtime_checkable
class DateParser(Protocol):
    """Detects dates and date ranges in free text."""

    def parse(self, text: str) -> list[DateCandidate]:
        """Return every date mention found, ordered by position in ``text``."""
        ...


class DateparserBackend:
    """``DateParser`` built on the ``dateparser`` library (English only).

    Explicit ranges (``X to Y``, ``X - Y``, ``from X until Y``,
    ``between X and Y``) produce a single candidate with an end. The end is
    read first, and a month or year written only once is shared by both
    ends, so ``"5 to 10 jan 2023"`` stays inside January 2023. Anything
    else is searched for individual mentions, and two adjacent mentions
    joined by a range word are paired up.

    Args:
        relative_base: Reference "now" for relative expressions such as
            ``"2 months ago"``. Defaults to the current time at parse time.
        languages: Languages passed through to dateparser.
    """

    def __init__(self, relative_base: datetime | None = None, languages: list[str] | None = None):
        self.relative_base = relative_base
        self.languages = languages or ["en"]

    def _settings(self, relative_base: datetime | None = None) -> dict[str, Any]:
        return {
            "PREFER_DATES_FROM": "past",
            "PREFER_DAY_OF_MONTH": "first",
            "RETURN_AS_TIMEZONE_AWARE": False,
            "RELATIVE_BASE": relative_base or self.relative_base or datetime.now(),
        }

    def _parse_one(self, text: str, relative_base: datetime | None = None) -> datetime | None:
        import dateparser

        return dateparser.parse(text, languages=self.languages, settings=self._settings(relative_base))

    def _parse_side(
        self, text: str, parts: CalendarParts | None, relative_base: datetime | None = None
    ) -> datetime | None:
        if parts is not None:
            day, month, year = parts
            if day and month and year:
                try:
                    return datetime(year, month, day)
                except ValueError:
                    return None
            if month:
                text = _format_parts(parts)
        return self._parse_one(text, relative_base)

    def _parse_range(self, start_text: str, end_text: str) -> tuple[datetime, datetime] | None:
        start_parts = calendar_parts(start_text)
        end_parts = calendar_parts(end_text)
        if start_parts is not None and end_parts is not None:
            start_parts, end_parts = share_context(start_parts, end_parts)

        end = self._parse_side(end_text, end_parts)
        if end is None:
            return None
        start = self._parse_side(start_text, start_parts)
        if start is None:
            return None
        if start > end:
            # Read the start again as a date before the end
            rebased = self._parse_side(start_text, start_parts, relative_base=end)
            if rebased is not None:
                start = rebased
        return start, end

    def parse(self, text: str) -> list[DateCandidate]:
        text = text.strip()
        if not text or _BARE_TOKEN_PATTERN.fullmatch(text):
            return []

        for pattern in (_BETWEEN_PATTERN, _FROM_RANGE_PATTERN):
            match = pattern.search(text)
            if match:
                parsed = self._parse_range(match.group("start"), match.group("end"))
                if parsed:
                    return [DateCandidate(start=parsed[0], end=parsed[1], text=match.group(0))]

        match = _RANGE_PATTERN.match(text)
        if match:
            parsed = self._parse_range(match.group("start"), match.group("end"))
            if parsed:
                return [DateCandidate(start=parsed[0], end=parsed[1], text=text)]

        whole = self._parse_side(text, calendar_parts(text))
        if whole:
            return [DateCandidate(start=whole, text=text)]

        return self._search(text)

    def _search(self, text: str) -> list[DateCandidate]:
        from dateparser.search import search_dates

        found = search_dates(text, languages=self.languages, settings=self._settings()) or []

        # Locate each mention so adjacent ones can be paired into ranges
        spans: list[tuple[int, int, str, datetime]] = []
        cursor = 0
        for substring, value in found:
            index = text.find(substring, cursor)
            if index < 0:
                index = cursor
            spans.append((index, index + len(substring), substring, value))
            cursor = index + len(substring)

        candidates: list[DateCandidate] = []
        i = 0
        while i < len(spans):
            _, stop, substring, value = spans[i]
            if i + 1 < len(spans):
                next_start, _, next_substring, next_value = spans[i + 1]
                if _CONNECTOR_PATTERN.fullmatch(text[stop:next_start]):
                    candidates.append(
                        DateCandidate(start=value, end=next_value, text=f"{substring}..{next_substring}")
                    )
                    i += 2
                    continue
            candidates.append(DateCandidate(start=value, text=substring))
            i += 1
        return candidates


class DateRangeResolver:
    """Resolves free text into a whole-day ``DateInterval``.

    First match wins: additional mentions in the text are ignored. A
    mention without an explicit end covers a single day, and a range
    written backwards is swapped.
    """

    def __init__(self, parser: DateParser | None = None):
        self.parser = parser or DateparserBackend()

    def resolve(self, text: str) -> DateInterval | None:
        """Return the interval named by ``text``, or None if it names no date."""
        candidates = self.parser.parse(text)
        if not candidates:
            logger.info(f"No valid date found in {text!r}")
            return None

        first = candidates[0]
        if len(candidates) > 1:
            logger.debug(f"Ignoring {len(candidates) - 1} additional date mention(s) in {text!r}")

        start_day = first.start.date()
        end_day = first.end.date() if first.end is not None else start_day
        if end_day < start_day:
            logger.debug(f"Range {first.text!r} runs backwards, swapping ends")
            start_day, end_day = end_day, start_day

        interval = DateInterval.for_days(start_day, end_day)
        logger.debug(f"Resolved {text!r} to {interval}")
        return interval
