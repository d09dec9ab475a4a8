"""Text, date and time canonicalization.

Every function here is pure and idempotent: feeding an output back in returns
it unchanged. Fallback values are compacted text that no parser accepts, which
is what keeps the date and time normalizers stable on a second pass.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime

_QUOTES = str.maketrans({"‘": "'", "’": "'", "“": '"', "”": '"'})
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_ARTICLES = re.compile(r"\b(?:the|a|an)\b")
_SPACES = re.compile(r"\s+")

_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")
_MONTH_DAY = re.compile(r"^(\d{1,2})[/-](\d{1,2})(?:[/-](\d{2,4}))?$")
_CLOCK_TIME = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$")

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%A, %B %d, %Y",
    "%a, %B %d, %Y",
    "%a, %b %d, %Y",
    "%A %B %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)
# Written forms without a year; the default year is appended before parsing.
_YEARLESS_FORMATS = (
    "%B %d %Y",
    "%b %d %Y",
    "%A, %B %d %Y",
    "%a, %b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def normalize_text(value: str | None) -> str:
    """Lowercase ASCII words separated by single spaces."""

    if not value:
        return ""
    text = unicodedata.normalize("NFKD", value.lower().translate(_QUOTES))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _NON_ALNUM.sub(" ", text).strip()


def normalize_title(value: str | None) -> str:
    text = _ARTICLES.sub(" ", normalize_text(value))
    return _SPACES.sub(" ", text).strip()


def compact(value: str | None) -> str:
    return normalize_text(value).replace(" ", "")


def parse_calendar_date(value: str | None, *, default_year: int | None = None) -> date | None:
    """Parse a calendar date from ISO or common written forms.

    ``M/D[/YY[YY]]`` and ``M-D[-YY[YY]]`` are read month first; a missing year
    falls back to ``default_year`` (the current year when omitted) and two-digit
    years land in the 2000s.
    """

    if not value:
        return None
    raw = _SPACES.sub(" ", value.strip())
    if not raw:
        return None
    year = default_year if default_year is not None else date.today().year

    if _ISO_DATETIME.match(raw):
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue

    match = _MONTH_DAY.match(raw)
    if match is not None:
        month, day, year_text = match.groups()
        resolved_year = int(year_text) if year_text else year
        if resolved_year < 100:
            resolved_year += 2000
        try:
            return date(resolved_year, int(month), int(day))
        except ValueError:
            return None

    for fmt in _YEARLESS_FORMATS:
        try:
            return datetime.strptime(f"{raw.rstrip(',')} {year}", fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def normalize_date(value: str | None, *, default_year: int | None = None) -> str:
    """Return ``YYYY-MM-DD`` when the value parses, else its compacted text."""

    if not value:
        return ""
    parsed = parse_calendar_date(value, default_year=default_year)
    if parsed is None:
        fallback = compact(value)
        parsed = parse_calendar_date(fallback, default_year=default_year)
        if parsed is None:
            return fallback
    return parsed.isoformat()


def normalize_time(value: str | None) -> str:
    """Return 24-hour ``HH:MM`` when the value reads as a clock time, else compacted text."""

    if not value:
        return ""
    raw = value.lower().strip().replace(".", "")
    parsed = _parse_clock(raw)
    if parsed is not None:
        return parsed
    fallback = compact(raw)
    return _parse_clock(fallback) or fallback


def _parse_clock(raw: str) -> str | None:
    match = _CLOCK_TIME.match(raw)
    if match is None:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or "0")
    meridiem = match.group(3)
    if minute > 59 or hour > 23 or (meridiem is not None and not 1 <= hour <= 12):
        return None
    if meridiem == "pm" and hour < 12:
        hour += 12
    if meridiem == "am" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minute:02d}"


__all__ = [
    "compact",
    "normalize_date",
    "normalize_text",
    "normalize_time",
    "normalize_title",
    "parse_calendar_date",
]
