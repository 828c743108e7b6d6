"""Local wall-clock date helpers shared by the picker modules."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

# Instants carry millisecond precision, so "end of day" is 23:59:59.999.
END_OF_DAY = time(23, 59, 59, 999000)

MONTH_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "pt": ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"),
    "es": ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"),
}


def start_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, END_OF_DAY)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_valid_triple(day: int, month: int, year: int) -> bool:
    if not 1 <= month <= 12:
        return False
    if not 1 <= year <= 9999:
        return False
    return 1 <= day <= days_in_month(year, month)


def build_local_date(year: int, month: int, day: int) -> datetime:
    """Calendar construction with day overflow.

    ``day`` may fall outside the month, in which case the result rolls into the
    neighbouring month the way calendar arithmetic does: day 0 is the last day
    of the previous month and Feb 29 of a non-leap year is Mar 1.
    """
    return datetime(year, month, 1) + timedelta(days=day - 1)


def parse_local_date(raw: str | datetime | date) -> datetime:
    """Parse ``YYYY-MM-DD`` as local midnight; datetimes pass through unchanged."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    parts = raw.strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"Unable to parse date: {raw!r}")
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"Unable to parse date: {raw!r}") from exc
    if not is_valid_triple(day, month, year):
        raise ValueError(f"Not a calendar date: {raw!r}")
    return datetime(year, month, day)


def js_weekday(value: datetime | date) -> int:
    """Day of week with Sunday as 0."""
    return (value.weekday() + 1) % 7


def format_date(value: datetime | date, locale: str = "en-US", *, day_first: bool = False) -> str:
    language = locale.split("-")[0].lower()
    months = MONTH_ABBREVIATIONS.get(language, MONTH_ABBREVIATIONS["en"])
    month = months[value.month - 1]
    if day_first:
        return f"{value.day} {month} {value.year}"
    return f"{month} {value.day}, {value.year}"
