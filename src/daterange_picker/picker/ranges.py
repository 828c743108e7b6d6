"""Date range value types and the pure rules that relate them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from daterange_picker.utils.dates import build_local_date, end_of_day, parse_local_date, start_of_day

COMPARE_FROM_OFFSET = timedelta(days=365)


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime | None = None

    def truncated(self) -> DateRange:
        return DateRange(
            start=start_of_day(self.start),
            end=start_of_day(self.end) if self.end is not None else None,
        )

    def with_start(self, value: datetime) -> DateRange:
        # A start past the end drags the end along with it.
        end = value if self.end is None or value > self.end else self.end
        return DateRange(start=value, end=end)

    def with_end(self, value: datetime) -> DateRange:
        start = value if value < self.start else self.start
        return DateRange(start=start, end=value)


@dataclass(frozen=True)
class PickerUpdate:
    range: DateRange
    range_compare: DateRange | None = None


@dataclass(frozen=True)
class Bounds:
    min_date: datetime
    max_date: datetime

    def clamp(self, value: datetime) -> datetime:
        return clamp_date(value, self.min_date, self.max_date)

    def contains(self, value: datetime) -> bool:
        return self.min_date <= value <= self.max_date


def default_bounds(now: datetime) -> Bounds:
    return Bounds(min_date=datetime(now.year, 1, 1), max_date=end_of_day(now))


def resolve_bounds(
    now: datetime,
    min_date: str | datetime | None = None,
    max_date: str | datetime | None = None,
) -> Bounds:
    defaults = default_bounds(now)
    return Bounds(
        min_date=parse_local_date(min_date) if min_date is not None else defaults.min_date,
        max_date=parse_local_date(max_date) if max_date is not None else defaults.max_date,
    )


def ranges_equal(a: DateRange | None, b: DateRange | None) -> bool:
    """Compare two optional ranges.

    A missing ``end`` on either side matches any ``end`` on the other, so
    ``DateRange(x)`` equals ``DateRange(x, y)`` for every ``y``.
    """
    if a is None or b is None:
        return a is b
    if a.start != b.start:
        return False
    return a.end is None or b.end is None or a.end == b.end


def clamp_date(value: datetime, min_date: datetime, max_date: datetime) -> datetime:
    if value < min_date:
        return min_date
    if value > max_date:
        return max_date
    return value


def _previous_year(value: datetime) -> datetime:
    return build_local_date(value.year - 1, value.month, value.day)


def compare_range_for_preset(range_: DateRange) -> DateRange:
    """Same calendar days one year earlier, at midnight."""
    return DateRange(
        start=_previous_year(range_.start),
        end=_previous_year(range_.end) if range_.end is not None else None,
    )


def seed_compare_range(range_: DateRange) -> DateRange:
    """Initial compare range when comparison is switched on.

    The start moves back 365 days while the end moves back one calendar year,
    so the two offsets differ by a day across a leap day.
    """
    start = start_of_day(range_.start) - COMPARE_FROM_OFFSET
    end = _previous_year(range_.end if range_.end is not None else range_.start)
    return DateRange(start=start, end=end)
