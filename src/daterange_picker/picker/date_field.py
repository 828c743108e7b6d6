"""Three-segment (day, month, year) date entry field.

The field keeps a calendar-valid triple at all times. Typed values are checked
against the segment's numeric range, against the calendar (using the proposed
value with the other two current segments), and against the min/max bounds
before they are accepted; anything else is dropped without touching state.
Arrow keys roll a segment with calendar carry, and leaving the field commits
the value, clamping it into bounds.

State machine::

    IDLE --keystroke--> EDITING --blur--> COMMITTING --> IDLE
    IDLE --blur--> COMMITTING

External value updates are ignored while the field is EDITING.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable

from daterange_picker.config.locales import DEFAULT_LOCALE, uses_day_month_year
from daterange_picker.utils.dates import days_in_month, is_valid_triple

DIGITS_RE = re.compile(r"^[0-9]+$")

ALLOWED_KEYS = frozenset(
    {
        "ArrowUp",
        "ArrowDown",
        "ArrowLeft",
        "ArrowRight",
        "Delete",
        "Tab",
        "Backspace",
        "Enter",
    }
)


class FieldState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    COMMITTING = "committing"


_TRANSITIONS: dict[FieldState, frozenset[FieldState]] = {
    FieldState.IDLE: frozenset({FieldState.EDITING, FieldState.COMMITTING}),
    FieldState.EDITING: frozenset({FieldState.EDITING, FieldState.COMMITTING}),
    FieldState.COMMITTING: frozenset({FieldState.IDLE}),
}


class FieldStateError(RuntimeError):
    pass


class Segment(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


SEGMENT_LIMITS: dict[Segment, tuple[int, int]] = {
    Segment.DAY: (1, 31),
    Segment.MONTH: (1, 12),
    Segment.YEAR: (1000, 9999),
}

DAY_FIRST_ORDER = (Segment.DAY, Segment.MONTH, Segment.YEAR)
MONTH_FIRST_ORDER = (Segment.MONTH, Segment.DAY, Segment.YEAR)


class KeyOutcome(str, Enum):
    PASSTHROUGH = "passthrough"
    REJECTED = "rejected"
    ROLLED = "rolled"
    MOVED = "moved"


@dataclass(frozen=True)
class DateParts:
    day: int
    month: int
    year: int

    @classmethod
    def from_datetime(cls, value: datetime) -> DateParts:
        return cls(day=value.day, month=value.month, year=value.year)

    def get(self, segment: Segment) -> int:
        return getattr(self, segment.value)

    def with_segment(self, segment: Segment, value: int) -> DateParts:
        return replace(self, **{segment.value: value})

    def is_valid(self) -> bool:
        return is_valid_triple(self.day, self.month, self.year)

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day)


def _parse_segment_text(text: str) -> int | None:
    text = text.strip()
    if not DIGITS_RE.match(text):
        return None
    return int(text)


class SegmentedDateField:
    def __init__(
        self,
        value: datetime | None = None,
        on_change: Callable[[datetime], None] | None = None,
        *,
        locale: str = DEFAULT_LOCALE,
        min_date: datetime | None = None,
        max_date: datetime | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.locale = locale
        self.day_first = uses_day_month_year(locale)
        self.min_date = min_date
        self.max_date = max_date
        self.focused: Segment | None = None
        self._clock = clock
        self._on_change = on_change
        self._state = FieldState.IDLE
        self._parts = DateParts.from_datetime(value if value is not None else clock())

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def parts(self) -> DateParts:
        return self._parts

    @property
    def value(self) -> datetime:
        return self._parts.to_datetime()

    @property
    def segment_order(self) -> tuple[Segment, Segment, Segment]:
        return DAY_FIRST_ORDER if self.day_first else MONTH_FIRST_ORDER

    def text(self, segment: Segment) -> str:
        return str(self._parts.get(segment))

    def sync(self, value: datetime | None) -> bool:
        """Adopt an externally supplied value unless the user is mid-edit."""
        if self._state is FieldState.EDITING:
            return False
        self._parts = DateParts.from_datetime(value if value is not None else self._clock())
        return True

    def focus(self, segment: Segment) -> None:
        self.focused = segment

    def _transition(self, target: FieldState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise FieldStateError(f"Illegal field transition {self._state.value} -> {target.value}")
        self._state = target

    def _notify(self, value: datetime) -> None:
        if self._on_change is not None:
            self._on_change(value)

    def _validate(self, segment: Segment, value: int) -> bool:
        low, high = SEGMENT_LIMITS[segment]
        if not low <= value <= high:
            return False
        return self._parts.with_segment(segment, value).is_valid()

    def _within_bounds(self, value: datetime) -> bool:
        if self.min_date is not None and value < self.min_date:
            return False
        if self.max_date is not None and value > self.max_date:
            return False
        return True

    def _clamp(self, value: datetime) -> datetime:
        if self.min_date is not None and value < self.min_date:
            return self.min_date
        if self.max_date is not None and value > self.max_date:
            return self.max_date
        return value

    def change(self, segment: Segment, text: str) -> bool:
        """Handle the segment's new raw text after a keystroke.

        Returns True when the value was accepted and the change callback fired.
        """
        self._transition(FieldState.EDITING)
        self.focused = segment

        value = _parse_segment_text(text)
        if value is None or not self._validate(segment, value):
            return False

        proposed = self._parts.with_segment(segment, value)
        tentative = proposed.to_datetime()
        if not self._within_bounds(tentative):
            return False

        self._parts = proposed
        self._notify(tentative)
        return True

    def key_down(
        self,
        segment: Segment,
        key: str,
        *,
        caret: int | None = None,
        selection_end: int | None = None,
        meta: bool = False,
        ctrl: bool = False,
    ) -> KeyOutcome:
        """Handle a key press before it edits the segment text.

        ``caret``/``selection_end`` describe the text selection; when omitted
        the whole segment is treated as selected.
        """
        if meta or ctrl:
            return KeyOutcome.PASSTHROUGH
        if not (len(key) == 1 and key.isascii() and key.isdigit()) and key not in ALLOWED_KEYS:
            return KeyOutcome.REJECTED

        self._transition(FieldState.EDITING)
        self.focused = segment

        if key in {"ArrowUp", "ArrowDown"}:
            rolled = self._roll(segment, 1 if key == "ArrowUp" else -1)
            if rolled is None:
                return KeyOutcome.REJECTED
            self._parts = rolled
            self._notify(rolled.to_datetime())
            return KeyOutcome.ROLLED

        if key in {"ArrowLeft", "ArrowRight"}:
            length = len(self.text(segment))
            if caret is None:
                start, end = 0, length
            else:
                start = caret
                end = caret if selection_end is None else selection_end
            whole = start == 0 and end == length
            if key == "ArrowRight" and (start == length or whole):
                return self._move(segment, 1)
            if key == "ArrowLeft" and start == 0:
                return self._move(segment, -1)

        return KeyOutcome.PASSTHROUGH

    def _move(self, segment: Segment, step: int) -> KeyOutcome:
        order = self.segment_order
        index = order.index(segment) + step
        if not 0 <= index < len(order):
            return KeyOutcome.PASSTHROUGH
        self.focused = order[index]
        return KeyOutcome.MOVED

    def _roll(self, segment: Segment, step: int) -> DateParts | None:
        parts = self._parts
        day, month, year = parts.day, parts.month, parts.year
        low_year, high_year = SEGMENT_LIMITS[Segment.YEAR]

        if segment is Segment.DAY:
            if step > 0 and day >= days_in_month(year, month):
                day, month = 1, month % 12 + 1
                if month == 1:
                    year += 1
            elif step < 0 and day == 1:
                month -= 1
                if month == 0:
                    month, year = 12, year - 1
                day = days_in_month(year, month) if low_year <= year <= high_year else 1
            else:
                day += step
        elif segment is Segment.MONTH:
            if step > 0 and month == 12:
                month, year = 1, year + 1
            elif step < 0 and month == 1:
                month, year = 12, year - 1
            else:
                month += step
        else:
            year += step

        if not low_year <= year <= high_year:
            return None
        # Month and year rolls keep the day inside the new month.
        day = min(day, days_in_month(year, month))
        return DateParts(day=day, month=month, year=year)

    def blur(self, segment: Segment, text: str | None = None) -> datetime | None:
        """Commit the segment and return to IDLE.

        ``text`` is what the segment holds when focus leaves; it defaults to the
        current value. Empty or invalid text is discarded and the field keeps
        its last accepted triple. A valid value outside the bounds is clamped
        and reported through the change callback. Returns the committed date,
        or None when the text was discarded.
        """
        self._transition(FieldState.COMMITTING)
        try:
            raw = self.text(segment) if text is None else text
            value = _parse_segment_text(raw)
            if value is None or not self._validate(segment, value):
                return None

            proposed = self._parts.with_segment(segment, value)
            final = proposed.to_datetime()
            clamped = self._clamp(final)

            if clamped != final:
                self._parts = DateParts.from_datetime(clamped)
                self._notify(clamped)
                return clamped
            if proposed != self._parts:
                self._parts = proposed
                self._notify(final)
            return final
        finally:
            self._transition(FieldState.IDLE)
            self.focused = None
