"""Range picker state: primary range, optional compare range and presets."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Iterator

from dateutil.relativedelta import relativedelta

from daterange_picker.config.locales import Translations, get_translations, uses_day_month_year
from daterange_picker.config.settings import PickerSettings
from daterange_picker.picker.date_field import SegmentedDateField
from daterange_picker.picker.layout import (
    SMALL_SCREEN_BREAKPOINT,
    PresetDisplay,
    Viewport,
    is_small_screen,
    preset_display,
)
from daterange_picker.picker.presets import (
    Preset,
    PresetName,
    build_presets,
    coerce_preset_name,
    derive_active_preset,
    resolve_preset,
)
from daterange_picker.picker.ranges import (
    Bounds,
    DateRange,
    PickerUpdate,
    compare_range_for_preset,
    ranges_equal,
    resolve_bounds,
    seed_compare_range,
)
from daterange_picker.utils.dates import format_date, parse_local_date, start_of_day
from daterange_picker.utils.logging import get_logger

logger = get_logger(__name__)

DateInput = str | datetime | date


def _optional_date(value: DateInput | None) -> datetime | None:
    return parse_local_date(value) if value is not None else None


class RangePickerController:
    """Owns the picker's ranges and the open/cancel/commit protocol.

    ``selected_preset`` is recomputed from the primary range after every
    change to it and is never assigned directly.
    """

    def __init__(
        self,
        *,
        initial_from: DateInput | None = None,
        initial_to: DateInput | None = None,
        initial_compare_from: DateInput | None = None,
        initial_compare_to: DateInput | None = None,
        on_update: Callable[[PickerUpdate], None] | None = None,
        settings: PickerSettings | None = None,
        clock: Callable[[], datetime] = datetime.now,
        width: int = SMALL_SCREEN_BREAKPOINT,
    ) -> None:
        self.settings = settings or PickerSettings()
        self._clock = clock
        self._on_update = on_update

        now = clock()
        self.bounds: Bounds = resolve_bounds(now, self.settings.min_date, self.settings.max_date)
        self.translations: Translations = get_translations(
            self.settings.locale, self.settings.translations
        )
        self.presets: list[Preset] = build_presets(self.translations, self.settings.preset_names)
        self.day_first = uses_day_month_year(self.settings.locale)
        self.is_small_screen = is_small_screen(width)

        start = _optional_date(initial_from) or start_of_day(now)
        self._initial_range = DateRange(start=start, end=_optional_date(initial_to) or start)
        compare_start = _optional_date(initial_compare_from)
        self._initial_compare = (
            DateRange(start=compare_start, end=_optional_date(initial_compare_to) or compare_start)
            if compare_start is not None
            else None
        )

        self._range = self._initial_range
        self._range_compare = self._initial_compare
        self._selected_preset: PresetName | None = None
        self._snapshot: tuple[DateRange, DateRange | None] | None = None
        self.is_open = False

        self.from_field = self._make_field(self._range.start, self.set_primary_from)
        self.to_field = self._make_field(self._range.end, self.set_primary_to)
        compare = self._range_compare
        self.compare_from_field = self._make_field(
            compare.start if compare else None, self.set_compare_from
        )
        self.compare_to_field = self._make_field(
            compare.end if compare else None, self.set_compare_to
        )
        self._refresh_preset()

    def _make_field(
        self, value: datetime | None, on_change: Callable[[datetime], None]
    ) -> SegmentedDateField:
        return SegmentedDateField(
            value,
            on_change,
            locale=self.settings.locale,
            min_date=self.bounds.min_date,
            max_date=self.bounds.max_date,
            clock=self._clock,
        )

    @property
    def range(self) -> DateRange:
        return self._range

    @property
    def range_compare(self) -> DateRange | None:
        return self._range_compare

    @property
    def selected_preset(self) -> PresetName | None:
        return self._selected_preset

    @property
    def show_compare(self) -> bool:
        return self.settings.show_compare

    def _set_range(self, value: DateRange) -> None:
        self._range = value
        self._refresh_preset()
        self._sync_fields()

    def _set_compare(self, value: DateRange | None) -> None:
        self._range_compare = value
        self._sync_fields()

    def _refresh_preset(self) -> None:
        self._selected_preset = derive_active_preset(
            self._range, self._clock(), [preset.name for preset in self.presets]
        )

    def _sync_fields(self) -> None:
        self.from_field.sync(self._range.start)
        self.to_field.sync(self._range.end)
        if self._range_compare is not None:
            self.compare_from_field.sync(self._range_compare.start)
            self.compare_to_field.sync(self._range_compare.end)

    def select_preset(self, name: str | PresetName) -> DateRange:
        preset = coerce_preset_name(name)
        self._set_range(resolve_preset(preset, self._clock()))
        if self._range_compare is not None:
            self._set_compare(compare_range_for_preset(self._range))
        logger.debug("Applied preset %s -> %s", preset.value, self._range)
        return self._range

    def set_primary_from(self, value: datetime) -> None:
        self._set_range(self._range.with_start(value))

    def set_primary_to(self, value: datetime) -> None:
        self._set_range(self._range.with_end(value))

    def set_compare_from(self, value: datetime) -> None:
        if self._range_compare is None:
            self._set_compare(DateRange(start=value, end=self._clock()))
            return
        self._set_compare(self._range_compare.with_start(value))

    def set_compare_to(self, value: datetime) -> None:
        if self._range_compare is None:
            return
        self._set_compare(self._range_compare.with_end(value))

    def select_calendar_range(self, start: datetime | None, end: datetime | None = None) -> None:
        """Apply a ``{from, to}`` selection reported by the calendar grid."""
        if start is None:
            return
        self._set_range(DateRange(start=start, end=end))

    def toggle_compare(self, enabled: bool) -> None:
        if enabled:
            if self._range.end is None:
                self._set_range(DateRange(start=self._range.start, end=self._range.start))
            self._set_compare(seed_compare_range(self._range))
        else:
            self._set_compare(None)
        logger.debug("Compare %s -> %s", "enabled" if enabled else "disabled", self._range_compare)

    def open(self) -> None:
        self.is_open = True
        self._snapshot = (self._range, self._range_compare)

    def cancel(self) -> None:
        if self._snapshot is not None:
            range_, compare = self._snapshot
        else:
            range_, compare = self._initial_range, self._initial_compare
        self._snapshot = None
        self.is_open = False
        self._set_range(range_)
        self._set_compare(compare)
        logger.debug("Cancelled; restored %s / %s", range_, compare)

    def dismiss(self) -> None:
        self.cancel()

    def commit(self) -> PickerUpdate | None:
        """Close the picker and notify ``on_update`` if anything changed.

        The primary range is clamped into bounds before it is reported; the
        compare range is reported as-is.
        """
        snapshot = self._snapshot
        self._snapshot = None
        self.is_open = False

        if snapshot is not None:
            opened_range, opened_compare = snapshot
            if ranges_equal(self._range, opened_range) and ranges_equal(
                self._range_compare, opened_compare
            ):
                logger.debug("Commit without changes; update suppressed")
                return None

        start = self.bounds.clamp(self._range.start)
        end = self.bounds.clamp(self._range.end) if self._range.end is not None else None
        update = PickerUpdate(range=DateRange(start=start, end=end), range_compare=self._range_compare)
        logger.debug("Commit %s", update)
        if self._on_update is not None:
            self._on_update(update)
        return update

    def trigger_label(self) -> str:
        text = format_date(self._range.start, self.settings.locale, day_first=self.day_first)
        if self._range.end is not None:
            text += " - " + format_date(self._range.end, self.settings.locale, day_first=self.day_first)
        return text

    def compare_label(self) -> str | None:
        compare = self._range_compare
        if compare is None:
            return None
        text = "vs. " + format_date(compare.start, self.settings.locale, day_first=self.day_first)
        if compare.end is not None:
            text += " - " + format_date(compare.end, self.settings.locale, day_first=self.day_first)
        return text

    def is_date_disabled(self, value: datetime | date) -> bool:
        day = value.date() if isinstance(value, datetime) else value
        return day < self.bounds.min_date.date() or day > self.bounds.max_date.date()

    @property
    def number_of_months(self) -> int:
        return 1 if self.is_small_screen else 2

    def default_month(self) -> datetime:
        months_back = 0 if self.is_small_screen else 1
        first = start_of_day(self._clock()).replace(day=1)
        return first - relativedelta(months=months_back)

    @property
    def preset_display(self) -> PresetDisplay:
        return preset_display(self.settings.preset_position, self.is_small_screen)

    def on_resize(self, width: int) -> None:
        self.is_small_screen = is_small_screen(width)

    @contextmanager
    def mount(self, viewport: Viewport) -> Iterator[RangePickerController]:
        viewport.add_listener(self.on_resize)
        self.on_resize(viewport.width)
        try:
            yield self
        finally:
            viewport.remove_listener(self.on_resize)
