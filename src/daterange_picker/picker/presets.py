"""Named preset ranges relative to a reference instant."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

from dateutil.relativedelta import relativedelta

from daterange_picker.config.locales import Translations
from daterange_picker.picker.ranges import DateRange, ranges_equal
from daterange_picker.utils.dates import end_of_day, js_weekday, start_of_day


class PresetName(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7 = "last7"
    LAST_14 = "last14"
    LAST_30 = "last30"
    THIS_WEEK = "thisWeek"
    LAST_WEEK = "lastWeek"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"


class UnknownPresetError(ValueError):
    def __init__(self, name: object) -> None:
        super().__init__(f"Unknown date range preset: {name}")
        self.name = name


@dataclass(frozen=True)
class Preset:
    name: PresetName
    label: str


def coerce_preset_name(name: str | PresetName) -> PresetName:
    if isinstance(name, PresetName):
        return name
    try:
        return PresetName(name)
    except ValueError:
        raise UnknownPresetError(name) from None


def _days_back(now: datetime, days: int) -> DateRange:
    return DateRange(start=start_of_day(now - timedelta(days=days)), end=end_of_day(now))


def resolve_preset(name: str | PresetName, now: datetime) -> DateRange:
    preset = coerce_preset_name(name)
    weekday = js_weekday(now)

    if preset is PresetName.TODAY:
        return DateRange(start=start_of_day(now), end=end_of_day(now))
    if preset is PresetName.YESTERDAY:
        day = now - timedelta(days=1)
        return DateRange(start=start_of_day(day), end=end_of_day(day))
    if preset is PresetName.LAST_7:
        return _days_back(now, 6)
    if preset is PresetName.LAST_14:
        return _days_back(now, 13)
    if preset is PresetName.LAST_30:
        return _days_back(now, 29)
    if preset is PresetName.THIS_WEEK:
        return _days_back(now, weekday)
    if preset is PresetName.LAST_WEEK:
        week_start = now - timedelta(days=weekday)
        return DateRange(
            start=start_of_day(week_start - timedelta(days=7)),
            end=end_of_day(week_start - timedelta(days=1)),
        )
    if preset is PresetName.THIS_MONTH:
        return DateRange(start=start_of_day(now.replace(day=1)), end=end_of_day(now))
    if preset is PresetName.LAST_MONTH:
        month_start = start_of_day(now.replace(day=1))
        # Day 0 of this month is the last day of the previous one.
        return DateRange(
            start=month_start - relativedelta(months=1),
            end=end_of_day(month_start - timedelta(days=1)),
        )
    raise UnknownPresetError(name)


def build_presets(translations: Translations, names: Iterable[str | PresetName]) -> list[Preset]:
    presets: list[Preset] = []
    for name in names:
        preset_name = coerce_preset_name(name)
        presets.append(Preset(name=preset_name, label=translations.preset_label(preset_name.value)))
    return presets


def derive_active_preset(
    range_: DateRange,
    now: datetime,
    names: Iterable[str | PresetName],
) -> PresetName | None:
    """First preset whose range matches ``range_`` at day granularity."""
    live = range_.truncated()
    for name in names:
        candidate = resolve_preset(name, now).truncated()
        if ranges_equal(live, candidate):
            return coerce_preset_name(name)
    return None
