from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from daterange_picker.config.locales import DEFAULT_LOCALE
from daterange_picker.utils.dates import parse_local_date

DEFAULT_PRESET_NAMES: tuple[str, ...] = (
    "yesterday",
    "last7",
    "last30",
    "thisMonth",
    "lastMonth",
)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_date(name: str) -> datetime | None:
    raw = str(os.getenv(name, "") or "").strip()
    if not raw:
        return None
    return parse_local_date(raw)


class PresetPosition(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


def coerce_preset_position(raw: Any, default: PresetPosition = PresetPosition.RIGHT) -> PresetPosition:
    if isinstance(raw, PresetPosition):
        return raw
    text = str(raw or "").strip().lower()
    for position in PresetPosition:
        if position.value == text:
            return position
    return default


@dataclass(frozen=True)
class PickerSettings:
    locale: str = DEFAULT_LOCALE
    show_compare: bool = True
    preset_position: PresetPosition = PresetPosition.RIGHT
    min_date: datetime | None = None
    max_date: datetime | None = None
    preset_names: tuple[str, ...] = DEFAULT_PRESET_NAMES
    # Overrides stay a plain mapping, so they are left out of the hash.
    translations: Mapping[str, Mapping[str, str]] = field(default_factory=dict, hash=False)


def get_settings() -> PickerSettings:
    return PickerSettings(
        locale=os.getenv("DATE_RANGE_PICKER_LOCALE", DEFAULT_LOCALE),
        show_compare=_env_bool("DATE_RANGE_PICKER_SHOW_COMPARE", True),
        preset_position=coerce_preset_position(os.getenv("DATE_RANGE_PICKER_PRESET_POSITION")),
        min_date=_env_date("DATE_RANGE_PICKER_MIN_DATE"),
        max_date=_env_date("DATE_RANGE_PICKER_MAX_DATE"),
    )
