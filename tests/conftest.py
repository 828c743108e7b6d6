from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

import pytest

from daterange_picker.config.settings import PickerSettings
from daterange_picker.picker.controller import RangePickerController
from daterange_picker.picker.ranges import PickerUpdate

# Saturday
FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)


@dataclass
class UpdateRecorder:
    calls: list[PickerUpdate] = field(default_factory=list)

    def __call__(self, update: PickerUpdate) -> None:
        self.calls.append(update)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def recorder() -> UpdateRecorder:
    return UpdateRecorder()


@pytest.fixture
def make_controller(
    clock: Callable[[], datetime], recorder: UpdateRecorder
) -> Callable[..., RangePickerController]:
    def _make(**kwargs: Any) -> RangePickerController:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("on_update", recorder)
        kwargs.setdefault("settings", PickerSettings())
        kwargs.setdefault("width", 1280)
        return RangePickerController(**kwargs)

    return _make
