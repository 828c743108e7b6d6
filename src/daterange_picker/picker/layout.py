"""Viewport width tracking for the responsive parts of the picker."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from daterange_picker.config.settings import PresetPosition

SMALL_SCREEN_BREAKPOINT = 1024

ResizeListener = Callable[[int], None]


class PresetDisplay(str, Enum):
    BUTTONS_LEFT = "buttons_left"
    BUTTONS_RIGHT = "buttons_right"
    SELECT = "select"
    HIDDEN = "hidden"


def is_small_screen(width: int) -> bool:
    return width < SMALL_SCREEN_BREAKPOINT


def preset_display(position: PresetPosition, small_screen: bool) -> PresetDisplay:
    if position is PresetPosition.NONE:
        return PresetDisplay.HIDDEN
    if small_screen:
        return PresetDisplay.SELECT
    if position is PresetPosition.LEFT:
        return PresetDisplay.BUTTONS_LEFT
    return PresetDisplay.BUTTONS_RIGHT


class Viewport:
    """Resize event source; listeners receive the new width."""

    def __init__(self, width: int = SMALL_SCREEN_BREAKPOINT) -> None:
        self.width = width
        self._listeners: list[ResizeListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: ResizeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ResizeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def resize(self, width: int) -> None:
        self.width = width
        for listener in list(self._listeners):
            listener(width)
