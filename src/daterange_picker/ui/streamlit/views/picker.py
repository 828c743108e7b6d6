from __future__ import annotations

from datetime import date, datetime
from typing import Any

import pandas as pd
import streamlit as st

from daterange_picker.config.settings import get_settings
from daterange_picker.picker.controller import RangePickerController
from daterange_picker.picker.layout import PresetDisplay
from daterange_picker.picker.presets import resolve_preset
from daterange_picker.picker.ranges import PickerUpdate
from daterange_picker.utils.dates import start_of_day

CONTROLLER_SESSION_KEY = "date_range_picker_controller"
UPDATES_SESSION_KEY = "date_range_picker_updates"
PRESET_SELECT_KEY = "date_range_picker_preset_select"

PRESET_COLUMNS = ["name", "label", "from", "to", "active"]
UPDATE_COLUMNS = ["from", "to", "compare_from", "compare_to"]


def preset_catalog_dataframe(controller: RangePickerController, now: datetime) -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    for preset in controller.presets:
        resolved = resolve_preset(preset.name, now)
        rows.append(
            {
                "name": preset.name.value,
                "label": preset.label,
                "from": resolved.start,
                "to": resolved.end,
                "active": controller.selected_preset == preset.name,
            }
        )
    return pd.DataFrame(rows, columns=PRESET_COLUMNS)


def update_history_dataframe(updates: list[PickerUpdate]) -> pd.DataFrame:
    rows = [
        {
            "from": update.range.start,
            "to": update.range.end,
            "compare_from": update.range_compare.start if update.range_compare else None,
            "compare_to": update.range_compare.end if update.range_compare else None,
        }
        for update in updates
    ]
    return pd.DataFrame(rows, columns=UPDATE_COLUMNS)


def calendar_value(controller: RangePickerController) -> tuple[date, date]:
    # Presets may reach past the bounds until commit; the widget only shows them clamped.
    current = controller.range
    start = controller.bounds.clamp(current.start)
    end = controller.bounds.clamp(current.end or current.start)
    return start.date(), end.date()


def _calendar_selection(raw: Any) -> tuple[datetime | None, datetime | None]:
    values = list(raw) if isinstance(raw, (tuple, list)) else [raw]
    days = [start_of_day(value) for value in values if isinstance(value, date)]
    start = days[0] if days else None
    end = days[1] if len(days) > 1 else None
    return start, end


def _controller() -> RangePickerController:
    if CONTROLLER_SESSION_KEY not in st.session_state:
        updates: list[PickerUpdate] = []
        st.session_state[UPDATES_SESSION_KEY] = updates
        st.session_state[CONTROLLER_SESSION_KEY] = RangePickerController(
            settings=get_settings(),
            on_update=updates.append,
        )
    return st.session_state[CONTROLLER_SESSION_KEY]


def _render_presets(controller: RangePickerController) -> None:
    display = controller.preset_display
    if display is PresetDisplay.HIDDEN:
        return
    if display is PresetDisplay.SELECT:
        names = [preset.name.value for preset in controller.presets]
        labels = {preset.name.value: preset.label for preset in controller.presets}
        placeholder = controller.translations.labels["selectPlaceholder"]

        def _apply_selected() -> None:
            selected = st.session_state.get(PRESET_SELECT_KEY)
            if selected is not None:
                controller.select_preset(selected)

        st.selectbox(
            placeholder,
            [None] + names,
            format_func=lambda item: labels.get(item, placeholder),
            key=PRESET_SELECT_KEY,
            on_change=_apply_selected,
        )
        return
    for preset in controller.presets:
        marker = "✓ " if controller.selected_preset == preset.name else ""
        if st.button(f"{marker}{preset.label}", key=f"preset_{preset.name.value}"):
            controller.select_preset(preset.name)
            st.rerun()


def _render_editor(controller: RangePickerController) -> None:
    actions = controller.translations.actions
    if controller.show_compare:
        enabled = st.toggle(actions["compare"], value=controller.range_compare is not None)
        if enabled != (controller.range_compare is not None):
            controller.toggle_compare(enabled)

    shown = calendar_value(controller)
    selection = st.date_input(
        "Range",
        value=shown,
        min_value=controller.bounds.min_date.date(),
        max_value=controller.bounds.max_date.date(),
    )
    start, end = _calendar_selection(selection)
    if start is not None and (start, end) != _calendar_selection(shown):
        controller.select_calendar_range(start, end)

    cancel_col, update_col = st.columns(2)
    if cancel_col.button(actions["cancel"]):
        controller.cancel()
        st.rerun()
    if update_col.button(actions["update"], type="primary"):
        controller.commit()
        st.rerun()


def render_page() -> None:
    st.set_page_config(page_title="Date Range Picker", layout="wide")
    controller = _controller()

    st.title("Date Range Picker")
    st.subheader(controller.trigger_label())
    compare_label = controller.compare_label()
    if compare_label:
        st.caption(compare_label)

    if not controller.is_open:
        if st.button("Open picker"):
            controller.open()
            st.rerun()
    else:
        editor_col, preset_col = st.columns([3, 1])
        with editor_col:
            _render_editor(controller)
        with preset_col:
            _render_presets(controller)

    st.markdown("### Presets")
    st.dataframe(preset_catalog_dataframe(controller, datetime.now()), use_container_width=True)

    st.markdown("### Committed Updates")
    st.dataframe(
        update_history_dataframe(st.session_state.get(UPDATES_SESSION_KEY, [])),
        use_container_width=True,
    )
