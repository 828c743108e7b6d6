from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from daterange_picker.config.settings import PickerSettings, PresetPosition
from daterange_picker.picker.date_field import FieldState, Segment
from daterange_picker.picker.layout import PresetDisplay, Viewport
from daterange_picker.picker.presets import PresetName, UnknownPresetError
from daterange_picker.picker.ranges import DateRange, PickerUpdate

END_MS = 999000


def test_select_yesterday_end_to_end(make_controller):
    controller = make_controller(initial_from="2023-01-01", initial_to="2023-12-31")
    assert controller.range == DateRange(datetime(2023, 1, 1), datetime(2023, 12, 31))

    controller.select_preset("yesterday")

    assert controller.range == DateRange(
        datetime(2024, 6, 14, 0, 0, 0), datetime(2024, 6, 14, 23, 59, 59, END_MS)
    )
    assert controller.selected_preset is PresetName.YESTERDAY


def test_initial_values_default_to_today_and_from(make_controller):
    controller = make_controller()
    assert controller.range == DateRange(datetime(2024, 6, 15), datetime(2024, 6, 15))
    assert controller.range_compare is None

    controller = make_controller(initial_from="2024-03-05")
    assert controller.range == DateRange(datetime(2024, 3, 5), datetime(2024, 3, 5))


def test_initial_compare_to_defaults_to_compare_from(make_controller):
    controller = make_controller(
        initial_from="2024-03-01",
        initial_to="2024-03-31",
        initial_compare_from="2023-03-01",
    )
    assert controller.range_compare == DateRange(datetime(2023, 3, 1), datetime(2023, 3, 1))
    assert controller.compare_from_field.value == datetime(2023, 3, 1)


def test_selected_preset_follows_every_range_change(make_controller):
    controller = make_controller(initial_from="2023-01-01", initial_to="2023-12-31")
    assert controller.selected_preset is None

    controller.select_preset(PresetName.LAST_7)
    assert controller.selected_preset is PresetName.LAST_7

    controller.set_primary_from(datetime(2024, 6, 10))
    assert controller.selected_preset is None

    controller.select_calendar_range(datetime(2024, 6, 1), datetime(2024, 6, 15))
    assert controller.selected_preset is PresetName.THIS_MONTH


def test_select_unknown_preset_leaves_range_alone(make_controller):
    controller = make_controller(initial_from="2024-02-01", initial_to="2024-02-10")
    with pytest.raises(UnknownPresetError):
        controller.select_preset("fortnight")
    assert controller.range == DateRange(datetime(2024, 2, 1), datetime(2024, 2, 10))


def test_select_preset_shifts_active_compare_by_one_year(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.toggle_compare(True)

    controller.select_preset("yesterday")

    assert controller.range_compare == DateRange(datetime(2023, 6, 14), datetime(2023, 6, 14))


def test_select_preset_without_compare_keeps_it_disabled(make_controller):
    controller = make_controller()
    controller.select_preset("last30")
    assert controller.range_compare is None


def test_setting_from_past_to_pulls_to_up(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-05")
    controller.set_primary_from(datetime(2024, 6, 9))
    assert controller.range == DateRange(datetime(2024, 6, 9), datetime(2024, 6, 9))


def test_setting_to_before_from_pulls_from_down(make_controller):
    controller = make_controller(initial_from="2024-06-05", initial_to="2024-06-10")
    controller.set_primary_to(datetime(2024, 6, 2))
    assert controller.range == DateRange(datetime(2024, 6, 2), datetime(2024, 6, 2))


def test_toggle_compare_seeds_asymmetric_offsets(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.toggle_compare(True)

    compare = controller.range_compare
    assert compare is not None
    assert compare.start == datetime(2024, 6, 1) - timedelta(days=365)
    assert compare.end == datetime(2023, 6, 10)


def test_toggle_compare_fills_missing_end_first(make_controller):
    controller = make_controller()
    controller.select_calendar_range(datetime(2024, 5, 20), None)
    assert controller.range.end is None

    controller.toggle_compare(True)

    assert controller.range == DateRange(datetime(2024, 5, 20), datetime(2024, 5, 20))
    assert controller.range_compare == DateRange(datetime(2023, 5, 21), datetime(2023, 5, 20))


def test_toggle_compare_off_discards_compare(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.toggle_compare(True)
    controller.toggle_compare(False)
    assert controller.range_compare is None
    assert controller.compare_label() is None


def test_calendar_selection_without_start_is_ignored(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.select_calendar_range(None, datetime(2024, 6, 12))
    assert controller.range == DateRange(datetime(2024, 6, 1), datetime(2024, 6, 10))


def test_compare_endpoints_repair_inversion(make_controller):
    controller = make_controller(
        initial_from="2024-06-01",
        initial_to="2024-06-10",
        initial_compare_from="2023-06-01",
        initial_compare_to="2023-06-10",
    )
    controller.set_compare_from(datetime(2023, 6, 20))
    assert controller.range_compare == DateRange(datetime(2023, 6, 20), datetime(2023, 6, 20))

    controller.set_compare_to(datetime(2023, 6, 2))
    assert controller.range_compare == DateRange(datetime(2023, 6, 2), datetime(2023, 6, 2))


def test_compare_endpoints_while_compare_disabled(make_controller, fixed_now):
    controller = make_controller()
    controller.set_compare_to(datetime(2023, 6, 2))
    assert controller.range_compare is None

    controller.set_compare_from(datetime(2023, 6, 2))
    assert controller.range_compare == DateRange(datetime(2023, 6, 2), fixed_now)


def test_commit_without_changes_does_not_notify(make_controller, recorder):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.open()
    assert controller.is_open is True

    assert controller.commit() is None
    assert controller.is_open is False
    assert recorder.calls == []


def test_commit_treats_half_open_range_as_unchanged(make_controller, recorder):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.open()
    controller.select_calendar_range(datetime(2024, 6, 1), None)

    assert controller.commit() is None
    assert recorder.calls == []


def test_commit_notifies_once_with_clamped_primary_range(make_controller, recorder):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.open()
    controller.select_calendar_range(datetime(2023, 12, 1), datetime(2024, 7, 20))

    update = controller.commit()

    expected = PickerUpdate(
        range=DateRange(datetime(2024, 1, 1), datetime(2024, 6, 15, 23, 59, 59, END_MS)),
        range_compare=None,
    )
    assert update == expected
    assert recorder.calls == [expected]
    assert controller.range == DateRange(datetime(2023, 12, 1), datetime(2024, 7, 20))


def test_commit_passes_compare_range_through_unclamped(make_controller, recorder):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.open()
    controller.toggle_compare(True)

    update = controller.commit()

    assert update is not None
    assert update.range == DateRange(datetime(2024, 6, 1), datetime(2024, 6, 10))
    assert update.range_compare == DateRange(datetime(2023, 6, 2), datetime(2023, 6, 10))
    assert update.range_compare.start < controller.bounds.min_date
    assert len(recorder.calls) == 1


def test_commit_without_open_reports_current_range(make_controller, recorder):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    update = controller.commit()
    assert update is not None
    assert recorder.calls == [update]


def test_cancel_restores_values_from_open(make_controller, recorder):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.select_preset("last7")
    controller.open()
    controller.toggle_compare(True)
    controller.select_preset("yesterday")

    controller.cancel()

    assert controller.is_open is False
    assert controller.range == DateRange(
        datetime(2024, 6, 9), datetime(2024, 6, 15, 23, 59, 59, END_MS)
    )
    assert controller.range_compare is None
    assert controller.selected_preset is PresetName.LAST_7
    assert recorder.calls == []


def test_cancel_without_open_restores_initial_values(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.select_preset("last30")
    controller.dismiss()
    assert controller.range == DateRange(datetime(2024, 6, 1), datetime(2024, 6, 10))


def test_cancel_after_commit_falls_back_to_initial_values(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-10")
    controller.open()
    controller.select_preset("yesterday")
    controller.commit()

    controller.cancel()

    assert controller.range == DateRange(datetime(2024, 6, 1), datetime(2024, 6, 10))


def test_typing_in_from_field_repairs_range_and_resyncs_to_field(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-05")

    assert controller.from_field.change(Segment.DAY, "10") is True

    assert controller.range == DateRange(datetime(2024, 6, 10), datetime(2024, 6, 10))
    assert controller.to_field.value == datetime(2024, 6, 10)
    assert controller.from_field.state is FieldState.EDITING


def test_field_commit_clamp_flows_into_range(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-15")

    controller.to_field.key_down(Segment.DAY, "ArrowUp")
    assert controller.range.end == datetime(2024, 6, 16)

    controller.to_field.blur(Segment.DAY)
    assert controller.range.end == controller.bounds.max_date


def test_editing_field_ignores_resync_from_other_endpoint(make_controller):
    controller = make_controller(initial_from="2024-06-01", initial_to="2024-06-05")
    controller.to_field.change(Segment.DAY, "6")
    controller.set_primary_from(datetime(2024, 6, 8))

    assert controller.range == DateRange(datetime(2024, 6, 8), datetime(2024, 6, 8))
    assert controller.to_field.value == datetime(2024, 6, 6)


def test_trigger_and_compare_labels(make_controller):
    controller = make_controller(initial_from="2023-01-01", initial_to="2023-12-31")
    assert controller.trigger_label() == "Jan 1, 2023 - Dec 31, 2023"
    assert controller.compare_label() is None

    controller.toggle_compare(True)
    assert controller.compare_label() == "vs. Jan 1, 2022 - Dec 31, 2022"

    controller.select_calendar_range(datetime(2023, 2, 3), None)
    assert controller.trigger_label() == "Feb 3, 2023"


def test_day_first_locale_labels(make_controller):
    controller = make_controller(
        initial_from="2023-01-01",
        initial_to="2023-12-31",
        settings=PickerSettings(locale="pt-BR"),
    )
    assert controller.day_first is True
    assert controller.trigger_label() == "1 jan 2023 - 31 dez 2023"


def test_translation_overrides_merge_per_category(make_controller):
    controller = make_controller(
        settings=PickerSettings(
            locale="pt-BR",
            translations={
                "presets": {"yesterday": "Ontem mesmo"},
                "actions": {"update": "Aplicar"},
            },
        )
    )
    labels = {preset.name: preset.label for preset in controller.presets}
    assert labels[PresetName.YESTERDAY] == "Ontem mesmo"
    assert labels[PresetName.LAST_MONTH] == "Mês Passado"
    assert controller.translations.actions["update"] == "Aplicar"
    assert controller.translations.actions["cancel"] == "Cancelar"


def test_default_preset_list(make_controller):
    controller = make_controller()
    assert [preset.name for preset in controller.presets] == [
        PresetName.YESTERDAY,
        PresetName.LAST_7,
        PresetName.LAST_30,
        PresetName.THIS_MONTH,
        PresetName.LAST_MONTH,
    ]


def test_is_date_disabled_respects_bounds(make_controller):
    controller = make_controller()
    assert controller.is_date_disabled(datetime(2023, 12, 31)) is True
    assert controller.is_date_disabled(datetime(2024, 1, 1)) is False
    assert controller.is_date_disabled(datetime(2024, 6, 15, 22, 0)) is False
    assert controller.is_date_disabled(datetime(2024, 6, 16)) is True


def test_mount_registers_and_releases_resize_listener(make_controller):
    controller = make_controller()
    viewport = Viewport(width=1280)

    with controller.mount(viewport):
        assert viewport.listener_count == 1
        assert controller.number_of_months == 2
        assert controller.preset_display is PresetDisplay.BUTTONS_RIGHT
        assert controller.default_month() == datetime(2024, 5, 1)

        viewport.resize(800)
        assert controller.is_small_screen is True
        assert controller.number_of_months == 1
        assert controller.preset_display is PresetDisplay.SELECT
        assert controller.default_month() == datetime(2024, 6, 1)

    assert viewport.listener_count == 0
    viewport.resize(1600)
    assert controller.is_small_screen is True


def test_mount_releases_listener_on_error(make_controller):
    controller = make_controller()
    viewport = Viewport(width=1280)
    with pytest.raises(RuntimeError):
        with controller.mount(viewport):
            raise RuntimeError("boom")
    assert viewport.listener_count == 0


@pytest.mark.parametrize(
    ("position", "expected"),
    [
        (PresetPosition.LEFT, PresetDisplay.BUTTONS_LEFT),
        (PresetPosition.RIGHT, PresetDisplay.BUTTONS_RIGHT),
        (PresetPosition.NONE, PresetDisplay.HIDDEN),
    ],
)
def test_preset_display_follows_position(make_controller, position, expected):
    controller = make_controller(settings=PickerSettings(preset_position=position))
    assert controller.preset_display is expected
