import math

import pytest

from workout_map.controller import FormValues, InteractionController, parse_form_number
from workout_map.frontend.components.workout_list import item_id
from workout_map.main import InteractionMode
from workout_map.storage.data_models import WorkoutVariant


@pytest.fixture
def controller(store):
    return InteractionController(store)


@pytest.fixture
def ready_controller(controller):
    controller.handle_position(10, 20)
    return controller


@pytest.mark.parametrize("raw,expected", [("5", 5.0), ("7.25", 7.25), (12, 12.0), ("-5", -5.0)])
def test_parse_form_number(raw, expected):
    assert parse_form_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "abc"])
def test_parse_form_number_blank_or_text_is_nan(raw):
    assert math.isnan(parse_form_number(raw))


def test_position_builds_map(controller):
    controller.handle_position(10, 20)
    assert controller.store.map.center == (10.0, 20.0)


def test_bad_position_degrades_to_no_map(controller):
    controller.handle_position(None, 20)
    assert controller.store.map is None


def test_position_error_degrades_to_no_map(controller):
    controller.handle_position_error("User denied Geolocation")
    assert controller.store.map is None


def test_map_click_before_map_is_ignored(controller):
    assert controller.handle_map_click(10, 20) is False
    assert controller.store.mode is InteractionMode.IDLE


def test_map_click_opens_form(ready_controller):
    assert ready_controller.handle_map_click(10.5, 20.5) is True
    assert ready_controller.store.pending_coordinates == (10.5, 20.5)


def test_submit_running_workout(ready_controller):
    ready_controller.handle_map_click(10, 20)
    result = ready_controller.submit_new_workout(
        FormValues(variant="running", distance="5", duration="25", cadence="180"))

    assert result.ok
    assert result.record.derived_metric == 5.0
    assert result.message == f"{result.record.description} saved"
    assert len(ready_controller.store) == 1


def test_submit_accepts_plain_dict(ready_controller):
    ready_controller.handle_map_click(10, 20)
    result = ready_controller.submit_new_workout(
        {"variant": "cycling", "distance": 20, "duration": 60, "elevation": -5})
    assert result.ok
    assert result.record.variant is WorkoutVariant.CYCLING


def test_submit_uses_field_of_selected_variant(ready_controller):
    ready_controller.handle_map_click(10, 20)
    # cadence is ignored for cycling, elevation is missing
    result = ready_controller.submit_new_workout(
        FormValues(variant="cycling", distance="20", duration="60", cadence="180"))
    assert not result.ok
    assert "Elevation" in result.message


@pytest.mark.parametrize("values", [
    FormValues(variant="running", distance="", duration="25", cadence="180"),
    FormValues(variant="running", distance="5", duration="abc", cadence="180"),
    FormValues(variant="running", distance="5", duration="25", cadence="-1"),
    FormValues(variant="skiing", distance="5", duration="25", cadence="180"),
])
def test_failed_submit_reports_and_changes_nothing(ready_controller, storage, values):
    ready_controller.handle_map_click(10, 20)
    result = ready_controller.submit_new_workout(values)

    assert not result.ok
    assert result.message
    assert result.record is None
    assert len(ready_controller.store) == 0
    assert "workouts" not in storage


def test_submit_without_map_click_fails(ready_controller):
    result = ready_controller.submit_new_workout(
        FormValues(variant="running", distance="5", duration="25", cadence="180"))
    assert not result.ok
    assert "map" in result.message


def test_switch_variant_toggles(controller):
    assert controller.form_variant is WorkoutVariant.RUNNING
    assert controller.switch_variant() is WorkoutVariant.CYCLING
    assert controller.switch_variant() is WorkoutVariant.RUNNING


def test_set_variant_ignores_unknown_values(controller):
    controller.set_variant("cycling")
    controller.set_variant("rowing")
    assert controller.form_variant is WorkoutVariant.CYCLING


def test_select_from_list_pans_and_counts(ready_controller):
    ready_controller.handle_map_click(11, 21)
    record = ready_controller.submit_new_workout(
        FormValues(variant="running", distance="5", duration="25", cadence="180")).record

    assert ready_controller.select_workout_from_list(item_id(record.id)) is record
    assert ready_controller.select_workout_from_list(record.id) is record
    assert record.selection_count == 2
    assert ready_controller.store.map.pans[-1][0] == (11.0, 21.0)


def test_select_unknown_from_list_is_noop(ready_controller):
    assert ready_controller.select_workout_from_list("missing") is None
    assert ready_controller.select_workout_from_list(None) is None
    assert ready_controller.store.map.pans == []


def test_reset_clears_history(ready_controller, storage):
    ready_controller.handle_map_click(10, 20)
    ready_controller.submit_new_workout(
        FormValues(variant="running", distance="5", duration="25", cadence="180"))

    ready_controller.reset()

    assert len(ready_controller.store) == 0
    assert "workouts" not in storage


def test_submit_reports_storage_failure(failing_store):
    controller = InteractionController(failing_store)
    controller.handle_map_click(10, 20)

    result = controller.submit_new_workout(
        FormValues(variant="running", distance="5", duration="25", cadence="180"))

    assert not result.ok
    assert "could not be saved" in result.message
    assert "disk full" in result.message
    assert len(failing_store) == 0
    assert failing_store.list_view.rendered == []


def test_reset_discards_map(ready_controller):
    ready_controller.reset()
    ready_controller.handle_position_error("User denied Geolocation")

    assert ready_controller.store.map is None
    assert ready_controller.handle_map_click(10, 20) is False
