import pytest

from workout_map.frontend.components.workout_list import ITEM_TYPE, WorkoutListView
from workout_map.frontend.components.workout_map import (
    PlotlyMapGateway,
    center_from_relayout,
    coordinates_from_click,
)
from workout_map.frontend.utils.data_formatter import DataFormatter


@pytest.fixture
def gateway(config):
    gateway = PlotlyMapGateway(config)
    gateway.initialize((10.0, 20.0), 13)
    return gateway


def test_gateway_figure_contains_markers(gateway):
    gateway.place_marker((10.0, 20.0), "🏃‍♂️ Run on October 19", "running-popup")
    gateway.place_marker((11.0, 21.0), "🚴‍♀️ Cycling trip on October 19", "cycling-popup")

    fig = gateway.figure()
    trace = fig.data[0]
    assert list(trace.lat) == [10.0, 11.0]
    assert list(trace.lon) == [20.0, 21.0]
    assert list(trace.marker.color) == ["#00c46a", "#ffb545"]
    assert fig.layout.map.center.lat == 10.0
    assert fig.layout.map.zoom == 13


def test_marker_carries_popup_options(gateway):
    gateway.place_marker((10.0, 20.0), "Run", "running-popup")
    assert gateway.markers[0].options['class_name'] == "running-popup"
    assert gateway.markers[0].options['max_width'] == 250


def test_pan_moves_center_and_resets_view(gateway):
    revision = gateway.figure().layout.uirevision
    gateway.pan_to((12.0, 22.0), animate=True)

    fig = gateway.figure()
    assert gateway.center == (12.0, 22.0)
    assert fig.layout.map.center.lon == 22.0
    assert fig.layout.uirevision != revision
    assert fig.layout.transition.duration == 1000


def test_click_is_forwarded_to_handler(gateway):
    clicks = []
    gateway.click((1.0, 1.0))
    gateway.on_click(clicks.append)
    gateway.click((2.0, 2.0))
    assert clicks == [(2.0, 2.0)]


def test_clear_markers(gateway):
    gateway.place_marker((10.0, 20.0), "Run", "running-popup")
    gateway.clear_markers()
    assert gateway.markers == []


def test_coordinates_from_click():
    assert coordinates_from_click({"points": [{"lat": 1.5, "lon": 2.5}]}) == (1.5, 2.5)
    assert coordinates_from_click({"points": []}) is None
    assert coordinates_from_click(None) is None


def test_center_from_relayout():
    assert center_from_relayout({"map.center": {"lat": 3.0, "lon": 4.0}}) == (3.0, 4.0)
    assert center_from_relayout({"mapbox.center": {"lat": 5.0, "lon": 6.0}}) == (5.0, 6.0)
    assert center_from_relayout({"autosize": True}) is None


def test_list_view_renders_newest_first(factory):
    view = WorkoutListView()
    first = factory.create("running", (10, 20), 5, 30, 180)
    second = factory.create("cycling", (10, 20), 20, 60, -5)
    view.render(first)
    view.render(second)

    assert view.rendered_ids == [second.id, first.id]
    top = view.children()[0]
    assert top.id == {"type": ITEM_TYPE, "index": second.id}
    assert top.className == "workout workout--cycling"

    view.clear()
    assert view.children() == []


def test_list_item_shows_metric_and_attribute(factory):
    record = factory.create("running", (10, 20), 5, 30, 180)
    item = WorkoutListView().build_item(record)

    title, *details = item.children
    assert title.children == "Run on October 19"
    values = [d.children[1].children for d in details]
    units = [d.children[2].children for d in details]
    assert values == ["5", "30", "6.0", "180"]
    assert units == ["km", "min", "min/km", "spm"]


def test_formatter_handles_fractions():
    formatter = DataFormatter()
    assert formatter.format_distance(7.5) == "7.5"
    assert formatter.format_metric(5.4666666) == "5.5"
    assert formatter.format_attribute(-5.0) == "-5"
