from datetime import datetime

import pytest

from workout_map.core.factory import WorkoutFactory
from workout_map.main import SessionStore
from workout_map.storage.json_manager import InMemoryStorage
from workout_map.utils.config import WorkoutMapConfig

FIXED_NOW = datetime(2026, 10, 19, 8, 15, 30, 250000)


class RecordingMap:
    """Map gateway fake that remembers every call."""

    def __init__(self):
        self.center = None
        self.zoom = None
        self.markers = []
        self.pans = []
        self.handler = None

    def initialize(self, center, zoom):
        self.center = center
        self.zoom = zoom

    def place_marker(self, coordinates, popup_content, popup_class):
        self.markers.append((coordinates, popup_content, popup_class))

    def clear_markers(self):
        self.markers = []

    def pan_to(self, coordinates, animate=True):
        self.pans.append((coordinates, animate))

    def on_click(self, handler):
        self.handler = handler

    def click(self, coordinates):
        self.handler(coordinates)


class FailingStorage(InMemoryStorage):
    """Storage whose writes fail, like a full disk."""

    def write(self, key, value):
        raise OSError("disk full")


class RecordingListView:
    def __init__(self):
        self.rendered = []
        self.clears = 0

    def render(self, record):
        self.rendered.append(record.id)

    def clear(self):
        self.rendered = []
        self.clears += 1


@pytest.fixture
def config(monkeypatch):
    monkeypatch.delenv("WORKOUT_MAP_DATA_DIR", raising=False)
    monkeypatch.delenv("WORKOUT_MAP_ZOOM", raising=False)
    return WorkoutMapConfig()


@pytest.fixture
def factory():
    return WorkoutFactory(clock=lambda: FIXED_NOW)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def make_store(storage, factory, config):
    """Build stores that share one storage backend, like successive page loads."""
    def _make(reload=None, persistence=None):
        return SessionStore(
            persistence=storage if persistence is None else persistence,
            list_view=RecordingListView(),
            map_factory=RecordingMap,
            factory=factory,
            config=config,
            reload=reload,
        )
    return _make


@pytest.fixture
def store(make_store):
    return make_store()


@pytest.fixture
def failing_store(make_store):
    """A ready store whose storage backend rejects every write."""
    store = make_store(persistence=FailingStorage())
    store.on_position((10.0, 20.0))
    return store


@pytest.fixture
def ready_store(store):
    """A store whose map is up, centred on (10, 20)."""
    store.on_position((10.0, 20.0))
    return store
