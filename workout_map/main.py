"""
Main module for the workout map system.
Provides the session store that owns the workout history and keeps the map,
the list view and persistent storage in step with it.
"""
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple
import logging

from .core.factory import WorkoutFactory, WorkoutValidationError
from .core.gateways import ListView, MapGateway, PersistenceGateway
from .core.geolocation import GeolocationSource, GeolocationUnavailable
from .frontend.components.workout_list import WorkoutListView
from .frontend.components.workout_map import PlotlyMapGateway
from .storage.data_models import Coordinates, WorkoutRecord
from .storage.json_manager import JSONStorageManager
from .utils.config import WorkoutMapConfig, get_config

logger = logging.getLogger(__name__)


class DuplicateWorkoutError(ValueError):
    """Raised when appending a workout whose id is already stored."""


class InteractionMode(str, Enum):
    IDLE = "idle"
    AWAITING_INPUT = "awaiting_input"


class SessionStore:
    """
    Owns the ordered workout history for one session.

    The store is the only writer of the sequence. Insertion order is
    chronological order and display order. Every append is followed by a
    full snapshot write to persistence.
    """

    def __init__(self,
                 persistence: PersistenceGateway,
                 list_view: ListView,
                 map_factory: Optional[Callable[[], MapGateway]] = None,
                 factory: Optional[WorkoutFactory] = None,
                 config: Optional[WorkoutMapConfig] = None,
                 reload: Optional[Callable[[], None]] = None):
        self.config = config or get_config()
        self.persistence = persistence
        self.list_view = list_view
        self.map_factory = map_factory
        self.factory = factory or WorkoutFactory()
        self.reload = reload
        self.map: Optional[MapGateway] = None

        self._records: List[WorkoutRecord] = []
        self._mode = InteractionMode.IDLE
        self._pending_coordinates: Optional[Coordinates] = None

    @property
    def storage_key(self) -> str:
        return self.config.storage.storage_key

    @property
    def records(self) -> Tuple[WorkoutRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WorkoutRecord]:
        return iter(tuple(self._records))

    # ------------------------------------------------------------------
    # Map lifecycle
    # ------------------------------------------------------------------

    def initialize(self, geolocation: GeolocationSource) -> None:
        """Ask for the user's position once; the map is built when it resolves."""
        geolocation.get_current_position(self.on_position, self.on_position_error)

    def on_position(self, coordinates: Coordinates) -> None:
        """Build the map centered on the user and place deferred markers."""
        if self.map_factory is None:
            gateway = PlotlyMapGateway(self.config)
        else:
            gateway = self.map_factory()
        gateway.initialize(coordinates, self.config.map.zoom)
        gateway.on_click(self.begin_placement)
        self.map = gateway

        for record in self._records:
            self._place_marker(record)

        logger.info(f"🗺️ Map ready at {coordinates}, {len(self._records)} markers placed")

    def on_position_error(self, error: GeolocationUnavailable) -> None:
        """Geolocation failed: stay without a map for the rest of the session."""
        logger.warning(f"⚠️ Geolocation unavailable: {error}")
        if self._records:
            logger.warning(f"⚠️ {len(self._records)} restored workouts will have no map marker")

    # ------------------------------------------------------------------
    # Placement state
    # ------------------------------------------------------------------

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def pending_coordinates(self) -> Optional[Coordinates]:
        return self._pending_coordinates

    def begin_placement(self, coordinates: Coordinates) -> None:
        """A map click; a later click replaces the pending location."""
        self._pending_coordinates = coordinates
        self._mode = InteractionMode.AWAITING_INPUT

    def cancel_placement(self) -> None:
        self._pending_coordinates = None
        self._mode = InteractionMode.IDLE

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def create_workout(self, variant: Any, distance_km: Any, duration_min: Any,
                       variant_attribute: Any) -> WorkoutRecord:
        """
        Build a workout at the pending map location and append it.

        Raises:
            WorkoutValidationError: if no location is pending or input is invalid
        """
        if self._mode is not InteractionMode.AWAITING_INPUT or self._pending_coordinates is None:
            raise WorkoutValidationError("Select a location on the map first")

        record = self.factory.create(variant, self._pending_coordinates,
                                     distance_km, duration_min, variant_attribute)
        self.append(record)
        self.cancel_placement()
        return record

    def append(self, record: WorkoutRecord) -> None:
        """
        Persist the history including a validated workout, then show it.

        Raises:
            DuplicateWorkoutError: if the id is already in the history
            OSError: if the snapshot cannot be written; nothing is changed
        """
        if self.find_by_id(record.id) is not None:
            raise DuplicateWorkoutError(f"Workout {record.id} already exists")

        # storage first, so a failed write leaves memory and views untouched
        self.persistence.write(self.storage_key, self.snapshot() + [record.to_dict()])

        self._records.append(record)
        self._place_marker(record)
        self.list_view.render(record)

        logger.info(f"➕ Added workout {record.id}: {record.description}")

    def persist(self) -> None:
        """Write the entire current sequence under the storage key."""
        self.persistence.write(self.storage_key, self.snapshot())

    def snapshot(self) -> List[Dict[str, Any]]:
        return [record.to_dict() for record in self._records]

    def restore(self) -> int:
        """
        Replace the history with the persisted snapshot.

        Absent or malformed data leaves the history empty and is never
        surfaced to the user.

        Returns:
            Number of restored workouts
        """
        self._replace(self._load())
        if self._records:
            logger.info(f"📊 Restored {len(self._records)} workouts")
        return len(self._records)

    def _load(self) -> List[WorkoutRecord]:
        try:
            data = self.persistence.read(self.storage_key)
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Stored workouts could not be read, starting empty: {e}")
            return []

        if not data:
            logger.info("📄 No stored workouts")
            return []

        if not isinstance(data, list):
            logger.warning(f"⚠️ Stored workouts are malformed (expected a list, got {type(data).__name__}), starting empty")
            return []

        try:
            restored = [self.factory.rebuild(entry) for entry in data]
        except WorkoutValidationError as e:
            logger.warning(f"⚠️ Stored workouts are malformed, starting empty: {e}")
            return []

        ids = [record.id for record in restored]
        if len(set(ids)) != len(ids):
            logger.warning("⚠️ Stored workouts contain duplicate ids, starting empty")
            return []

        return restored

    def _replace(self, records: List[WorkoutRecord]) -> None:
        """Swap in a new history and redraw the list and the markers."""
        self._records = records
        self.list_view.clear()
        if self.map is not None:
            self.map.clear_markers()
        for record in self._records:
            self.list_view.render(record)
            self._place_marker(record)

    def find_by_id(self, workout_id: str) -> Optional[WorkoutRecord]:
        for record in self._records:
            if record.id == workout_id:
                return record
        return None

    def pan_to(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Move the map to a workout; unknown ids are ignored."""
        record = self.find_by_id(workout_id)
        if record is None:
            logger.debug(f"No workout {workout_id} to pan to")
            return None
        if self.map is None:
            logger.debug(f"No map yet, cannot pan to {workout_id}")
            return record

        self.map.pan_to(record.coordinates, animate=self.config.map.animate_pan)
        return record

    def select(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Pan to a workout chosen from the list and count the selection."""
        record = self.pan_to(workout_id)
        if record is not None:
            record.select()
        return record

    def reset(self) -> None:
        """Discard all history, in memory and in storage, then reload."""
        self.persistence.remove(self.storage_key)
        self._replace([])
        self.cancel_placement()
        # the next page load asks for a position again
        self.map = None
        logger.info("🗑️ Workout history reset")

        if self.reload is not None:
            self.reload()

    def _place_marker(self, record: WorkoutRecord) -> None:
        if self.map is None:
            logger.debug(f"Map not ready, deferring marker for {record.id}")
            return
        self.map.place_marker(record.coordinates, record.popup_content, record.popup_class)


def setup_session_store(data_dir: Optional[str] = None,
                        config: Optional[WorkoutMapConfig] = None,
                        reload: Optional[Callable[[], None]] = None) -> SessionStore:
    """
    Build a session store on the JSON file backend and restore saved history.

    Args:
        data_dir: Directory holding the history file (defaults to config)
        config: Configuration to use (defaults to the global config)
        reload: Hook called after a reset

    Returns:
        SessionStore with prior workouts loaded
    """
    config = config or get_config()
    config.validate_configuration()

    store = SessionStore(
        persistence=JSONStorageManager(data_dir, config=config),
        list_view=WorkoutListView(),
        config=config,
        reload=reload,
    )
    store.restore()
    return store


__all__ = [
    "SessionStore",
    "InteractionMode",
    "DuplicateWorkoutError",
    "setup_session_store",
]
