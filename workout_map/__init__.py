"""
Workout Map - log runs and rides on a map.

A small system for recording geo-tagged workouts, computing their pace or
speed, keeping the history on disk and showing it as map markers and a list.
"""

from .main import (
    SessionStore,
    InteractionMode,
    DuplicateWorkoutError,
    setup_session_store
)

from .core.factory import WorkoutFactory, WorkoutValidationError, create_workout
from .core.geolocation import GeolocationUnavailable, StaticGeolocation, UnavailableGeolocation
from .storage.json_manager import JSONStorageManager, InMemoryStorage
from .storage.data_models import WorkoutRecord, WorkoutVariant, VARIANTS
from .storage.export import export_workouts_csv
from .utils.config import get_config, reset_config

__version__ = "1.0.0"

# Main interface classes
__all__ = [
    # Session state
    "SessionStore",
    "InteractionMode",
    "DuplicateWorkoutError",
    "setup_session_store",

    # Workout construction
    "WorkoutFactory",
    "WorkoutValidationError",
    "create_workout",

    # Geolocation
    "GeolocationUnavailable",
    "StaticGeolocation",
    "UnavailableGeolocation",

    # Data management
    "JSONStorageManager",
    "InMemoryStorage",
    "WorkoutRecord",
    "WorkoutVariant",
    "VARIANTS",
    "export_workouts_csv",

    # Configuration
    "get_config",
    "reset_config"
]
