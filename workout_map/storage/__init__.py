"""Data storage and management modules."""

from .data_models import (
    WorkoutRecord,
    WorkoutVariant,
    VariantSpec,
    VARIANTS,
    calculate_pace,
    calculate_speed,
    create_workout_id
)
from .json_manager import JSONStorageManager, InMemoryStorage
from .export import records_to_frame, export_workouts_csv

__all__ = [
    # Data models
    "WorkoutRecord",
    "WorkoutVariant",
    "VariantSpec",
    "VARIANTS",
    "calculate_pace",
    "calculate_speed",
    "create_workout_id",

    # Persistence
    "JSONStorageManager",
    "InMemoryStorage",

    # Export
    "records_to_frame",
    "export_workouts_csv"
]
