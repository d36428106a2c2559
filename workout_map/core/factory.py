"""
Workout factory for the workout map system.
Validates raw input and builds fully formed WorkoutRecord instances.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence
import logging

import numpy as np

from ..storage.data_models import (
    VARIANTS,
    Coordinates,
    WorkoutRecord,
    WorkoutVariant,
    create_workout_id,
)
from .formatting import describe_workout

logger = logging.getLogger(__name__)


class WorkoutValidationError(ValueError):
    """Raised when workout input is malformed or out of range."""


def _finite_number(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise WorkoutValidationError(f"{name} needs to be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise WorkoutValidationError(f"{name} needs to be a number")
    if not np.isfinite(number):
        raise WorkoutValidationError(f"{name} needs to be a finite number")
    return number


def _positive_number(value: Any, name: str) -> float:
    number = _finite_number(value, name)
    if number <= 0:
        raise WorkoutValidationError(f"{name} needs to be a positive number")
    return number


def parse_variant(value: Any) -> WorkoutVariant:
    """Resolve a variant from an enum member or its string value."""
    try:
        return WorkoutVariant(value)
    except ValueError:
        allowed = ", ".join(v.value for v in WorkoutVariant)
        raise WorkoutValidationError(f"Unknown workout type {value!r} (expected one of: {allowed})")


def parse_coordinates(value: Sequence[Any]) -> Coordinates:
    """Validate a (latitude, longitude) pair."""
    try:
        lat, lng = value
    except (TypeError, ValueError):
        raise WorkoutValidationError("Coordinates must be a (latitude, longitude) pair")
    lat = _finite_number(lat, "Latitude")
    lng = _finite_number(lng, "Longitude")
    if not -90 <= lat <= 90:
        raise WorkoutValidationError("Latitude must be between -90 and 90")
    if not -180 <= lng <= 180:
        raise WorkoutValidationError("Longitude must be between -180 and 180")
    return (lat, lng)


class WorkoutFactory:
    """
    Builds WorkoutRecord instances from raw validated input.

    All checks run before anything is constructed, so a failed ``create``
    leaves no partial record behind.
    """

    def __init__(self,
                 clock: Callable[[], datetime] = datetime.now,
                 id_generator: Callable[[datetime], str] = create_workout_id):
        self.clock = clock
        self.id_generator = id_generator

    def create(self, variant: Any, coordinates: Sequence[Any], distance_km: Any,
               duration_min: Any, variant_attribute: Any) -> WorkoutRecord:
        """
        Create a new workout stamped with the current time.

        Args:
            variant: "running" or "cycling" (or a WorkoutVariant)
            coordinates: (latitude, longitude) of the workout
            distance_km: Distance in kilometres, positive
            duration_min: Duration in minutes, positive
            variant_attribute: Cadence for running (positive), elevation
                gain in metres for cycling (any finite value)

        Returns:
            The constructed WorkoutRecord

        Raises:
            WorkoutValidationError: if any input is out of range
        """
        created_at = self.clock()
        return self._build(variant, coordinates, distance_km, duration_min,
                           variant_attribute, created_at, None)

    def rebuild(self, data: Dict[str, Any]) -> WorkoutRecord:
        """Reconstruct a workout from its persisted plain-data form."""
        if not isinstance(data, dict):
            raise WorkoutValidationError(f"Malformed workout entry: {data!r}")
        try:
            variant = parse_variant(data['type'])
            attribute = data[VARIANTS[variant].attribute_key]
            created_at = datetime.fromisoformat(data['created_at'])
            workout_id = data['id']
            selection_count = int(data.get('selection_count', 0))
            coordinates = data['coords']
            distance_km = data['distance_km']
            duration_min = data['duration_min']
        except (KeyError, TypeError, ValueError) as e:
            raise WorkoutValidationError(f"Malformed workout entry: {e}")

        if not isinstance(workout_id, str) or not workout_id:
            raise WorkoutValidationError("Malformed workout entry: missing id")

        record = self._build(variant, coordinates, distance_km, duration_min,
                             attribute, created_at, workout_id)
        record.selection_count = max(selection_count, 0)
        return record

    def _build(self, variant, coordinates, distance_km, duration_min,
               variant_attribute, created_at: datetime,
               workout_id: Optional[str]) -> WorkoutRecord:
        variant = parse_variant(variant)
        spec = VARIANTS[variant]
        coordinates = parse_coordinates(coordinates)

        # validate the common data
        distance_km = _positive_number(distance_km, "Distance")
        duration_min = _positive_number(duration_min, "Duration")

        if spec.attribute_must_be_positive:
            variant_attribute = _positive_number(variant_attribute, spec.attribute_label)
        else:
            variant_attribute = _finite_number(variant_attribute, spec.attribute_label)

        record = WorkoutRecord(
            id=workout_id or self.id_generator(created_at),
            created_at=created_at,
            variant=variant,
            coordinates=coordinates,
            distance_km=distance_km,
            duration_min=duration_min,
            variant_attribute=variant_attribute,
            derived_metric=spec.compute_metric(distance_km, duration_min),
            description=describe_workout(variant, created_at),
        )
        logger.debug("Built %s workout %s: %s %.2f %s", variant.value, record.id,
                     spec.metric_name, record.derived_metric, spec.metric_unit)
        return record


_default_factory = WorkoutFactory()


def create_workout(variant: Any, coordinates: Sequence[Any], distance_km: Any,
                   duration_min: Any, variant_attribute: Any) -> WorkoutRecord:
    """
    Convenience function to create a workout with the default factory.

    Args:
        variant: "running" or "cycling"
        coordinates: (latitude, longitude)
        distance_km: Distance in kilometres
        duration_min: Duration in minutes
        variant_attribute: Cadence or elevation gain

    Returns:
        WorkoutRecord
    """
    return _default_factory.create(variant, coordinates, distance_km,
                                   duration_min, variant_attribute)
