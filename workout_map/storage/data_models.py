"""
Data models for the workout map system.
Defines the workout record and the per-variant behaviour table.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Any, Tuple
import uuid

Coordinates = Tuple[float, float]


class WorkoutVariant(str, Enum):
    """Closed set of workout types."""
    RUNNING = "running"
    CYCLING = "cycling"


def calculate_pace(distance_km: float, duration_min: float) -> float:
    """Running pace in minutes per kilometre."""
    return duration_min / distance_km


def calculate_speed(distance_km: float, duration_min: float) -> float:
    """Cycling speed in kilometres per hour."""
    return distance_km / (duration_min / 60)


@dataclass(frozen=True)
class VariantSpec:
    """Everything that differs between workout variants."""
    label: str  # Used in descriptions, e.g. "Run on October 19"
    attribute_key: str  # Persisted name of the variant attribute
    attribute_label: str
    attribute_unit: str
    attribute_must_be_positive: bool
    metric_name: str
    metric_unit: str
    compute_metric: Callable[[float, float], float]
    icon: str
    attribute_icon: str
    popup_class: str


VARIANTS: Dict[WorkoutVariant, VariantSpec] = {
    WorkoutVariant.RUNNING: VariantSpec(
        label="Run",
        attribute_key="cadence",
        attribute_label="Cadence",
        attribute_unit="spm",
        attribute_must_be_positive=True,
        metric_name="pace",
        metric_unit="min/km",
        compute_metric=calculate_pace,
        icon="🏃‍♂️",
        attribute_icon="🦶🏼",
        popup_class="running-popup",
    ),
    WorkoutVariant.CYCLING: VariantSpec(
        label="Cycling trip",
        attribute_key="elevation_gain_m",
        attribute_label="Elevation gain",
        attribute_unit="m",
        attribute_must_be_positive=False,
        metric_name="speed",
        metric_unit="km/h",
        compute_metric=calculate_speed,
        icon="🚴‍♀️",
        attribute_icon="⛰",
        popup_class="cycling-popup",
    ),
}


@dataclass
class WorkoutRecord:
    """
    One logged workout session.

    Records are built by ``WorkoutFactory`` and are fully formed on
    construction. ``derived_metric`` and ``description`` are snapshots taken
    at construction time; only ``selection_count`` changes afterwards.
    """
    id: str
    created_at: datetime
    variant: WorkoutVariant
    coordinates: Coordinates
    distance_km: float
    duration_min: float
    variant_attribute: float  # cadence (running) or elevation gain in m (cycling)
    derived_metric: float  # pace (running) or speed (cycling)
    description: str
    selection_count: int = 0

    @property
    def spec(self) -> VariantSpec:
        return VARIANTS[self.variant]

    @property
    def metric_unit(self) -> str:
        return self.spec.metric_unit

    @property
    def popup_class(self) -> str:
        return self.spec.popup_class

    @property
    def popup_content(self) -> str:
        return f"{self.spec.icon} {self.description}"

    def select(self) -> int:
        """Count an explicit selection of this workout."""
        self.selection_count += 1
        return self.selection_count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain data for JSON storage."""
        return {
            'id': self.id,
            'type': self.variant.value,
            'created_at': self.created_at.isoformat(),
            'coords': [self.coordinates[0], self.coordinates[1]],
            'distance_km': self.distance_km,
            'duration_min': self.duration_min,
            self.spec.attribute_key: self.variant_attribute,
            'derived_metric': self.derived_metric,
            'metric_unit': self.metric_unit,
            'description': self.description,
            'selection_count': self.selection_count
        }


def create_workout_id(created_at: datetime) -> str:
    """Create a workout ID from its creation time plus a random token."""
    millis = int(created_at.timestamp() * 1000) % 10 ** 10
    return f"{millis:010d}_{uuid.uuid4().hex[:8]}"
