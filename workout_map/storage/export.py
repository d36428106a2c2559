from __future__ import annotations

from typing import Iterable

import pandas as pd

from .data_models import VARIANTS, WorkoutRecord

EXPORT_COLUMNS = [
    "id",
    "created_at",
    "type",
    "description",
    "lat",
    "lng",
    "distance_km",
    "duration_min",
    "pace_min_per_km",
    "speed_kmh",
    "cadence_spm",
    "elevation_gain_m",
    "selection_count",
]


def records_to_frame(records: Iterable[WorkoutRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        spec = VARIANTS[r.variant]
        row = {
            "id": r.id,
            "created_at": r.created_at,
            "type": r.variant.value,
            "description": r.description,
            "lat": r.coordinates[0],
            "lng": r.coordinates[1],
            "distance_km": r.distance_km,
            "duration_min": r.duration_min,
            "pace_min_per_km": r.derived_metric if spec.metric_name == "pace" else None,
            "speed_kmh": r.derived_metric if spec.metric_name == "speed" else None,
            "cadence_spm": r.variant_attribute if spec.attribute_key == "cadence" else None,
            "elevation_gain_m": r.variant_attribute if spec.attribute_key == "elevation_gain_m" else None,
            "selection_count": r.selection_count,
        }
        rows.append(row)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_workouts_csv(records: Iterable[WorkoutRecord], path: str) -> None:
    df = records_to_frame(records)
    df.to_csv(path, index=False)
