"""
Data Formatting Utilities
========================

Utility functions for formatting workout data for display in dashboard components.
"""

from typing import Any, Dict

from ...core.formatting import format_metric, format_number
from ...storage.data_models import WorkoutRecord


class DataFormatter:
    """
    Utility class for formatting workout data for dashboard display.

    Provides methods for:
    - Distance and duration formatting
    - Derived metric formatting (pace or speed)
    - Variant attribute formatting (cadence or elevation gain)
    """

    def format_distance(self, distance: float) -> str:
        """
        Format distance for display.

        Args:
            distance: Distance in kilometres, always finite and positive

        Returns:
            Formatted distance string
        """
        return format_number(distance)

    def format_duration(self, minutes: float) -> str:
        """Duration is entered and shown in whole or fractional minutes."""
        return format_number(minutes)

    def format_metric(self, value: float) -> str:
        return format_metric(value)

    def format_attribute(self, value: float) -> str:
        return format_number(value)

    def workout_details(self, record: WorkoutRecord) -> Dict[str, Any]:
        """
        Display rows for one workout, in list order.

        Returns:
            Dictionary mapping a row name to (icon, value, unit)
        """
        spec = record.spec
        return {
            'distance': (spec.icon, self.format_distance(record.distance_km), "km"),
            'duration': ("⏱", self.format_duration(record.duration_min), "min"),
            'metric': ("⚡️", self.format_metric(record.derived_metric), spec.metric_unit),
            'attribute': (spec.attribute_icon, self.format_attribute(record.variant_attribute),
                          spec.attribute_unit),
        }
