"""Description and number formatting shared by the model and the views."""

from __future__ import annotations

from datetime import datetime
from typing import List

from ..storage.data_models import VARIANTS, WorkoutVariant

MONTH_NAMES: List[str] = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def describe_workout(variant: WorkoutVariant, created_at: datetime) -> str:
    """Build "<label> on <Month> <day>", e.g. "Run on October 19"."""
    label = VARIANTS[variant].label
    return f"{label} on {MONTH_NAMES[created_at.month - 1]} {created_at.day}"


def format_metric(value: float) -> str:
    """Derived metrics are shown with one decimal."""
    return f"{value:.1f}"


def format_number(value: float) -> str:
    """Show whole numbers without a trailing ".0"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
