"""
Interaction controller for the workout map.

Translates UI events (form submit, type switch, list click, geolocation
result, map click) into session store calls. It holds no workout state of
its own apart from which variant the form currently shows.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
import logging

import numpy as np
import pandas as pd

from .core.factory import WorkoutValidationError, parse_coordinates, parse_variant
from .core.geolocation import GeolocationUnavailable
from .main import SessionStore
from .storage.data_models import WorkoutRecord, WorkoutVariant

logger = logging.getLogger(__name__)

# form field that holds the variant attribute
FORM_ATTRIBUTE_FIELDS = {
    WorkoutVariant.RUNNING: "cadence",
    WorkoutVariant.CYCLING: "elevation",
}


def parse_form_number(value: Any) -> float:
    """Coerce a raw form value to a number; blank or non-numeric becomes NaN."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return np.nan
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number):
        return np.nan
    return float(number)


@dataclass
class FormValues:
    """Raw values of the new-workout form."""
    variant: str
    distance: Any = None
    duration: Any = None
    cadence: Any = None
    elevation: Any = None

    def attribute_for(self, variant: WorkoutVariant) -> Any:
        return getattr(self, FORM_ATTRIBUTE_FIELDS[variant])


@dataclass
class SubmitResult:
    ok: bool
    message: str
    record: Optional[WorkoutRecord] = None


class InteractionController:
    """Glue between the Dash callbacks and the session store."""

    def __init__(self, store: SessionStore):
        self.store = store
        self.form_variant = WorkoutVariant.RUNNING

    def handle_position(self, lat: Any, lon: Any) -> None:
        try:
            coordinates = parse_coordinates((lat, lon))
        except WorkoutValidationError as e:
            self.store.on_position_error(GeolocationUnavailable(str(e)))
            return
        self.store.on_position(coordinates)

    def handle_position_error(self, message: Optional[str] = None) -> None:
        self.store.on_position_error(GeolocationUnavailable(message or "Position unavailable"))

    def handle_map_click(self, lat: Any, lon: Any) -> bool:
        """
        Route a click on the map to the map gateway's click handler.

        Returns:
            True if the click opened (or moved) a pending placement
        """
        if self.store.map is None:
            logger.debug("Map click before the map exists, ignored")
            return False
        try:
            coordinates = parse_coordinates((lat, lon))
        except WorkoutValidationError as e:
            logger.debug(f"Ignoring map click: {e}")
            return False
        self.store.map.click(coordinates)
        return True

    def cancel(self) -> None:
        self.store.cancel_placement()

    def submit_new_workout(self, form_values: Union[FormValues, Dict[str, Any]]) -> SubmitResult:
        """
        Create a workout from the form at the pending map location.

        A failure returns a message for the user and changes nothing.
        """
        if isinstance(form_values, dict):
            form_values = FormValues(**form_values)

        try:
            variant = parse_variant(form_values.variant)
            record = self.store.create_workout(
                variant,
                parse_form_number(form_values.distance),
                parse_form_number(form_values.duration),
                parse_form_number(form_values.attribute_for(variant)),
            )
        except WorkoutValidationError as e:
            logger.info(f"Rejected workout input: {e}")
            return SubmitResult(ok=False, message=str(e))
        except OSError as e:
            logger.error(f"❌ Workout could not be saved: {e}")
            return SubmitResult(ok=False, message=f"Workout could not be saved: {e}")

        return SubmitResult(ok=True, message=f"{record.description} saved", record=record)

    def switch_variant(self) -> WorkoutVariant:
        """Toggle the form between the running and cycling fields."""
        variants = list(WorkoutVariant)
        self.form_variant = variants[(variants.index(self.form_variant) + 1) % len(variants)]
        return self.form_variant

    def set_variant(self, value: Any) -> WorkoutVariant:
        """Follow the form's type selector."""
        try:
            self.form_variant = parse_variant(value)
        except WorkoutValidationError as e:
            logger.debug(f"Ignoring variant change: {e}")
        return self.form_variant

    def select_workout_from_list(self, element_id: Union[str, Dict[str, Any], None]) -> Optional[WorkoutRecord]:
        """Pan to the workout behind a list item; unknown ids do nothing."""
        if isinstance(element_id, dict):
            element_id = element_id.get("index")
        if not element_id:
            return None
        return self.store.select(str(element_id))

    def reset(self) -> None:
        self.store.reset()
