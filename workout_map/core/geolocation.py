"""One-shot geolocation sources."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from ..storage.data_models import Coordinates
from .factory import WorkoutValidationError, parse_coordinates


class GeolocationUnavailable(RuntimeError):
    """The user's position was denied or could not be determined."""


PositionCallback = Callable[[Coordinates], None]
ErrorCallback = Callable[[GeolocationUnavailable], None]


class GeolocationSource(Protocol):
    def get_current_position(self, on_success: PositionCallback,
                             on_error: ErrorCallback) -> None:
        ...


class StaticGeolocation:
    """Resolves immediately to a fixed position (CLI flags, tests)."""

    def __init__(self, coordinates: Coordinates):
        self.coordinates = coordinates

    def get_current_position(self, on_success: PositionCallback,
                             on_error: ErrorCallback) -> None:
        try:
            coordinates = parse_coordinates(self.coordinates)
        except WorkoutValidationError as e:
            on_error(GeolocationUnavailable(str(e)))
            return
        on_success(coordinates)


class UnavailableGeolocation:
    """Always fails, e.g. when the user denied the location prompt."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason or "Position unavailable"

    def get_current_position(self, on_success: PositionCallback,
                             on_error: ErrorCallback) -> None:
        on_error(GeolocationUnavailable(self.reason))
