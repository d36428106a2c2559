"""Core modules: workout construction, formatting and gateway contracts."""

from .factory import WorkoutFactory, WorkoutValidationError, create_workout
from .formatting import describe_workout, format_metric
from .gateways import MapGateway, PersistenceGateway, ListView
from .geolocation import (
    GeolocationSource,
    GeolocationUnavailable,
    StaticGeolocation,
    UnavailableGeolocation
)

__all__ = [
    "WorkoutFactory",
    "WorkoutValidationError",
    "create_workout",
    "describe_workout",
    "format_metric",
    "MapGateway",
    "PersistenceGateway",
    "ListView",
    "GeolocationSource",
    "GeolocationUnavailable",
    "StaticGeolocation",
    "UnavailableGeolocation"
]
