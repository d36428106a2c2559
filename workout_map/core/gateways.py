"""
Gateway interfaces (ports) for the workout map system.

The session store only talks to the map, the storage backend and the list
view through these protocols. Implementations live in ``storage`` and
``frontend``; tests use recording fakes.
"""
from typing import Any, Callable, Optional, Protocol

from ..storage.data_models import Coordinates, WorkoutRecord


class MapGateway(Protocol):
    """Map widget contract: markers, panning and click coordinates."""

    def initialize(self, center: Coordinates, zoom: int) -> None:
        """Show the map centered on ``center`` at ``zoom``."""
        ...

    def place_marker(self, coordinates: Coordinates, popup_content: str,
                     popup_class: str) -> None:
        """Add a marker with an always-open popup."""
        ...

    def clear_markers(self) -> None:
        ...

    def pan_to(self, coordinates: Coordinates, animate: bool = True) -> None:
        """Move the view to ``coordinates``."""
        ...

    def on_click(self, handler: Callable[[Coordinates], None]) -> None:
        """Register the handler that receives clicked coordinates."""
        ...


class PersistenceGateway(Protocol):
    """Durable key/value storage of JSON-serializable values."""

    def write(self, key: str, value: Any) -> None:
        ...

    def read(self, key: str) -> Optional[Any]:
        """
        Return the stored value, or None when the key is absent.

        Raises:
            ValueError: if stored data cannot be parsed
        """
        ...

    def remove(self, key: str) -> None:
        ...


class ListView(Protocol):
    """The workout list shown next to the map."""

    def render(self, record: WorkoutRecord) -> None:
        ...

    def clear(self) -> None:
        ...
