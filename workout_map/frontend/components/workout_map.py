"""
Workout Map Component
====================

Plotly implementation of the map gateway. Markers are kept as plain data and
turned into a ``Scattermap`` figure on demand, so the same gateway can be
rendered into any ``dcc.Graph``.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

import plotly.graph_objects as go

from ...storage.data_models import Coordinates
from ...utils.config import WorkoutMapConfig, get_config

logger = logging.getLogger(__name__)

POPUP_COLORS = {
    "running-popup": "#00c46a",
    "cycling-popup": "#ffb545",
}
DEFAULT_MARKER_COLOR = "#2d3439"


@dataclass
class Marker:
    coordinates: Coordinates
    popup_content: str
    popup_class: str
    options: Dict[str, Any]


class PlotlyMapGateway:
    """
    Map gateway rendered with plotly.

    Plotly maps only report clicks on points, so ``click`` is also fed from
    the centre of the current view by the dashboard.
    """

    def __init__(self, config: Optional[WorkoutMapConfig] = None):
        self.config = config or get_config()
        self.center: Coordinates = self.config.map.fallback_center
        self.zoom: int = self.config.map.zoom
        self.markers: List[Marker] = []
        self.initialized = False
        self.animate = False
        self._click_handler: Optional[Callable[[Coordinates], None]] = None
        self._view_revision = 0

    def initialize(self, center: Coordinates, zoom: int) -> None:
        self.center = center
        self.zoom = zoom
        self.initialized = True
        self._view_revision += 1
        logger.info(f"Map centered on {center} at zoom {zoom}")

    def place_marker(self, coordinates: Coordinates, popup_content: str,
                     popup_class: str) -> None:
        self.markers.append(Marker(
            coordinates=coordinates,
            popup_content=popup_content,
            popup_class=popup_class,
            options=self.config.popup_options(popup_class),
        ))

    def clear_markers(self) -> None:
        self.markers = []

    def pan_to(self, coordinates: Coordinates, animate: bool = True) -> None:
        self.center = coordinates
        self.animate = animate
        # a new revision makes the graph drop the user's own pan/zoom state
        self._view_revision += 1

    def on_click(self, handler: Callable[[Coordinates], None]) -> None:
        self._click_handler = handler

    def click(self, coordinates: Coordinates) -> None:
        """Forward a user's map click to the registered handler."""
        if self._click_handler is None:
            logger.debug("Map click ignored, no handler registered")
            return
        self._click_handler(coordinates)

    def figure(self) -> go.Figure:
        fig = go.Figure(
            go.Scattermap(
                lat=[m.coordinates[0] for m in self.markers],
                lon=[m.coordinates[1] for m in self.markers],
                mode="markers+text",
                text=[m.popup_content for m in self.markers],
                textposition="top center",
                hovertext=[m.popup_content for m in self.markers],
                hoverinfo="text",
                marker=dict(
                    size=14,
                    color=[POPUP_COLORS.get(m.popup_class, DEFAULT_MARKER_COLOR)
                           for m in self.markers],
                ),
            )
        )
        fig.update_layout(
            map=dict(
                style=self.config.map.map_style,
                center=dict(lat=self.center[0], lon=self.center[1]),
                zoom=self.zoom,
            ),
            margin=dict(l=0, r=0, t=0, b=0),
            showlegend=False,
            uirevision=self._view_revision,
        )
        if self.animate:
            fig.update_layout(transition=dict(duration=self.config.map.pan_duration_ms))
        return fig


def coordinates_from_click(click_data: Optional[Dict[str, Any]]) -> Optional[Coordinates]:
    """Extract (lat, lon) from a plotly ``clickData`` payload."""
    if not click_data:
        return None
    points = click_data.get("points") or []
    if not points:
        return None
    point = points[0]
    if "lat" not in point or "lon" not in point:
        return None
    return (point["lat"], point["lon"])


def center_from_relayout(relayout_data: Optional[Dict[str, Any]]) -> Optional[Coordinates]:
    """Extract the view centre from a plotly ``relayoutData`` payload."""
    if not relayout_data:
        return None
    for key in ("map.center", "mapbox.center"):
        center = relayout_data.get(key)
        if center and "lat" in center and "lon" in center:
            return (center["lat"], center["lon"])
    return None
