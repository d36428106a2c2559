"""
Workout List Component
=====================

Keeps the rendered list of workouts shown beside the map. The newest
workout is shown first; each item carries a pattern-matching id so a click
can be routed back to the workout it represents.
"""

from dash import html
from typing import List
import logging

from ...storage.data_models import WorkoutRecord
from ..utils.data_formatter import DataFormatter

logger = logging.getLogger(__name__)

ITEM_TYPE = "workout-item"


def item_id(workout_id: str) -> dict:
    return {"type": ITEM_TYPE, "index": workout_id}


class WorkoutListView:
    """List view backed by Dash html components."""

    def __init__(self):
        self.data_formatter = DataFormatter()
        self._items: List[html.Li] = []
        self._ids: List[str] = []

    def render(self, record: WorkoutRecord) -> None:
        """Render one workout above the previously rendered ones."""
        self._items.insert(0, self.build_item(record))
        self._ids.insert(0, record.id)
        logger.debug(f"Rendered list item for {record.id}")

    def clear(self) -> None:
        self._items = []
        self._ids = []

    @property
    def rendered_ids(self) -> List[str]:
        return list(self._ids)

    def children(self) -> List[html.Li]:
        return list(self._items)

    def build_item(self, record: WorkoutRecord) -> html.Li:
        details = self.data_formatter.workout_details(record)
        return html.Li(
            id=item_id(record.id),
            className=f"workout workout--{record.variant.value}",
            n_clicks=0,
            children=[
                html.H2(record.description, className="workout__title"),
                *[
                    html.Div(
                        className="workout__details",
                        children=[
                            html.Span(icon, className="workout__icon"),
                            html.Span(value, className="workout__value"),
                            html.Span(unit, className="workout__unit"),
                        ],
                    )
                    for icon, value, unit in details.values()
                ],
            ],
        )
