"""Dashboard components for the map and the workout list."""

from .workout_list import WorkoutListView
from .workout_map import PlotlyMapGateway

__all__ = [
    'WorkoutListView',
    'PlotlyMapGateway'
]
