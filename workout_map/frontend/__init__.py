"""
Frontend module for the Workout Map
==================================

Dash-side implementations of the map and list views:

- components/: map gateway (plotly) and workout list (Dash html)
- utils/: helpers for formatting values for display

The application itself is assembled in ``workout_map.app``.
"""

from .components import WorkoutListView, PlotlyMapGateway

__all__ = ['WorkoutListView', 'PlotlyMapGateway']
