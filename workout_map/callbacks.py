"""Callbacks registration for the Workout Map app."""

from dash import ALL, Dash, Input, Output, State, ctx, no_update
from dash.exceptions import PreventUpdate
import logging

from .controller import FormValues, InteractionController
from .frontend.components.workout_list import ITEM_TYPE
from .frontend.components.workout_map import center_from_relayout, coordinates_from_click
from .layout import form_class, map_figure, row_classes

logger = logging.getLogger(__name__)


def register_callbacks(app: Dash, controller: InteractionController) -> None:
    """Register all application callbacks.

    Every interaction goes through one dispatcher so the map, the list and
    the form are always redrawn from the same session state.
    """
    store = controller.store

    def _view(message=None, clear_inputs=False):
        cadence_class, elevation_class = row_classes(controller)
        cleared = (None, None, None, None) if clear_inputs else (no_update,) * 4
        return (
            map_figure(controller),
            store.list_view.children(),
            form_class(controller),
            cadence_class,
            elevation_class,
            *cleared,
            message or "",
            bool(message),
        )

    @app.callback(
        Output("workout-map", "figure"),
        Output("workout-list", "children"),
        Output("workout-form", "className"),
        Output("row-cadence", "className"),
        Output("row-elevation", "className"),
        Output("input-distance", "value"),
        Output("input-duration", "value"),
        Output("input-cadence", "value"),
        Output("input-elevation", "value"),
        Output("message", "children"),
        Output("message", "is_open"),
        Input("geolocation", "position"),
        Input("geolocation", "position_error"),
        Input("workout-map", "clickData"),
        Input("place-btn", "n_clicks"),
        Input("submit-btn", "n_clicks"),
        Input("cancel-btn", "n_clicks"),
        Input("input-type", "value"),
        Input({"type": ITEM_TYPE, "index": ALL}, "n_clicks"),
        State("workout-map", "relayoutData"),
        State("input-distance", "value"),
        State("input-duration", "value"),
        State("input-cadence", "value"),
        State("input-elevation", "value"),
        prevent_initial_call=True,
    )
    def dispatch(position, position_error, click_data, _place, _submit, _cancel,
                 variant, _item_clicks, relayout_data, distance, duration, cadence, elevation):
        triggered = ctx.triggered_prop_ids
        trigger = ctx.triggered_id

        if "geolocation.position_error" in triggered:
            controller.handle_position_error((position_error or {}).get("message"))
            return _view()

        if "geolocation.position" in triggered:
            if not position:
                raise PreventUpdate
            controller.handle_position(position.get("lat"), position.get("lon"))
            return _view()

        if trigger == "workout-map":
            coordinates = coordinates_from_click(click_data)
            if coordinates is None or not controller.handle_map_click(*coordinates):
                raise PreventUpdate
            return _view()

        if trigger == "place-btn":
            if store.map is None:
                return _view("The map is not ready yet")
            coordinates = center_from_relayout(relayout_data) or store.map.center
            controller.handle_map_click(*coordinates)
            return _view()

        if trigger == "submit-btn":
            result = controller.submit_new_workout(FormValues(
                variant=controller.form_variant.value,
                distance=distance,
                duration=duration,
                cadence=cadence,
                elevation=elevation,
            ))
            if not result.ok:
                return _view(result.message)
            return _view(clear_inputs=True)

        if trigger == "cancel-btn":
            controller.cancel()
            return _view()

        if trigger == "input-type":
            controller.set_variant(variant)
            return _view()

        if isinstance(trigger, dict) and trigger.get("type") == ITEM_TYPE:
            # new list items mount with n_clicks=0 and fire this input too
            if not ctx.triggered[0]["value"]:
                raise PreventUpdate
            controller.select_workout_from_list(trigger)
            return _view()

        logger.debug(f"Unhandled trigger {trigger!r}")
        raise PreventUpdate

    @app.callback(
        Output("url", "href"),
        Input("reset-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def reset(n_clicks):
        if not n_clicks:
            raise PreventUpdate
        controller.reset()
        # full page reload rebuilds the layout from the emptied store
        return "/"
