"""UI layout for the Workout Map Dash app."""

from dash import dcc, html
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from .controller import InteractionController
from .storage.data_models import VARIANTS, WorkoutVariant

ROW_CLASS = "form__row"
HIDDEN_ROW_CLASS = "form__row form__row--hidden"
FORM_CLASS = "form"
HIDDEN_FORM_CLASS = "form hidden"


def placeholder_figure() -> go.Figure:
    """Shown until the user's position is known."""
    fig = go.Figure()
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=0, b=0),
        annotations=[dict(
            text="Waiting for your location...",
            showarrow=False,
            font=dict(size=18),
        )],
    )
    return fig


def map_figure(controller: InteractionController) -> go.Figure:
    store = controller.store
    if store.map is None:
        return placeholder_figure()
    return store.map.figure()


def row_classes(controller: InteractionController):
    """Class names for the cadence and elevation rows."""
    running = controller.form_variant is WorkoutVariant.RUNNING
    return (ROW_CLASS if running else HIDDEN_ROW_CLASS,
            HIDDEN_ROW_CLASS if running else ROW_CLASS)


def form_class(controller: InteractionController) -> str:
    return FORM_CLASS if controller.store.pending_coordinates is not None else HIDDEN_FORM_CLASS


def _form_row(label, control, row_id=None, class_name=ROW_CLASS):
    kwargs = {"id": row_id} if row_id else {}
    return html.Div(
        className=class_name,
        children=[html.Label(label, className="form__label"), control],
        **kwargs,
    )


def build_layout(controller: InteractionController):
    """Construct the application layout from the current session state."""
    cadence_class, elevation_class = row_classes(controller)

    return dbc.Container(
        fluid=True,
        children=[
            dcc.Location(id="url", refresh=True),
            dcc.Geolocation(id="geolocation", update_now=True),

            dbc.Row([
                dbc.Col(
                    width=4,
                    className="sidebar",
                    children=[
                        html.H1("Workout Map", className="mb-3"),

                        dbc.Alert(id="message", is_open=False, dismissable=True,
                                  color="warning"),

                        html.Div(
                            id="workout-form",
                            className=form_class(controller),
                            children=[
                                _form_row("Type", dcc.Dropdown(
                                    id="input-type",
                                    options=[{"label": VARIANTS[v].label, "value": v.value}
                                             for v in WorkoutVariant],
                                    value=controller.form_variant.value,
                                    clearable=False,
                                )),
                                _form_row("Distance", dcc.Input(
                                    id="input-distance", type="number", placeholder="km")),
                                _form_row("Duration", dcc.Input(
                                    id="input-duration", type="number", placeholder="min")),
                                _form_row("Cadence", dcc.Input(
                                    id="input-cadence", type="number", placeholder="step/min"),
                                    row_id="row-cadence", class_name=cadence_class),
                                _form_row("Elev Gain", dcc.Input(
                                    id="input-elevation", type="number", placeholder="meters"),
                                    row_id="row-elevation", class_name=elevation_class),
                                dbc.Button("OK", id="submit-btn", n_clicks=0,
                                           color="primary", className="me-2"),
                                dbc.Button("Cancel", id="cancel-btn", n_clicks=0,
                                           color="secondary"),
                            ],
                        ),

                        dbc.Button("Add workout at map centre", id="place-btn", n_clicks=0,
                                   color="success", className="my-2"),

                        html.Ul(id="workout-list", className="workouts",
                                children=controller.store.list_view.children()),

                        dbc.Button("Reset history", id="reset-btn", n_clicks=0,
                                   color="danger", outline=True, className="mt-3"),
                    ],
                ),
                dbc.Col(
                    width=8,
                    children=[
                        dcc.Graph(
                            id="workout-map",
                            figure=map_figure(controller),
                            config={"displayModeBar": False, "scrollZoom": True},
                            style={"height": "100vh"},
                        ),
                    ],
                ),
            ]),
        ],
    )
