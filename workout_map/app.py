"""Dash app factory for the Workout Map UI."""

from functools import partial
from typing import Optional
import logging

from dash import Dash
import dash_bootstrap_components as dbc

from .callbacks import register_callbacks
from .controller import InteractionController
from .layout import build_layout
from .main import SessionStore, setup_session_store
from .utils.config import get_config


def create_app(store: Optional[SessionStore] = None) -> Dash:
    """Create and configure the Dash application instance.

    Args:
        store: Session store to serve; a file-backed one is built and
            restored from the configured data directory when omitted.

    Returns:
        Dash: Configured Dash application.
    """
    logging.basicConfig(level=logging.INFO)
    config = get_config()

    if store is None:
        store = setup_session_store(config=config)
    controller = InteractionController(store)

    app = Dash(
        __name__,
        title=config.ui.title,
        suppress_callback_exceptions=True,
        external_stylesheets=[dbc.themes.BOOTSTRAP],
    )

    app.layout = partial(build_layout, controller)
    register_callbacks(app, controller)

    return app


def run(debug: bool = False) -> None:
    """Serve the app; callbacks run one at a time against the single store."""
    config = get_config()
    app = create_app()
    app.run(debug=debug, host=config.ui.host, port=config.ui.port, threaded=False)


if __name__ == "__main__":
    run(debug=True)
