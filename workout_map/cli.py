from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import pandas as pd

from .app import create_app
from .main import setup_session_store
from .storage.export import export_workouts_csv, records_to_frame
from .utils.config import get_config


def _cmd_serve(args: argparse.Namespace) -> None:
    config = get_config()
    app = create_app(setup_session_store(args.data_dir))
    app.run(
        debug=args.debug,
        host=args.host or config.ui.host,
        port=args.port or config.ui.port,
        threaded=False,
    )


def _cmd_list(args: argparse.Namespace) -> None:
    store = setup_session_store(args.data_dir)
    if not len(store):
        print("No workouts stored")
        return
    df = records_to_frame(store.records)
    columns = ["id", "created_at", "description", "distance_km", "duration_min",
               "pace_min_per_km", "speed_kmh"]
    with pd.option_context("display.max_columns", None, "display.width", 200):
        print(df[columns].to_string(index=False))


def _cmd_export(args: argparse.Namespace) -> None:
    store = setup_session_store(args.data_dir)
    export_workouts_csv(store.records, args.output)
    print(f"Exported {len(store)} workouts to {args.output}")


def _cmd_reset(args: argparse.Namespace) -> None:
    if not args.yes:
        answer = input("Delete all stored workouts? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted")
            return
    store = setup_session_store(args.data_dir)
    count = len(store)
    store.reset()
    print(f"Removed {count} workouts")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Workout Map: log runs and rides on a map")
    parser.add_argument("--data-dir", help="Directory holding the workout history (default: from config)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Start the web interface")
    serve.add_argument("--host", help="Interface to bind (default: from config)")
    serve.add_argument("--port", type=int, help="Port to listen on (default: from config)")
    serve.add_argument("--debug", action="store_true", help="Enable Dash debug mode")
    serve.set_defaults(func=_cmd_serve)

    list_cmd = sub.add_parser("list", help="Print stored workouts")
    list_cmd.set_defaults(func=_cmd_list)

    export = sub.add_parser("export", help="Write stored workouts to a CSV file")
    export.add_argument("--output", required=True, help="Destination CSV path")
    export.set_defaults(func=_cmd_export)

    reset = sub.add_parser("reset", help="Delete the stored workout history")
    reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    reset.set_defaults(func=_cmd_reset)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
