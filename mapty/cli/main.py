"""Terminal CLI entrypoint for Mapty."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from mapty.core.config import Settings, load_settings
from mapty.core.logging_config import setup_logging
from mapty.ui.presenters import summary_line
from mapty.workout.persistence import JsonDirStorage, WorkoutRepository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout map")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with the workout map",
    )
    parser.add_argument("--list", action="store_true", help="Print stored workouts")
    parser.add_argument("--reset", action="store_true", help="Delete all stored workouts")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the workouts file (default: ~/.mapty)",
    )
    parser.add_argument("--web-host", default=None, help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=None, help="Port for --ui-web")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    settings = base or load_settings()
    overrides: dict[str, object] = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir.expanduser()
    if args.web_host is not None:
        overrides["host"] = args.web_host
    if args.web_port is not None:
        overrides["port"] = args.web_port
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.upper()
    return replace(settings, **overrides)


def _repository(settings: Settings) -> WorkoutRepository:
    return WorkoutRepository(JsonDirStorage(settings.data_dir), key=settings.storage_key)


def run_list(settings: Settings) -> int:
    workouts = _repository(settings).load()
    if not workouts:
        print("No workouts stored")
        return 0
    for workout in workouts:
        print(summary_line(workout))
    return 0


def run_reset(settings: Settings) -> int:
    if not _repository(settings).reset():
        print(f"Could not remove workouts in {settings.data_dir}")
        return 1
    print(f"Removed stored workouts in {settings.data_dir}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = resolve_settings(args)
    setup_logging(settings.log_level)

    if args.reset:
        return run_reset(settings)
    if args.list:
        return run_list(settings)
    if args.ui_web:
        from mapty.ui.web_app import run_web_ui

        return run_web_ui(settings=settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
