"""Interactive command line front end for browsing a stop's trips."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from stop_trips.adapters.config import AppConfig
from stop_trips.adapters.memory import InMemoryHistoryRepository
from stop_trips.adapters.timetable import (
    TimetableLoader,
    TimetableStopRepository,
    TimetableStopTripsRepository,
)
from stop_trips.application import StopTripsController
from stop_trips.domain.models import STOP_TYPES, StopTripsUiState

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  n, next        show the next trip
  p, prev        show the previous trip
  r, reload      refresh the shown trip (or the whole day after an error)
  f, favorite    toggle the stop as favorite
  t, time <ISO>  show trips from another date/time, e.g. t 2026-10-18T08:00
  h, help        show this help
  q, quit        exit"""

_COMMAND_ALIASES = {
    "n": "next",
    "next": "next",
    "p": "prev",
    "prev": "prev",
    "r": "reload",
    "reload": "reload",
    "f": "favorite",
    "favorite": "favorite",
    "t": "time",
    "time": "time",
    "h": "help",
    "help": "help",
    "?": "help",
    "q": "quit",
    "quit": "quit",
    "exit": "quit",
}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_command(line: str) -> tuple[str, str | None]:
    """Parse one input line into a command name and an optional argument.

    Unknown input is returned as ("unknown", <input>).
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return "empty", None
    command = _COMMAND_ALIASES.get(parts[0].lower())
    if command is None:
        return "unknown", line.strip()
    argument = parts[1].strip() if len(parts) > 1 else None
    return command, argument


def _format_time(value: datetime | None) -> str:
    return value.strftime("%H:%M") if value is not None else "--:--"


def format_state(
    state: StopTripsUiState, trip_count: int | None = None, is_favorite: bool | None = None
) -> str:
    """Render a state snapshot as plain text."""
    lines: list[str] = []
    if state.stop is not None:
        star = " *" if is_favorite else ""
        lines.append(f"{state.stop.name} ({state.stop.stop_type} {state.stop.stop_id}){star}")
    else:
        lines.append("Unknown stop")
    lines.append(f"Trips from {state.reference_date_time.strftime('%Y-%m-%d %H:%M %Z')}")

    trip = state.trip
    if trip is not None:
        position = f"{state.trip_index + 1}"
        if trip_count:
            position += f"/{trip_count}"
        delay = ""
        if trip.delay_minutes:
            delay = f" (delay {trip.delay_minutes:+d} min)"
        lines.append(f"Trip {position}: line {trip.line} -> {trip.headsign}{delay}")
        for i, stop_time in enumerate(trip.stop_times):
            marker = "x" if i < trip.completed_stops else " "
            lines.append(
                f"  [{marker}] {_format_time(stop_time.arrival_time)} {stop_time.stop_name}"
            )
        if trip.is_complete:
            lines.append("  trip completed")
    elif not state.loading and not state.error:
        lines.append("No trips")

    nav = []
    if state.prev_enabled:
        nav.append("<prev")
    if state.next_enabled:
        nav.append("next>")
    if nav:
        lines.append(" ".join(nav))
    if state.loading:
        lines.append("Loading...")
    if state.error:
        lines.append("Error while loading, type 'r' to retry")
    return "\n".join(lines)


def _print_state(controller: StopTripsController) -> None:
    print(
        format_state(
            controller.ui_state.value,
            trip_count=controller.trip_count,
            is_favorite=controller.is_favorite.value,
        )
    )
    print()


async def run_interactive(
    controller: StopTripsController,
    read_line: Callable[[], Awaitable[str]],
) -> None:
    """Dispatch commands to the controller until quit or end of input."""
    controller.start()
    await controller.wait_until_settled()
    _print_state(controller)

    while True:
        line = await read_line()
        if not line:
            break
        command, argument = parse_command(line)
        if command == "quit":
            break
        if command == "empty":
            continue
        if command == "help":
            print(HELP_TEXT)
            continue
        if command == "unknown":
            print(f"Unknown command: {argument}. Type 'h' for help.", file=sys.stderr)
            continue

        if command == "next":
            controller.next_clicked()
        elif command == "prev":
            controller.prev_clicked()
        elif command == "reload":
            controller.reload()
        elif command == "favorite":
            controller.favorite_clicked()
        elif command == "time":
            if argument is None:
                print("Missing date/time, e.g. t 2026-10-18T08:00", file=sys.stderr)
                continue
            try:
                controller.set_reference_date_time(datetime.fromisoformat(argument))
            except ValueError:
                print(f"Invalid date/time: {argument}", file=sys.stderr)
                continue

        await controller.wait_until_settled()
        _print_state(controller)

    await controller.stop()


async def _read_stdin_line() -> str:
    return await asyncio.to_thread(sys.stdin.readline)


def _setup_argparse() -> Any:
    parser = argparse.ArgumentParser(
        description="Browse the trips of the day at a transit stop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Browse trips of the configured stop from now on
  stop-trips --timetable timetable.toml

  # Browse trips of extraurban stop 42 from 8:00 on a given day
  stop-trips --stop-id 42 --stop-type extraurban --at 2026-10-18T08:00
        """,
    )
    parser.add_argument("--timetable", help="Path to the TOML timetable (env: TIMETABLE_FILE)")
    parser.add_argument("--stop-id", type=int, help="Stop identifier (env: STOP_ID)")
    parser.add_argument("--stop-type", choices=STOP_TYPES, help="Stop type (env: STOP_TYPE)")
    parser.add_argument("--timezone", help="Working IANA timezone (env: TIMEZONE)")
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        help="Reference date/time in ISO format instead of now",
    )
    return parser


def _load_config(args: argparse.Namespace) -> AppConfig:
    overrides: dict[str, Any] = {}
    if args.timetable is not None:
        overrides["timetable_file"] = args.timetable
    if args.stop_id is not None:
        overrides["stop_id"] = args.stop_id
    if args.stop_type is not None:
        overrides["stop_type"] = args.stop_type
    if args.timezone is not None:
        overrides["timezone"] = args.timezone
    return AppConfig(**overrides)


async def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = _setup_argparse().parse_args(argv)

    try:
        config = _load_config(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    configure_logging(config.log_level)

    try:
        timetable = TimetableLoader.load(config.timetable_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load timetable: {e}")
        return 1

    controller_kwargs: dict[str, Any] = {"zone": config.zone}
    if args.at is not None:
        reference: datetime = args.at
        controller_kwargs["clock"] = lambda: reference

    controller = StopTripsController(
        config.stop_id,
        config.stop_type,  # type: ignore[arg-type]
        TimetableStopRepository(timetable),
        TimetableStopTripsRepository(timetable),
        InMemoryHistoryRepository(),
        **controller_kwargs,
    )
    print(HELP_TEXT)
    print()
    try:
        await run_interactive(controller, _read_stdin_line)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        await controller.stop()
        return 1
    return 0


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli_main()
