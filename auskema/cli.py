"""
CLI (Command Line Interface).

    auskema <studentID>            fetch and print this week's schedule
    auskema <studentID> --force    fetch even if a cached copy is still fresh
    auskema <studentID> --latex    print a standalone LaTeX document instead
    auskema <studentID> --width N  fit the table into N columns (0 = terminal)
    auskema --clear-cache          remove all cached schedules

Note:
- The rendered schedule goes to stdout, status messages and warnings
  go to stderr (see auskema.messages)
- Every handled failure is reported as a warning and the process exits 0
"""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional

from auskema import __version__
from auskema.cache import clear_cache, is_outdated, read_cache, write_cache
from auskema.config import Config, load_config
from auskema.errors import CacheWriteError, FetchError, ParseError, UnknownProvider
from auskema.fetch import fetch_schedule
from auskema.grid import build_grid
from auskema.messages import console, info, warn
from auskema.model import Event
from auskema.providers import JsonProvider, get_provider
from auskema.providers.base import ScheduleProvider
from auskema.render import Renderer, render_grid, select_renderer


DESCRIPTION = "Show your weekly AU class schedule in the terminal or as a LaTeX table."

EPILOG = """\
Examples:
  auskema 201512345              Fetches the schedule for the given id
  auskema 201512345 --force      Fetches the schedule even if it is cached
  auskema 201512345 --latex      Prints the schedule as a LaTeX document
  auskema --clear-cache          Clears the schedule cache

--clear-cache does not need a student id. Further preferences can be
changed in the config.json file (see --config).
"""


def _width_arg(value: str) -> Optional[int]:
    """
    Parse --width. Malformed values mean "auto-size" instead of an error.
    """
    try:
        return int(value)
    except ValueError:
        return None


def _has_path_parts(student_id: str) -> bool:
    # the id becomes a cache file name, it must not leave cache_dir
    return any(sep in student_id for sep in ("/", "\\", os.sep)) or ".." in student_id


def _provider_options(name: str, config: Config) -> dict[str, Any]:
    if name == JsonProvider.name:
        return {"host": config.json_host}
    return {}


def _print_schedule(events: list[Event], renderer: Renderer) -> None:
    output = render_grid(build_grid(events), renderer)
    # LaTeX is streamed while rendering, the console table is returned
    if output is not None:
        print(output)


def _fetch_events(provider: ScheduleProvider, student_id: str, config: Config) -> Optional[list[Event]]:
    """
    Download and parse the schedule. Returns None after reporting a failure.
    """
    try:
        with console.status("fetching schedule.."):
            raw = fetch_schedule(provider.get_url(student_id), timeout=config.request_timeout_seconds)
    except FetchError as exc:
        warn(f"Something went wrong fetching the schedule. ({exc})")
        return None

    try:
        return provider.parse_data(raw)
    except ParseError:
        warn("No schedule for this student id found.")
        return None


def _cmd_clear_cache(config: Config) -> int:
    try:
        clear_cache(config.cache_dir)
    except CacheWriteError:
        warn("Could not clear cache.")
        return 0
    info("Cache cleared.")
    return 0


def _cmd_show(args: argparse.Namespace, student_id: str, config: Config) -> int:
    """
    Print the schedule for one student id, from cache if it is still fresh.
    """
    source = (args.source or config.default_source).strip()
    try:
        provider = get_provider(source, **_provider_options(source, config))
    except UnknownProvider as exc:
        warn(str(exc))
        return 0

    renderer = select_renderer(latex=args.latex, width=args.width, box_name=config.table_box)

    if config.cache and not args.force:
        entry = read_cache(student_id, config.cache_dir)
        if entry is not None and not is_outdated(entry, config.cache_time_minutes):
            _print_schedule(entry.events, renderer)
            info(f"{student_id} loaded from cache.")
            return 0

    events = _fetch_events(provider, student_id, config)
    if events is None:
        return 0

    _print_schedule(events, renderer)

    if config.cache:
        try:
            write_cache(student_id, events, config.cache_dir)
        except CacheWriteError:
            warn(f"Failed to write cache for {student_id}")
        else:
            info(
                f"Cache for {student_id} was updated and will be kept "
                f"for {config.cache_time_minutes:g} minutes"
            )

    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    parser = argparse.ArgumentParser(
        prog="auskema",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("student_id", nargs="?", default=None, help="Your AU student id (e.g. 201512345)")
    parser.add_argument("--force", action="store_true", help="Fetch the schedule even if it is cached")
    parser.add_argument("--clear-cache", action="store_true", help="Clear the schedule cache and exit")
    parser.add_argument("--latex", action="store_true", help="Print a standalone LaTeX document")
    parser.add_argument(
        "--width",
        type=_width_arg,
        default=None,
        help="Total table width in characters (0 = terminal width)",
    )
    parser.add_argument("--source", type=str, default=None, help="Schedule provider (default from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to an alternative config.json")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to the command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.clear_cache:
        raise SystemExit(_cmd_clear_cache(config))

    student_id = (args.student_id or "").strip()
    if not student_id:
        parser.print_help()
        raise SystemExit(0)

    if len(student_id) < config.studentid_min_length or _has_path_parts(student_id):
        warn("Invalid student id.")
        parser.print_help()
        raise SystemExit(0)

    raise SystemExit(_cmd_show(args, student_id, config))
