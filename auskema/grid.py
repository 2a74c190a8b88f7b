"""
Grid building (sparse events -> dense hour/day table).

Every event covers the hours [start, end) of one day. Folding the events
gives one row per hour with a label per weekday:

    hour -> ["HH:00", monday, tuesday, wednesday, thursday, friday]

Rules:
- events are applied in input order, a later event overwrites an earlier
  one for the same (hour, day) cell
- no sorting, no deduplication
- an empty event list produces an empty hour range (no rows)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from auskema.model import Event


DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# Column 0 is reserved for the time label
TIME_COLUMN = 0
HEADER = [""] + DAY_NAMES
NUM_COLUMNS = len(HEADER)

# Sentinels: first_hour > last_hour until an event is seen
FIRST_HOUR_SENTINEL = 24
LAST_HOUR_SENTINEL = 0


def time_label(hour: int) -> str:
    """
    Format an hour as a zero-padded time label, e.g. 8 -> '08:00'.
    """
    return f"{hour:02d}:00"


@dataclass
class Grid:
    rows: dict[int, list[str]] = field(default_factory=dict)
    first_hour: int = FIRST_HOUR_SENTINEL
    last_hour: int = LAST_HOUR_SENTINEL

    def hours(self) -> range:
        """
        Hours to render, ascending. Empty if first_hour >= last_hour.
        """
        return range(self.first_hour, self.last_hour)

    def is_empty(self) -> bool:
        return self.first_hour >= self.last_hour

    def row(self, hour: int) -> list[str]:
        """
        Return the row for one hour with the time label filled in.

        Hours without any event get a row of empty day cells.
        """
        row = self.rows.setdefault(hour, [""] * NUM_COLUMNS)
        row[TIME_COLUMN] = time_label(hour)
        return row

    def cell(self, hour: int, day: int) -> str:
        row = self.rows.get(hour)
        if row is None:
            return ""
        return row[day]


def build_grid(events: Iterable[Event]) -> Grid:
    """
    Fold events into a Grid and track the occupied hour range.
    """
    grid = Grid()

    for ev in events:
        for hour in range(ev.start, ev.end):
            row = grid.rows.setdefault(hour, [""] * NUM_COLUMNS)
            row[ev.day] = ev.text

        grid.first_hour = min(grid.first_hour, ev.start)
        grid.last_hour = max(grid.last_hour, ev.end)

    return grid
