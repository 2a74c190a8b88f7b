"""
Provider for the lukasj.org AU schedule mirror.

Payload shape:

    {"events": [
        {"dow": 1, "from": 10, "to": 12, "weekfrom": 5, "weekto": 15,
         "summary": "Databases Lecture", "description": "Room 112"},
        ...
    ]}

An event belongs to the current week if weekfrom < week < weekto, using
the ISO week number of today.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional

from auskema.errors import NoScheduleFound
from auskema.model import MAX_DAY, Event
from auskema.providers.base import ScheduleProvider


HOST = "http://lukasj.org/auskema/"


def iso_week(day: date) -> int:
    return day.isocalendar()[1]


def _label(item: dict[str, Any]) -> str:
    # "Databases Lecture" -> "Databases\nLecture", then the description below
    summary = str(item.get("summary") or "").replace(" ", "\n", 1)
    description = str(item.get("description") or "")
    return f"{summary}\n{description}"


class LukasjProvider(ScheduleProvider):
    name = "lukasj"

    def __init__(self, host: str = HOST, today: Optional[Callable[[], date]] = None) -> None:
        self._host = host
        self._today = today or date.today

    def get_url(self, student_id: str) -> str:
        return f"{self._host}{student_id}/json"

    def parse_data(self, raw: str) -> list[Event]:
        data = self.load_json(raw)

        items = data.get("events") if isinstance(data, dict) else None
        if not isinstance(items, list) or not items:
            raise NoScheduleFound("No events in payload.")

        week = iso_week(self._today())
        events: list[Event] = []

        # Walk from the last event to the first; this order decides which
        # label wins when two events share a cell.
        for item in reversed(items):
            if not isinstance(item, dict):
                raise NoScheduleFound(f"Unexpected event entry: {item!r}")
            try:
                in_week = item["weekfrom"] < week < item["weekto"]
                if not in_week:
                    continue
                # weekend blocks have no column in the table
                if isinstance(item["dow"], int) and not 1 <= item["dow"] <= MAX_DAY:
                    continue
                events.append(
                    Event.from_dict(
                        {"day": item["dow"], "from": item["from"], "to": item["to"], "text": _label(item)}
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise NoScheduleFound(f"Unexpected event entry: {item!r}") from exc

        return events
