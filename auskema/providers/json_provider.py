"""
Generic provider for hosts that already serve the canonical event list:

    [{"from": 12, "to": 14, "day": 1, "text": "Databases"}, ...]

The host is expected to return only the current week.
"""

from __future__ import annotations

from auskema.errors import NoScheduleFound
from auskema.model import Event
from auskema.providers.base import ScheduleProvider


HOST = "http://foo.bar/"


class JsonProvider(ScheduleProvider):
    name = "json"

    def __init__(self, host: str = HOST) -> None:
        self._host = host

    def get_url(self, student_id: str) -> str:
        return f"{self._host}{student_id}"

    def parse_data(self, raw: str) -> list[Event]:
        data = self.load_json(raw)
        if not isinstance(data, list):
            raise NoScheduleFound("Expected a list of events.")

        try:
            return [Event.from_dict(item) for item in data]
        except ValueError as exc:
            raise NoScheduleFound(str(exc)) from exc
