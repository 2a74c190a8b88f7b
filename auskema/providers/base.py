"""Abstract base class for schedule providers."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from auskema.errors import NoScheduleFound
from auskema.model import Event


class ScheduleProvider(ABC):
    """Adapter between one remote schedule source and the Event model.

    Extend this class and register it in auskema.providers.PROVIDERS to
    support another source. parse_data() must only return events of the
    current week.
    """

    name: str = ""

    @abstractmethod
    def get_url(self, student_id: str) -> str:
        """Return the URL holding the schedule of student_id."""

    @abstractmethod
    def parse_data(self, raw: str) -> list[Event]:
        """Convert the downloaded payload into events.

        Raises:
            NoScheduleFound: the payload is empty, malformed, or belongs
                to an unknown student id.
        """

    @staticmethod
    def load_json(raw: Any) -> Any:
        """Decode a text payload, raising NoScheduleFound if it is not JSON text."""
        if not isinstance(raw, str):
            raise NoScheduleFound("Expected a text payload.")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise NoScheduleFound("Payload is not valid JSON.") from exc
