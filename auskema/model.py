"""
Central data model definitions used across the project.

This module defines the canonical structure of an Event so that:
- providers, cache, grid and renderers share the same field names
- the on-disk cache format stays stable ({"day", "from", "to", "text"})
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any


# Days shown in the table: 0 = time column, 1 = Monday ... 5 = Friday
MIN_DAY = 0
MAX_DAY = 5


@dataclass
class Event:
    """
    Represents one scheduled class block in the current week.

    day:   0 = time column, 1 = Monday ... 5 = Friday
    start: first hour of the block (inclusive)
    end:   hour the block ends (exclusive)
    text:  label shown in the table, may contain newlines
    """

    day: int
    start: int
    end: int
    text: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        """
        Build an Event from the wire/cache shape {"day", "from", "to", "text"}.

        Raises ValueError for missing keys, non-integer values or a day
        outside MIN_DAY..MAX_DAY.
        """
        try:
            day = data["day"]
            start = data["from"]
            end = data["to"]
            text = data.get("text", "")
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Invalid event: {data!r}") from exc

        for value in (day, start, end):
            # bool is an int subclass, but True/False are never hours
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Invalid event: {data!r}")

        if not MIN_DAY <= day <= MAX_DAY:
            raise ValueError(f"Day out of range: {data!r}")

        return cls(day=day, start=start, end=end, text="" if text is None else str(text))

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "from": self.start, "to": self.end, "text": self.text}
