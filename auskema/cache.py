"""
Local schedule cache.

One JSON file per student id:

    <cache_dir>/<student_id>.json

    {"timestamp": <minutes since epoch>, "data": [<event dicts>]}

A missing or corrupted file is simply a cache miss: reading never
crashes the application. Write failures raise CacheWriteError so the
caller can report them.
"""

from __future__ import annotations

import json
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from auskema.errors import CacheReadError, CacheWriteError
from auskema.model import Event


@dataclass
class CacheEntry:
    timestamp: float
    events: list[Event]


def now_minutes() -> float:
    return time.time() / 60


def cache_path(student_id: str, cache_dir: str | Path) -> Path:
    return Path(cache_dir) / f"{student_id}.json"


def _decode(path: Path) -> CacheEntry:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CacheReadError(f"Could not read cache file {path}") from exc

    if not isinstance(data, dict):
        raise CacheReadError(f"Unexpected cache content in {path}")

    stamp = data.get("timestamp")
    raw_events = data.get("data")
    if isinstance(stamp, bool) or not isinstance(stamp, (int, float)) or not isinstance(raw_events, list):
        raise CacheReadError(f"Unexpected cache content in {path}")

    try:
        events = [Event.from_dict(e) for e in raw_events]
    except ValueError as exc:
        raise CacheReadError(f"Invalid event in {path}") from exc

    return CacheEntry(timestamp=float(stamp), events=events)


def read_cache(student_id: str, cache_dir: str | Path) -> Optional[CacheEntry]:
    """
    Load the cached schedule for a student id.

    Returns None if the file does not exist or is invalid.
    """
    path = cache_path(student_id, cache_dir)

    # Never fetched before -> nothing cached
    if not path.exists():
        return None

    try:
        return _decode(path)
    except CacheReadError:
        return None


def is_outdated(entry: CacheEntry, cache_time_minutes: float, now: Optional[float] = None) -> bool:
    """
    True if the entry is older than cache_time_minutes.
    """
    current = now_minutes() if now is None else now
    return (current - entry.timestamp) > cache_time_minutes


def write_cache(
    student_id: str,
    events: Iterable[Event],
    cache_dir: str | Path,
    now: Optional[float] = None,
) -> Path:
    """
    Store the events for a student id together with the current time.

    Creates the cache directory if needed.
    """
    path = cache_path(student_id, cache_dir)
    payload = {
        "timestamp": now_minutes() if now is None else now,
        "data": [ev.to_dict() for ev in events],
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        raise CacheWriteError(f"Failed to write cache for {student_id}") from exc

    return path


def clear_cache(cache_dir: str | Path) -> int:
    """
    Empty the cache directory (it is created if missing).

    Returns the number of removed entries.
    """
    directory = Path(cache_dir)
    removed = 0

    try:
        directory.mkdir(parents=True, exist_ok=True)
        for child in directory.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
            removed += 1
    except OSError as exc:
        raise CacheWriteError(f"Could not clear cache in {directory}") from exc

    return removed
