"""
Configuration (config.json -> Config).

The file lives next to the package by default:

    auskema/config.json

Only known keys are read; unknown keys and values of the wrong type are
ignored, and a missing or broken file gives the defaults. Loading the
configuration never crashes the application.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any


PACKAGE_DIR = Path(__file__).resolve().parent


def _default_config_path() -> Path:
    return PACKAGE_DIR / "config.json"


def _default_cache_dir() -> Path:
    return PACKAGE_DIR / "cache"


@dataclass
class Config:
    default_source: str = "lukasj"
    studentid_min_length: int = 9
    cache: bool = True
    cache_time_minutes: float = 1440.0
    cache_dir: Path = field(default_factory=_default_cache_dir)
    table_box: str = "SQUARE"
    request_timeout_seconds: float = 30.0
    json_host: str = "http://foo.bar/"


def _coerce(default: Any, value: Any) -> Any:
    """
    Return value converted to the type of the default, or None if it does not fit.
    """
    if isinstance(default, bool):
        return value if isinstance(value, bool) else None
    if isinstance(default, Path):
        return Path(value).expanduser() if isinstance(value, str) and value.strip() else None
    if isinstance(default, int) and not isinstance(default, bool):
        return value if isinstance(value, int) and not isinstance(value, bool) else None
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return None
    if isinstance(default, str):
        return value.strip() if isinstance(value, str) and value.strip() else None
    return None


def config_from_dict(data: dict[str, Any]) -> Config:
    """
    Merge known keys of data over the defaults.
    """
    config = Config()
    for f in fields(Config):
        if f.name not in data:
            continue
        value = _coerce(getattr(config, f.name), data[f.name])
        if value is not None:
            setattr(config, f.name, value)
    return config


def load_config(path: str | Path | None = None) -> Config:
    """
    Load the configuration from a JSON file.

    Returns the defaults if the file does not exist or is invalid.
    """
    config_path = Path(path) if path is not None else _default_config_path()

    if not config_path.exists():
        return Config()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return Config()

    if not isinstance(data, dict):
        return Config()

    return config_from_dict(data)
