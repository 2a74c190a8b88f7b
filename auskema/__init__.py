"""auskema: weekly AU class schedule in the terminal or as LaTeX."""

from pathlib import Path


def _read_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"


__version__ = _read_version()
