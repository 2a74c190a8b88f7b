"""
User-facing status messages.

All messages go to stderr with a timestamp prefix, e.g.

    19/10/2026 14:05: 201512345 loaded from cache.

stdout is reserved for the rendered table / LaTeX document, so the
output can be redirected into a file.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.text import Text


console = Console(stderr=True, highlight=False)


def timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return now.strftime("%d/%m/%Y %H:%M")


def info(msg: str) -> None:
    console.print(Text(f"{timestamp()}: {msg}"))


def warn(msg: str) -> None:
    console.print(Text(f"{timestamp()}: {msg}", style="yellow"))
