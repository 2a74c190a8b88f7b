"""
Output renderers (Grid -> text).

Every renderer follows the same three-phase protocol:

    renderer.init(header)                 # once
    renderer.emit_row(time_label, cells)  # once per hour, ascending
    renderer.finalize()                   # once

render_grid() drives that protocol, so a new output format only needs a
new Renderer subclass and never touches the grid building.
"""

from __future__ import annotations

import io
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from auskema.grid import HEADER, TIME_COLUMN, Grid


# Width taken by the table borders and by the time column (padding included)
FRAME_WIDTH = 7
TIME_COLUMN_WIDTH = 7
CELL_PADDING = 2

DEFAULT_BOX = "SQUARE"

# Wide enough that an auto-sized table never wraps
UNBOUNDED_WIDTH = 10_000


class Renderer(ABC):
    """Abstract output target for a rendered Grid."""

    @abstractmethod
    def init(self, header: list[str]) -> None:
        """Receive the header row: corner cell followed by the day names."""

    @abstractmethod
    def emit_row(self, time_label: str, cells: list[str]) -> None:
        """Receive one hour: its time label and one cell per day."""

    @abstractmethod
    def finalize(self) -> Optional[str]:
        """Finish the output. May return the rendered text."""


def terminal_width() -> Optional[int]:
    """
    Width of the attached terminal, or None when stdout is not a terminal.
    """
    console = Console()
    if not console.is_terminal:
        return None
    return console.width


def data_column_width(total_width: Optional[int], num_data_columns: int) -> Optional[int]:
    """
    Width available for each day column, or None to auto-size.

    Returns None for missing or unusable widths (too small to fit even
    one character per column).
    """
    if not isinstance(total_width, int) or isinstance(total_width, bool):
        return None
    if total_width <= 0 or num_data_columns <= 0:
        return None

    width = (total_width - FRAME_WIDTH - TIME_COLUMN_WIDTH) // num_data_columns
    if width - CELL_PADDING < 1:
        return None
    return width


def _box_style(name: str) -> box.Box:
    style = getattr(box, (name or "").upper(), None)
    if isinstance(style, box.Box):
        return style
    return getattr(box, DEFAULT_BOX)


class ConsoleRenderer(Renderer):
    """
    Bordered text table built with rich. finalize() returns the table.
    """

    def __init__(self, width: Optional[int] = None, box_name: str = DEFAULT_BOX) -> None:
        self._total_width = width
        self._box = _box_style(box_name)
        self._table: Optional[Table] = None
        self._column_width: Optional[int] = None

    def init(self, header: list[str]) -> None:
        num_data_columns = len(header) - 1
        self._column_width = data_column_width(self._total_width, num_data_columns)

        self._table = Table(box=self._box, show_lines=True)
        self._table.add_column(Text(header[TIME_COLUMN]), no_wrap=True)

        for title in header[1:]:
            if self._column_width is None:
                self._table.add_column(Text(title))
            else:
                self._table.add_column(
                    Text(title),
                    width=self._column_width - CELL_PADDING,
                    overflow="fold",
                )

    def emit_row(self, time_label: str, cells: list[str]) -> None:
        if self._table is None:
            raise RuntimeError("init() must be called before emit_row().")
        # Text() keeps labels literal (no rich markup in course names)
        self._table.add_row(Text(time_label), *(Text(c or "") for c in cells))

    def finalize(self) -> str:
        if self._table is None:
            raise RuntimeError("init() must be called before finalize().")

        width = UNBOUNDED_WIDTH if self._column_width is None else self._total_width
        out = io.StringIO()
        console = Console(
            file=out,
            width=width,
            color_system=None,
            force_terminal=False,
            highlight=False,
        )
        console.print(self._table)
        return out.getvalue().rstrip("\n")


def latex_cell(text: str) -> str:
    """
    Format one cell for a LaTeX tabular.

    - empty cell          -> {}
    - text with newlines  -> \\makecell[l]{line 1 \\\\ line 2}
    - anything else       -> unchanged
    """
    if not text:
        return "{}"
    if "\n" in text:
        return "\\makecell[l]{" + " \\\\ ".join(text.split("\n")) + "}"
    return text


LATEX_PREAMBLE = [
    "\\documentclass{standalone}",
    "\\usepackage[utf8]{inputenc}",
    "\\usepackage{makecell}",
    "\\begin{document}",
]

LATEX_CLOSING = [
    "\\end{tabular}",
    "\\end{document}",
]


class LatexRenderer(Renderer):
    """
    Standalone LaTeX document, written to the stream while rendering.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def _write_line(self, line: str) -> None:
        self._stream.write(line + "\n")

    def _write_row(self, cells: list[str]) -> None:
        self._write_line(" & ".join(latex_cell(c) for c in cells) + " \\\\ \\hline")

    def init(self, header: list[str]) -> None:
        for line in LATEX_PREAMBLE:
            self._write_line(line)
        columns = "|" + "|".join("l" for _ in header) + "|"
        self._write_line(f"\\begin{{tabular}}{{{columns}}}")
        self._write_line("\\hline")
        self._write_row(header)

    def emit_row(self, time_label: str, cells: list[str]) -> None:
        self._write_row([time_label] + list(cells))

    def finalize(self) -> None:
        for line in LATEX_CLOSING:
            self._write_line(line)
        self._stream.flush()


def render_grid(grid: Grid, renderer: Renderer) -> Optional[str]:
    """
    Feed a Grid through a Renderer and return what finalize() returns.
    """
    renderer.init(list(HEADER))
    for hour in grid.hours():
        row = grid.row(hour)
        renderer.emit_row(row[TIME_COLUMN], row[TIME_COLUMN + 1:])
    return renderer.finalize()


def select_renderer(
    latex: bool = False,
    width: Optional[int] = None,
    box_name: str = DEFAULT_BOX,
    stream: Optional[TextIO] = None,
) -> Renderer:
    """
    Pick the renderer for this run.

    width=0 means "use the terminal width"; without a terminal the console
    table auto-sizes.
    """
    if latex:
        return LatexRenderer(stream=stream)
    if width == 0:
        width = terminal_width()
    return ConsoleRenderer(width=width, box_name=box_name)
