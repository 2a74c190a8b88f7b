"""
Tests for the console and LaTeX renderers.

Both renderers receive the same protocol calls from render_grid():
header once, one row per hour, then finalize().
"""

import io
import re
import unittest
from unittest.mock import MagicMock, patch

from auskema.grid import build_grid
from auskema.model import Event
from auskema.render import (
    ConsoleRenderer,
    LatexRenderer,
    Renderer,
    data_column_width,
    latex_cell,
    render_grid,
    select_renderer,
    terminal_width,
)


SCENARIO_A = [Event(day=1, start=10, end=12, text="DB")]

TIME_RE = re.compile(r"^\d\d:00$")


def console_rows(table: str) -> dict[str, list[str]]:
    """
    Extract {time_label: [cells...]} from a single-line-per-row console table.
    """
    rows: dict[str, list[str]] = {}
    for line in table.splitlines():
        if "│" not in line:
            continue
        cells = [c.strip() for c in line.split("│")[1:-1]]
        if cells and TIME_RE.match(cells[0]):
            rows[cells[0]] = cells[1:]
    return rows


def latex_rows(document: str) -> dict[str, list[str]]:
    """
    Extract {time_label: [cells...]} from a LaTeX document, formatting removed.
    """
    rows: dict[str, list[str]] = {}
    for line in document.splitlines():
        if not line.endswith(" \\\\ \\hline"):
            continue
        cells = [strip_latex(c) for c in line[: -len(" \\\\ \\hline")].split(" & ")]
        if TIME_RE.match(cells[0]):
            rows[cells[0]] = cells[1:]
    return rows


def strip_latex(cell: str) -> str:
    if cell == "{}":
        return ""
    if cell.startswith("\\makecell[l]{") and cell.endswith("}"):
        return cell[len("\\makecell[l]{"):-1].replace(" \\\\ ", "\n")
    return cell


class TestConsoleRenderer(unittest.TestCase):
    def test_scenario_a_rows(self) -> None:
        out = render_grid(build_grid(SCENARIO_A), ConsoleRenderer())

        self.assertIn("Monday", out)
        self.assertIn("Friday", out)
        rows = console_rows(out)
        self.assertEqual(sorted(rows), ["10:00", "11:00"])
        self.assertEqual(rows["10:00"], ["DB", "", "", "", ""])
        self.assertEqual(rows["11:00"], ["DB", "", "", "", ""])
        self.assertNotIn("12:00", out)

    def test_auto_size_keeps_long_labels_on_one_line(self) -> None:
        events = [Event(day=2, start=9, end=10, text="Introduction to Programming Languages")]
        out = render_grid(build_grid(events), ConsoleRenderer())

        self.assertIn("Introduction to Programming Languages", out)

    def test_explicit_width_constrains_columns(self) -> None:
        events = [Event(day=2, start=9, end=10, text="Introduction to Programming Languages")]
        out = render_grid(build_grid(events), ConsoleRenderer(width=60))

        for line in out.splitlines():
            self.assertLessEqual(len(line), 60)
        self.assertNotIn("Introduction to Programming Languages", out)
        self.assertIn("Intro", out)

    def test_malformed_width_falls_back_to_auto_size(self) -> None:
        for width in (-5, 3, 20):
            out = render_grid(build_grid(SCENARIO_A), ConsoleRenderer(width=width))
            self.assertEqual(console_rows(out)["10:00"][0], "DB")
            self.assertIn("Wednesday", out)

    def test_empty_grid_renders_header_only(self) -> None:
        out = render_grid(build_grid([]), ConsoleRenderer())

        self.assertIn("Monday", out)
        self.assertEqual(console_rows(out), {})

    def test_labels_are_not_rich_markup(self) -> None:
        events = [Event(day=1, start=8, end=9, text="[bold]Stats[/bold]")]
        out = render_grid(build_grid(events), ConsoleRenderer())

        self.assertIn("[bold]Stats[/bold]", out)

    def test_unknown_box_name_still_renders(self) -> None:
        out = render_grid(build_grid(SCENARIO_A), ConsoleRenderer(box_name="does-not-exist"))

        self.assertEqual(console_rows(out)["11:00"][0], "DB")


class TestWidth(unittest.TestCase):
    def test_data_column_width(self) -> None:
        self.assertEqual(data_column_width(80, 5), 13)
        self.assertEqual(data_column_width(60, 5), 9)

    def test_unusable_widths(self) -> None:
        self.assertIsNone(data_column_width(None, 5))
        self.assertIsNone(data_column_width(0, 5))
        self.assertIsNone(data_column_width(-10, 5))
        self.assertIsNone(data_column_width(20, 5))
        self.assertIsNone(data_column_width(80, 0))

    def test_width_zero_without_terminal_auto_sizes(self) -> None:
        with patch("auskema.render.terminal_width", return_value=None):
            renderer = select_renderer(width=0)
            out = render_grid(build_grid(SCENARIO_A), renderer)

        self.assertIsInstance(renderer, ConsoleRenderer)
        self.assertEqual(console_rows(out)["10:00"][0], "DB")

    def test_width_zero_uses_terminal_width(self) -> None:
        events = [Event(day=2, start=9, end=10, text="Introduction to Programming Languages")]
        with patch("auskema.render.terminal_width", return_value=70):
            out = render_grid(build_grid(events), select_renderer(width=0))

        for line in out.splitlines():
            self.assertLessEqual(len(line), 70)

    def test_terminal_width_none_without_terminal(self) -> None:
        fake = MagicMock(is_terminal=False, width=80)
        with patch("auskema.render.Console", return_value=fake):
            self.assertIsNone(terminal_width())

    def test_terminal_width_from_terminal(self) -> None:
        fake = MagicMock(is_terminal=True, width=132)
        with patch("auskema.render.Console", return_value=fake):
            self.assertEqual(terminal_width(), 132)


class TestLatexRenderer(unittest.TestCase):
    def _render(self, events: list[Event]) -> str:
        stream = io.StringIO()
        result = render_grid(build_grid(events), LatexRenderer(stream=stream))
        self.assertIsNone(result)
        return stream.getvalue()

    def test_scenario_a_document(self) -> None:
        expected = "\n".join(
            [
                r"\documentclass{standalone}",
                r"\usepackage[utf8]{inputenc}",
                r"\usepackage{makecell}",
                r"\begin{document}",
                r"\begin{tabular}{|l|l|l|l|l|l|}",
                r"\hline",
                r"{} & Monday & Tuesday & Wednesday & Thursday & Friday \\ \hline",
                r"10:00 & DB & {} & {} & {} & {} \\ \hline",
                r"11:00 & DB & {} & {} & {} & {} \\ \hline",
                r"\end{tabular}",
                r"\end{document}",
            ]
        )
        self.assertEqual(self._render(SCENARIO_A), expected + "\n")

    def test_newline_becomes_makecell_line_break(self) -> None:
        doc = self._render([Event(day=3, start=9, end=10, text="Databases\nLecture")])

        self.assertIn(r"\makecell[l]{Databases \\ Lecture}", doc)
        self.assertNotIn("Databases\nLecture", doc)

    def test_empty_grid_is_still_a_document(self) -> None:
        doc = self._render([])

        self.assertIn(r"\begin{tabular}", doc)
        self.assertTrue(doc.endswith("\\end{document}\n"))
        self.assertEqual(latex_rows(doc), {})

    def test_output_is_streamed_before_finalize(self) -> None:
        stream = io.StringIO()
        renderer = LatexRenderer(stream=stream)
        renderer.init(["", "Monday"])
        renderer.emit_row("08:00", ["Math"])

        self.assertIn("08:00 & Math", stream.getvalue())
        self.assertNotIn(r"\end{document}", stream.getvalue())

    def test_latex_cell(self) -> None:
        self.assertEqual(latex_cell(""), "{}")
        self.assertEqual(latex_cell("DB"), "DB")
        self.assertEqual(latex_cell("a\nb\nc"), r"\makecell[l]{a \\ b \\ c}")


class TestRendererAgreement(unittest.TestCase):
    def test_console_and_latex_agree_on_cells(self) -> None:
        events = [
            Event(day=1, start=9, end=11, text="A"),
            Event(day=1, start=10, end=12, text="B"),
            Event(day=3, start=8, end=10, text="Compilers"),
            Event(day=5, start=13, end=15, text="Lab"),
        ]
        grid = build_grid(events)

        table = render_grid(grid, ConsoleRenderer())
        stream = io.StringIO()
        render_grid(grid, LatexRenderer(stream=stream))

        self.assertEqual(console_rows(table), latex_rows(stream.getvalue()))

    def test_latex_cells_match_grid_with_line_breaks(self) -> None:
        events = [Event(day=2, start=10, end=12, text="Data\nBases\nRoom 5")]
        grid = build_grid(events)
        stream = io.StringIO()
        render_grid(grid, LatexRenderer(stream=stream))
        rows = latex_rows(stream.getvalue())

        for hour in grid.hours():
            row = grid.row(hour)
            self.assertEqual(rows[row[0]], row[1:])


class TestCustomRenderer(unittest.TestCase):
    def test_new_renderer_gets_protocol_calls(self) -> None:
        calls: list[tuple] = []

        class Recorder(Renderer):
            def init(self, header: list[str]) -> None:
                calls.append(("init", header))

            def emit_row(self, time_label: str, cells: list[str]) -> None:
                calls.append(("row", time_label, list(cells)))

            def finalize(self) -> str:
                calls.append(("finalize",))
                return "done"

        result = render_grid(build_grid(SCENARIO_A), Recorder())

        self.assertEqual(result, "done")
        self.assertEqual(calls[0][0], "init")
        self.assertEqual(calls[1], ("row", "10:00", ["DB", "", "", "", ""]))
        self.assertEqual(calls[2], ("row", "11:00", ["DB", "", "", "", ""]))
        self.assertEqual(calls[3], ("finalize",))

    def test_select_renderer_latex(self) -> None:
        self.assertIsInstance(select_renderer(latex=True, stream=io.StringIO()), LatexRenderer)


if __name__ == "__main__":
    unittest.main()
