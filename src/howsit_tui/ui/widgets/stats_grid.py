from collections.abc import Iterable, Sequence
from itertools import groupby

from rich.text import Text
from textual.widgets import Static

from howsit_tui.ui.screens.dashboard import COLUMN_LAYOUT, STYLE_HEADER, STYLE_LABEL, STYLE_WARNING, Cell, Column


CELL_STYLES: dict[str, str] = {
    STYLE_HEADER: "bold",
    STYLE_LABEL: "bold reverse",
    STYLE_WARNING: "bold yellow",
}


def paint_cells(cells: Iterable[Cell], layout: Sequence[Column] = COLUMN_LAYOUT) -> Text:
    """Lay cells out on a fixed-width grid, one line per row."""
    output = Text()
    ordered = sorted(cells, key=lambda cell: (cell.row, cell.column))
    next_row = 0
    for row, row_cells in groupby(ordered, key=lambda cell: cell.row):
        while next_row < row:
            output.append("\n")
            next_row += 1
        line = Text()
        for cell in row_cells:
            offset = layout[cell.column].offset
            if len(line) < offset:
                line.append(" " * (offset - len(line)))
            elif len(line) > 0:
                line.append(" ")
            line.append(cell.text, style=CELL_STYLES.get(cell.style, ""))
        output.append_text(line)
    return output


class StatsGrid(Static):
    def paint(self, cells: Iterable[Cell]) -> None:
        self.update(paint_cells(cells))
