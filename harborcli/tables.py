"""Bordered tables and colour styles used by the list and view commands."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

WIDTH_XS = 4
WIDTH_S = 8
WIDTH_M = 12
WIDTH_L = 16
WIDTH_XL = 20
WIDTH_XXL = 24

GREEN_COLOR = "#04B575"
RED_COLOR = "#FF0000"

Cell = Union[str, Text]


@dataclass(frozen=True)
class Column:
    """A table column: its heading and fixed width in characters."""

    title: str
    width: int


def green(text: str) -> Text:
    """Return ``text`` styled in the success colour."""
    return Text(text, style=GREEN_COLOR)


def red(text: str) -> Text:
    """Return ``text`` styled in the failure colour."""
    return Text(text, style=RED_COLOR)


def _as_text(cell: Cell) -> Text:
    if isinstance(cell, Text):
        return cell
    return Text(str(cell))


def _build_table(columns: Sequence[Column], rows: Sequence[Sequence[Cell]]) -> Table:
    table = Table(
        box=box.SQUARE,
        show_header=True,
        header_style="none",
        show_edge=True,
        padding=(0, 1),
    )
    for column in columns:
        table.add_column(
            column.title,
            width=column.width,
            no_wrap=True,
            overflow="ellipsis",
        )
    for row in rows:
        table.add_row(*(_as_text(cell) for cell in row))
    return table


def _natural_width(columns: Sequence[Column]) -> int:
    return sum(column.width for column in columns) + 3 * len(columns) + 1


@dataclass
class TableList:
    """A table of rows shown once, each cell cut to its column's width."""

    columns: list[Column]
    rows: list[list[Cell]]
    height: Optional[int] = None

    def __post_init__(self) -> None:
        if self.height is None:
            self.height = len(self.rows)

    def render(self) -> str:
        """Return the table as plain text without colours."""
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=max(_natural_width(self.columns), 20),
            color_system=None,
            force_terminal=False,
            legacy_windows=False,
        )
        console.print(_build_table(self.columns, self.rows))
        return buffer.getvalue()


def render_table(columns: Sequence[Column], rows: Sequence[Sequence[Cell]]) -> str:
    """Render ``rows`` under ``columns`` as plain text."""
    return TableList(list(columns), [list(row) for row in rows]).render()


def print_table(
    columns: Sequence[Column],
    rows: Sequence[Sequence[Cell]],
    console: Optional[Console] = None,
) -> None:
    """Print ``rows`` under ``columns`` to ``console`` or the terminal."""
    (console or Console()).print(_build_table(columns, rows))