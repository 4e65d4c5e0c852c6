"""Tables and pickers for labels."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time
from .models import Label
from .selection import InputFunc, run_selection
from .tables import WIDTH_L, WIDTH_M, WIDTH_XL, WIDTH_XS, Column, print_table

LABEL_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Name", WIDTH_M),
    Column("Color", WIDTH_M),
    Column("Description", WIDTH_XL),
    Column("Creation Time", WIDTH_L),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def label_rows(labels: Sequence[Label], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per label."""
    return [
        [
            str(label.id),
            label.name,
            label.color,
            label.description,
            _ago(label.creation_time, now),
        ]
        for label in labels
    ]


def list_labels(labels: Sequence[Label], console: Optional[Console] = None) -> None:
    """Print a table of labels."""
    print_table(LABEL_COLUMNS, label_rows(labels), console)


def select_label(labels: Sequence[Label], input_func: Optional[InputFunc] = None) -> int:
    """Let the user pick a label by name; return its id, or 0 if none."""
    ids = {label.name: label.id for label in labels}
    choice = run_selection([label.name for label in labels], "Label", input_func)
    return ids.get(choice, 0)