"""Display of the registry's health status."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.text import Text

from .models import OverallHealth
from .tables import WIDTH_L, WIDTH_XXL, Column, green, print_table, red

HEALTH_COLUMNS = [
    Column("Component", WIDTH_L),
    Column("Status", WIDTH_XXL),
]


def style_status(status: str) -> Text:
    """Colour ``status`` green when healthy and red otherwise."""
    if status == "healthy":
        return green(status)
    return red(status)


def health_rows(status: OverallHealth) -> list[list[object]]:
    """Build one table row per component."""
    return [[component.name, style_status(component.status)] for component in status.components]


def print_health_status(status: OverallHealth, console: Optional[Console] = None) -> None:
    """Print the overall status followed by a table of components."""
    console = console or Console()
    console.print(Text.assemble("Harbor Health Status:: ", style_status(status.status)))
    print_table(HEALTH_COLUMNS, health_rows(status), console)