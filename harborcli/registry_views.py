"""Tables and pickers for registry endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time
from .models import Registry
from .selection import InputFunc, run_selection
from .tables import WIDTH_L, WIDTH_M, WIDTH_XL, WIDTH_XS, WIDTH_XXL, Column, print_table

REGISTRY_LIST_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Name", WIDTH_M),
    Column("Status", WIDTH_M),
    Column("Endpoint URL", WIDTH_XXL),
    Column("Provider", WIDTH_M),
    Column("Creation Time", WIDTH_XXL),
]

REGISTRY_VIEW_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Name", WIDTH_M),
    Column("Status", WIDTH_M),
    Column("Endpoint URL", WIDTH_L),
    Column("Provider", WIDTH_L),
    Column("Creation Time", WIDTH_L),
    Column("Description", WIDTH_XL),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def registry_rows(registries: Sequence[Registry], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per registry."""
    return [
        [
            str(registry.id),
            registry.name,
            registry.status,
            registry.url,
            registry.type,
            _ago(registry.creation_time, now),
        ]
        for registry in registries
    ]


def list_registries(registries: Sequence[Registry], console: Optional[Console] = None) -> None:
    """Print a table of registries."""
    print_table(REGISTRY_LIST_COLUMNS, registry_rows(registries), console)


def view_registry(registry: Registry, console: Optional[Console] = None) -> None:
    """Print a table describing one registry, with its description."""
    row = registry_rows([registry])[0] + [registry.description]
    print_table(REGISTRY_VIEW_COLUMNS, [row], console)


def select_registry(registries: Sequence[Registry], input_func: Optional[InputFunc] = None) -> int:
    """Let the user pick a registry by name; return its id, or 0 if none."""
    ids = {registry.name: registry.id for registry in registries}
    choice = run_selection([registry.name for registry in registries], "Registry", input_func)
    return ids.get(choice, 0)