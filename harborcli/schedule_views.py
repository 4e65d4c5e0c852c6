"""Table of scheduled jobs."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time
from .models import ScheduleTask
from .tables import WIDTH_L, WIDTH_XL, WIDTH_XS, Column, print_table

SCHEDULE_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Cron", WIDTH_L),
    Column("Vendor Type", WIDTH_XL),
    Column("Update Time", WIDTH_XL),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def schedule_rows(schedules: Sequence[ScheduleTask], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per scheduled task."""
    return [
        [str(task.id), task.cron, task.vendor_type, _ago(task.update_time, now)]
        for task in schedules
    ]


def list_schedules(schedules: Sequence[ScheduleTask], console: Optional[Console] = None) -> None:
    """Print a table of scheduled tasks."""
    print_table(SCHEDULE_COLUMNS, schedule_rows(schedules), console)