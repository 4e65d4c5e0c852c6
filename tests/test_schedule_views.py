import io
from datetime import datetime, timedelta, timezone

from rich.console import Console

from harborcli.models import ScheduleTask
from harborcli.schedule_views import list_schedules, schedule_rows

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _tasks():
    return [
        ScheduleTask(id=2, cron="0 0 * * * *", vendor_type="GARBAGE_COLLECTION",
                     update_time=NOW - timedelta(minutes=5)),
        ScheduleTask(id=8, cron="0 0 0 * * 0", vendor_type="SCAN_ALL"),
    ]


def test_schedule_rows_fields():
    rows = schedule_rows(_tasks(), NOW)
    assert rows[0][:3] == ["2", "0 0 * * * *", "GARBAGE_COLLECTION"]
    assert rows[0][3] == "5 minute ago"


def test_schedule_rows_missing_time():
    rows = schedule_rows(_tasks(), NOW)
    assert rows[1] == ["8", "0 0 0 * * 0", "SCAN_ALL", ""]


def test_schedule_rows_empty():
    assert schedule_rows([], NOW) == []


def test_list_schedules_prints():
    buffer = io.StringIO()
    list_schedules(_tasks(), Console(file=buffer, width=200, color_system=None))
    text = buffer.getvalue()
    assert "SCAN_ALL" in text
    assert "Vendor Type" in text