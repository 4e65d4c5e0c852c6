import io
from datetime import datetime, timedelta, timezone

from rich.console import Console

from harborcli.helpers import format_created_time
from harborcli.models import Registry
from harborcli.registry_views import (
    list_registries,
    registry_rows,
    select_registry,
    view_registry,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _console():
    return Console(file=io.StringIO(), width=200, color_system=None)


def _registries():
    return [
        Registry(id=11, name="hub", status="healthy", url="https://hub.example.com",
                 type="docker-hub", description="public hub",
                 creation_time=NOW - timedelta(minutes=30)),
        Registry(id=12, name="mirror", status="unhealthy", url="https://m.example.com",
                 type="harbor", creation_time=NOW - timedelta(days=2)),
    ]


def test_registry_rows_fields():
    registries = _registries()
    rows = registry_rows(registries, NOW)
    assert [row[:5] for row in rows] == [
        [str(r.id), r.name, r.status, r.url, r.type] for r in registries
    ]
    for registry, row in zip(registries, rows):
        assert row[5] == format_created_time(registry.creation_time, NOW)
    assert rows[0][5].endswith("minute ago")


def test_registry_rows_blank_time_when_missing():
    assert registry_rows([Registry(name="x")], NOW)[0][5] == ""


def test_list_registries_prints_each():
    console = _console()
    list_registries(_registries(), console)
    text = console.file.getvalue()
    assert "hub" in text and "mirror" in text
    assert "Endpoint URL" in text


def test_view_registry_includes_description():
    console = _console()
    view_registry(_registries()[0], console)
    text = console.file.getvalue()
    assert "public hub" in text
    assert "Description" in text
    assert "mirror" not in text


def test_select_registry_returns_id():
    registries = _registries()
    assert select_registry(registries, input_func=lambda prompt: "2") == registries[1].id
    assert select_registry(registries, input_func=lambda prompt: "") == registries[0].id


def test_select_registry_quit_gives_zero():
    assert select_registry(_registries(), input_func=lambda prompt: "q") == 0