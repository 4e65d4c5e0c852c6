import io
from datetime import datetime, timedelta, timezone

from rich.console import Console

from harborcli.helpers import format_created_time
from harborcli.models import Repository, SearchRepository
from harborcli.repository_views import (
    list_repositories,
    repository_rows,
    search_repositories,
    search_repository_rows,
    select_repository,
    view_repository,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _console():
    return Console(file=io.StringIO(), width=250, color_system=None)


def _repos():
    return [
        Repository(id=21, name="library/nginx", project_id=1, artifact_count=4, pull_count=40,
                   description="web server", creation_time=NOW - timedelta(days=10),
                   update_time=NOW - timedelta(hours=1)),
        Repository(id=22, name="team/app/api", project_id=2, artifact_count=1, pull_count=2,
                   update_time=NOW - timedelta(minutes=3)),
    ]


def test_repository_rows_fields():
    repos = _repos()
    rows = repository_rows(repos, NOW)
    for repo, row in zip(repos, rows):
        assert row[:3] == [repo.name, str(repo.artifact_count), str(repo.pull_count)]
        assert row[3] == format_created_time(repo.update_time, NOW)
    assert rows[0][3].endswith("hour ago")


def test_repository_rows_missing_time_blank():
    assert repository_rows([Repository(name="p/r")], NOW)[0][3] == ""


def test_list_repositories_prints_names():
    console = _console()
    list_repositories(_repos(), console)
    text = console.file.getvalue()
    assert "library/nginx" in text and "team/app/api" in text


def test_search_repository_rows_access_level():
    results = [
        SearchRepository(repository_name="library/nginx", project_id=1, project_name="library",
                         project_public=True, artifact_count=4, pull_count=40),
        SearchRepository(repository_name="team/app", project_id=2, project_name="team"),
    ]
    rows = search_repository_rows(results)
    assert rows[0] == ["library/nginx", "1", "library", "public", "4", "40"]
    assert rows[1][3] == "private"
    console = _console()
    search_repositories(results, console)
    assert "team/app" in console.file.getvalue()


def test_view_repository_prints_description():
    console = _console()
    view_repository(_repos()[0], console)
    text = console.file.getvalue()
    assert "web server" in text
    assert "library/nginx" in text
    assert "team/app/api" not in text


def test_select_repository_strips_project():
    repos = _repos()
    assert select_repository(repos, input_func=lambda prompt: "1") == "nginx"
    assert select_repository(repos, input_func=lambda prompt: "2") == "app/api"


def test_select_repository_quit_returns_empty():
    assert select_repository(_repos(), input_func=lambda prompt: "q") == ""