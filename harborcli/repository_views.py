"""Tables and pickers for repositories."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time
from .models import Repository, SearchRepository
from .selection import InputFunc, run_selection
from .tables import WIDTH_L, WIDTH_M, WIDTH_XL, WIDTH_XS, WIDTH_XXL, Column, print_table

REPOSITORY_LIST_COLUMNS = [
    Column("Name", WIDTH_XXL),
    Column("Artifacts", WIDTH_M),
    Column("Pulls", WIDTH_M),
    Column("Last Modified Time", WIDTH_L * 2),
]

REPOSITORY_SEARCH_COLUMNS = [
    Column("Repository Name", WIDTH_L * 2),
    Column("Project Id", WIDTH_M),
    Column("Project Name", WIDTH_L),
    Column("Access Level", WIDTH_M),
    Column("Artifact Count", WIDTH_L),
    Column("Pull Count", WIDTH_M),
]

REPOSITORY_VIEW_COLUMNS = [
    Column("Name", WIDTH_XL),
    Column("ID", WIDTH_M),
    Column("Project ID", WIDTH_M),
    Column("Artifacts", WIDTH_M),
    Column("Pulls", WIDTH_XS),
    Column("Creation Time", WIDTH_XL),
    Column("Last Modified Time", WIDTH_XL),
    Column("Description", WIDTH_XL),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def repository_rows(repos: Sequence[Repository], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per repository."""
    return [
        [repo.name, str(repo.artifact_count), str(repo.pull_count), _ago(repo.update_time, now)]
        for repo in repos
    ]


def list_repositories(repos: Sequence[Repository], console: Optional[Console] = None) -> None:
    """Print a table of repositories."""
    print_table(REPOSITORY_LIST_COLUMNS, repository_rows(repos), console)


def search_repository_rows(repos: Sequence[SearchRepository]) -> list[list[str]]:
    """Build one table row per repository search result."""
    return [
        [
            repo.repository_name,
            str(repo.project_id),
            repo.project_name,
            "public" if repo.project_public else "private",
            str(repo.artifact_count),
            str(repo.pull_count),
        ]
        for repo in repos
    ]


def search_repositories(repos: Sequence[SearchRepository], console: Optional[Console] = None) -> None:
    """Print a table of repository search results."""
    print_table(REPOSITORY_SEARCH_COLUMNS, search_repository_rows(repos), console)


def _view_row(repo: Repository, now: Optional[datetime] = None) -> list[str]:
    return [
        repo.name,
        str(repo.id),
        str(repo.project_id),
        str(repo.artifact_count),
        str(repo.pull_count),
        _ago(repo.creation_time, now),
        _ago(repo.update_time, now),
        repo.description,
    ]


def view_repository(repo: Repository, console: Optional[Console] = None) -> None:
    """Print a table describing one repository."""
    print_table(REPOSITORY_VIEW_COLUMNS, [_view_row(repo)], console)


def select_repository(repos: Sequence[Repository], input_func: Optional[InputFunc] = None) -> str:
    """Let the user pick a repository; return its name without the project part."""
    names = ["/".join(repo.name.split("/")[1:]) for repo in repos]
    return run_selection(names, "Repository", input_func)