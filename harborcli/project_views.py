"""Tables and pickers for projects and their audit logs."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time
from .models import AuditLog, Project
from .selection import InputFunc, run_selection
from .tables import WIDTH_L, WIDTH_M, WIDTH_S, WIDTH_XS, WIDTH_XXL, Column, print_table

PROJECT_LIST_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Project Name", WIDTH_XXL),
    Column("Access Level", WIDTH_L),
    Column("Type", WIDTH_L),
    Column("Repo Count", WIDTH_S),
    Column("Creation Time", WIDTH_L),
]

PROJECT_VIEW_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Project Name", WIDTH_M),
    Column("Access Level", WIDTH_M),
    Column("Type", WIDTH_M),
    Column("Repo Count", WIDTH_M),
    Column("Creation Time", WIDTH_L),
]

AUDIT_LOG_COLUMNS = [
    Column("Username", WIDTH_M),
    Column("Resource", WIDTH_XXL),
    Column("Resource Type", WIDTH_M),
    Column("Operation", WIDTH_M),
    Column("Timestamp", WIDTH_L * 2),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def _access_level(project: Project) -> str:
    return "public" if project.metadata.get("public") == "true" else "private"


def _project_type(project: Project) -> str:
    return "proxy cache" if project.registry_id != 0 else "project"


def project_rows(projects: Sequence[Project], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per project."""
    return [
        [
            str(project.project_id),
            project.name,
            _access_level(project),
            _project_type(project),
            str(project.repo_count),
            _ago(project.creation_time, now),
        ]
        for project in projects
    ]


def list_projects(projects: Sequence[Project], console: Optional[Console] = None) -> None:
    """Print a table of projects."""
    print_table(PROJECT_LIST_COLUMNS, project_rows(projects), console)


def search_projects(projects: Sequence[Project], console: Optional[Console] = None) -> None:
    """Print a table of projects found by a search."""
    print_table(PROJECT_LIST_COLUMNS, project_rows(projects), console)


def view_project(project: Project, console: Optional[Console] = None) -> None:
    """Print a table describing one project."""
    print_table(PROJECT_VIEW_COLUMNS, project_rows([project]), console)


def audit_log_rows(logs: Sequence[AuditLog], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per audit log entry."""
    return [
        [entry.username, entry.resource, entry.resource_type, entry.operation, _ago(entry.op_time, now)]
        for entry in logs
    ]


def logs_project(logs: Sequence[AuditLog], console: Optional[Console] = None) -> None:
    """Print a table of a project's audit log entries."""
    print_table(AUDIT_LOG_COLUMNS, audit_log_rows(logs), console)


def select_project(projects: Sequence[Project], input_func: Optional[InputFunc] = None) -> str:
    """Let the user pick a project; return its name, or "" if none."""
    return run_selection([project.name for project in projects], "Project", input_func)