"""Tables and pickers for artifacts and their tags."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time, format_size
from .models import Artifact, Tag
from .selection import InputFunc, run_selection
from .tables import WIDTH_L, WIDTH_S, WIDTH_XL, WIDTH_XS, Column, print_table

ARTIFACT_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Artifact Digest", WIDTH_XL),
    Column("Type", WIDTH_S),
    Column("Size", WIDTH_S),
    Column("Vulnerabilities", WIDTH_L),
    Column("Push Time", WIDTH_L),
]

TAG_COLUMNS = [
    Column("Name", WIDTH_L),
    Column("Pull Time", WIDTH_L),
    Column("Push Time", WIDTH_L),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def artifact_rows(artifacts: Sequence[Artifact], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per artifact."""
    return [
        [
            str(artifact.id),
            artifact.digest[:16],
            artifact.type,
            format_size(artifact.size),
            str(artifact.total_vulnerabilities()),
            _ago(artifact.push_time, now),
        ]
        for artifact in artifacts
    ]


def list_artifacts(artifacts: Sequence[Artifact], console: Optional[Console] = None) -> None:
    """Print a table of artifacts."""
    print_table(ARTIFACT_COLUMNS, artifact_rows(artifacts), console)


def view_artifact(artifact: Artifact, console: Optional[Console] = None) -> None:
    """Print a table describing one artifact."""
    print_table(ARTIFACT_COLUMNS, artifact_rows([artifact]), console)


def select_artifact(artifacts: Sequence[Artifact], input_func: Optional[InputFunc] = None) -> str:
    """Let the user pick an artifact; return its digest, or "" if none."""
    return run_selection([artifact.digest for artifact in artifacts], "Artifact", input_func)


def tag_rows(tags: Sequence[Tag], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per tag."""
    return [[tag.name, _ago(tag.pull_time, now), _ago(tag.push_time, now)] for tag in tags]


def list_tags(tags: Sequence[Tag], console: Optional[Console] = None) -> None:
    """Print a table of tags."""
    print_table(TAG_COLUMNS, tag_rows(tags), console)


def select_tag(tags: Sequence[Tag], input_func: Optional[InputFunc] = None) -> str:
    """Let the user pick a tag; return its name, or "" if none."""
    return run_selection([tag.name for tag in tags], "Tag", input_func)