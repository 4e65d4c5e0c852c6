"""Tables and pickers for users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from .helpers import ValidationError, format_created_time
from .models import UserResp
from .selection import InputFunc, run_selection
from .tables import WIDTH_L, WIDTH_XS, WIDTH_XXL, Column, print_table

USER_COLUMNS = [
    Column("ID", WIDTH_XS),
    Column("Name", WIDTH_L),
    Column("Administrator", WIDTH_L),
    Column("Email", WIDTH_XXL),
    Column("Registration Time", WIDTH_L),
]


def _ago(moment: Optional[datetime], now: Optional[datetime]) -> str:
    try:
        return format_created_time(moment, now)
    except ValidationError:
        return ""


def user_rows(users: Sequence[UserResp], now: Optional[datetime] = None) -> list[list[str]]:
    """Build one table row per user."""
    return [
        [
            str(user.user_id),
            user.username,
            "Yes" if user.sysadmin_flag else "No",
            user.email,
            _ago(user.creation_time, now),
        ]
        for user in users
    ]


def list_users(users: Sequence[UserResp], console: Optional[Console] = None) -> None:
    """Print a table of users."""
    print_table(USER_COLUMNS, user_rows(users), console)


def select_user(users: Sequence[UserResp], input_func: Optional[InputFunc] = None) -> int:
    """Let the user pick a user by name; return the id, or 0 if none."""
    ids = {user.username: user.user_id for user in users}
    choice = run_selection([user.username for user in users], "User", input_func)
    return ids.get(choice, 0)