"""Formatting, validation and parsing helpers shared by the command line views."""

from __future__ import annotations

import dataclasses
import enum
import json
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

import yaml


class ValidationError(ValueError):
    """Raised when user input or a value to format is not acceptable."""


_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(Z|[+-][0-9]{2}:[0-9]{2})"
)
_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_CONFIG_PATH = re.compile(r"[\w./-]{1,255}\.(yaml|yml)", re.ASCII)
_FIRST_LAST = re.compile(r"[A-Za-z]{1,20}[\t\n\f\r ][A-Za-z]{1,20}")
_TAG_NAME = re.compile(r"\w[\w.-]{0,127}", re.ASCII)
_PROJECT_NAME = re.compile(r"[a-z0-9][a-z0-9._-]{0,254}")
_REGISTRY_NAME = re.compile(r"\w[\w.-]{0,63}", re.ASCII)
_INTEGER = re.compile(r"[+-]?[0-9]+")
_SCHEME = re.compile(r"^https?://")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

_USERNAME_FORBIDDEN = ',"~#%$'
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _parse_timestamp(timestamp: str | datetime | None) -> datetime:
    if timestamp is None:
        raise ValidationError("no timestamp given")
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            return timestamp.replace(tzinfo=timezone.utc)
        return timestamp
    match = _RFC3339.fullmatch(timestamp)
    if match is None:
        raise ValidationError(f"cannot parse {timestamp!r} as an RFC 3339 timestamp")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int((fraction + "000000")[:6])
    zone = match.group(8)
    if zone == "Z":
        tzinfo = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        try:
            tzinfo = timezone(sign * offset)
        except ValueError as exc:
            raise ValidationError(f"invalid time zone offset in {timestamp!r}") from exc
    try:
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tzinfo)
    except ValueError as exc:
        raise ValidationError(f"cannot parse {timestamp!r}: {exc}") from exc


def format_created_time(timestamp: str | datetime | None, now: datetime | None = None) -> str:
    """Describe how long ago ``timestamp`` was, in minutes, hours or days."""
    moment = _parse_timestamp(timestamp)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = (now - moment).total_seconds()
    minutes = int(seconds / 60)
    hours = int(seconds / 3600)
    days = int(seconds / 3600 / 24)
    if minutes < 60:
        return f"{minutes} minute ago"
    if hours < 24:
        return f"{hours} hour ago"
    return f"{days} day ago"


def format_url(url: str) -> str:
    """Add an https scheme when none is given and drop trailing slashes."""
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url.rstrip("/")


def format_size(size: int) -> str:
    """Render a byte count in mebibytes with two decimals."""
    return f"{size / (1024 * 1024):.2f}MiB"


def validate_user_name(username: str) -> bool:
    """Check the length and characters of a user name."""
    username = username.strip()
    length = len(username.encode("utf-8"))
    return 1 <= length <= 255 and not any(ch in _USERNAME_FORBIDDEN for ch in username)


def validate_email(email: str) -> bool:
    return _EMAIL.fullmatch(email) is not None


def validate_config_path(config_path: str) -> bool:
    return _CONFIG_PATH.fullmatch(config_path) is not None


def validate_fl(name: str) -> bool:
    """Check that ``name`` is a first and last name separated by one blank."""
    return _FIRST_LAST.fullmatch(name) is not None


def validate_password(password: str) -> str:
    """Return the password if it meets the strength rules, else raise."""
    length = len(password.encode("utf-8"))
    if length < 8 or length > 256:
        raise ValidationError(
            "worong! the password length must be at least 8 characters and at most 256 characters"
        )
    if re.search(r"[a-z]", password) is None:
        raise ValidationError("worong! the password doesn't have a lowercase letter")
    if re.search(r"[A-Z]", password) is None:
        raise ValidationError("worong! the password doesn't have an upppercase letter")
    if re.search(r"[0-9]", password) is None:
        raise ValidationError("worong! the password doesn't have a digit number")
    return password


def validate_tag_name(tag_name: str) -> bool:
    return _TAG_NAME.fullmatch(tag_name) is not None


def validate_project_name(project_name: str) -> bool:
    return _PROJECT_NAME.fullmatch(project_name) is not None


def validate_storage_limit(sl: str) -> int:
    """Return the storage limit as an integer, -1 meaning no limit."""
    if _INTEGER.fullmatch(sl) is None:
        raise ValidationError("the storage limit only takes integer values")
    limit = int(sl)
    if not _INT64_MIN <= limit <= _INT64_MAX:
        raise ValidationError("the storage limit only takes integer values")
    if limit < -1 or limit > 1024:
        raise ValidationError(
            "the maximum value for the storage cannot exceed 1024 terabytes and -1 for no limit"
        )
    return limit


def validate_registry_name(rn: str) -> bool:
    return _REGISTRY_NAME.fullmatch(rn) is not None


def _to_plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, type):
        return _to_plain(to_dict())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: _to_plain(getattr(value, field.name)) for field in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(key): _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_plain(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return _to_plain(value.value)
    return value


def print_payload_json(payload: Any) -> None:
    """Print ``payload`` as indented JSON; print nothing for None."""
    if payload is None:
        return
    print(json.dumps(_to_plain(payload), indent=2, ensure_ascii=False))


def print_payload_yaml(payload: Any) -> None:
    """Print ``payload`` as YAML; print nothing for None."""
    if payload is None:
        return
    print(yaml.safe_dump(_to_plain(payload), sort_keys=False, allow_unicode=True))


def print_format(resp: Any, format: str) -> None:
    """Print ``resp`` in the named output format, ``json`` or ``yaml``."""
    if format == "json":
        print_payload_json(resp)
    elif format == "yaml":
        print_payload_yaml(resp)
    else:
        raise ValidationError(f"unable to output in the specified '{format}' format")


def parse_project_repo(project_repo: str) -> tuple[str, str]:
    """Split ``project/repository`` at the first slash."""
    parts = project_repo.split("/", 1)
    if len(parts) != 2:
        raise ValidationError(f"invalid project/repository format: {project_repo}")
    return parts[0], parts[1]


def parse_project_repo_reference(project_repo_reference: str) -> tuple[str, str, str]:
    """Split ``project/repository/reference`` into its three parts."""
    parts = project_repo_reference.split("/")
    if len(parts) != 3:
        raise ValidationError(
            f"invalid project/repository/reference format: {project_repo_reference}"
        )
    return parts[0], parts[1], parts[2]


def sanitize_server_address(server: str) -> str:
    """Strip the scheme and replace every non-alphanumeric character by a dash."""
    server = _SCHEME.sub("", server)
    return _NON_ALNUM.sub("-", server)