"""Forms for logging in, creating users and creating tags."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from .helpers import (
    ValidationError,
    format_url,
    sanitize_server_address,
    validate_email,
    validate_fl,
    validate_password,
    validate_tag_name,
    validate_user_name,
)
from .models import LoginView, UserCreateView
from .selection import InputFunc, ask_text


def default_credential_name(username: str, server: str) -> str:
    """Name a credential after its user and server, e.g. ``admin@host-name``."""
    return f"{username}@{sanitize_server_address(server)}"


def _is_request_uri(url: str) -> bool:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError:
        return False
    host = parts.netloc.rpartition("@")[2]
    return " " not in host


def validate_server(value: str) -> str:
    """Check a server address and return it with a scheme added."""
    if not value.strip():
        raise ValidationError("server cannot be empty or only spaces")
    formatted = format_url(value)
    if not _is_request_uri(formatted):
        raise ValidationError("please enter the correct server format")
    return formatted


def validate_login_username(value: str) -> str:
    if not value.strip():
        raise ValidationError("username cannot be empty or only spaces")
    if not validate_user_name(value):
        raise ValidationError("please enter correct username format")
    return value


def validate_login_password(value: str) -> str:
    if not value.strip():
        raise ValidationError("password cannot be empty or only spaces")
    return validate_password(value)


def login_form(view: LoginView, input_func: Optional[InputFunc] = None) -> LoginView:
    """Fill in ``view`` with the server, user, password and credential name."""
    view.server = ask_text(
        "Server",
        validate_server,
        description="Server address, e.g. registry.example.com",
        input_func=input_func,
    )
    view.username = ask_text("User Name", validate_login_username, input_func=input_func)
    view.password = ask_text(
        "Password", validate_login_password, secret=True, input_func=input_func
    )
    suggested = default_credential_name(view.username, view.server)
    view.name = ask_text(
        "Name of Credential",
        description="Name of credential to be stored in the harbor config file.",
        default=suggested,
        input_func=input_func,
    )
    if not view.name:
        view.name = suggested
    return view


def _validate_new_username(value: str) -> str:
    if not value.strip():
        raise ValidationError("user name cannot be empty")
    if not validate_user_name(value):
        raise ValidationError("username cannot contain special characters")
    return value


def _validate_new_email(value: str) -> str:
    if not value.strip():
        raise ValidationError("email cannot be empty or only spaces")
    if not validate_email(value):
        raise ValidationError("please enter correct email format")
    return value


def _validate_real_name(value: str) -> str:
    if not value.strip():
        raise ValidationError("real name cannot be empty")
    if not validate_fl(value):
        raise ValidationError(
            "please enter correct first and last name format, like `Bob Dylan`"
        )
    return value


def user_create_form(view: UserCreateView, input_func: Optional[InputFunc] = None) -> UserCreateView:
    """Fill in ``view`` with the details of a new user."""
    view.username = ask_text("User Name", _validate_new_username, input_func=input_func)
    view.email = ask_text("Email", _validate_new_email, input_func=input_func)
    view.realname = ask_text("First and Last Name", _validate_real_name, input_func=input_func)
    view.password = ask_text(
        "Password", validate_login_password, secret=True, input_func=input_func
    )
    view.comment = ask_text("Comment", input_func=input_func)
    return view


def validate_tag(value: str) -> str:
    if not value.strip():
        raise ValidationError("tag name cannot be empty or only spaces")
    if not validate_tag_name(value):
        raise ValidationError("please enter the correct tag name format")
    return value


def tag_create_form(input_func: Optional[InputFunc] = None) -> str:
    """Ask for the name of a new tag."""
    return ask_text("Tag Name", validate_tag, input_func=input_func)