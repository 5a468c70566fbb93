"""Field rules shared by account creation and updates."""

from __future__ import annotations

import re

from .exceptions import AccountValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")


def normalize_identifier(value: str) -> str:
    """Usernames and emails are compared and stored trimmed and lowercase."""
    return value.strip().lower()


def username_error(username: str) -> str | None:
    value = username.strip()
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        return (
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters long"
        )
    if not USERNAME_PATTERN.match(value):
        return "Username can only contain letters, numbers, and underscores"
    return None


def email_error(email: str) -> str | None:
    if not EMAIL_PATTERN.match(email.strip()):
        return "Please enter a valid email address"
    return None


def password_error(password: str) -> str | None:
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
    return None


def validate_new_account(username: str, email: str, password: str) -> None:
    """Raise ``AccountValidationError`` naming every malformed field."""
    validate_fields(
        username=username_error(username),
        email=email_error(email),
        password=password_error(password),
    )


def validate_fields(**checks: str | None) -> None:
    errors = {name: message for name, message in checks.items() if message}
    if errors:
        raise AccountValidationError(errors)
