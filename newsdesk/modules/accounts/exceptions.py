"""Account domain specific exceptions."""

from __future__ import annotations

from datetime import datetime


class AccountError(Exception):
    """Base class for account domain errors."""


class InvalidCredentialsError(AccountError):
    """Raised when the identifier or password does not match an active account."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class AccountLockedError(AccountError):
    """Raised while an account is inside its lockout window."""

    def __init__(self, lock_until: datetime | None = None) -> None:
        self.lock_until = lock_until
        super().__init__("Account is temporarily locked due to too many failed login attempts")


class InsufficientPermissionsError(AccountError):
    """Raised when a login requires a role the account does not hold."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message)


class PermissionDeniedError(AccountError):
    """Raised when the calling account may not perform a privileged action.

    Attributes:
        account_id: The caller that was denied
        action: The action that was denied
    """

    def __init__(self, account_id: str | None, action: str, message: str | None = None) -> None:
        self.account_id = account_id
        self.action = action
        super().__init__(message or f"Access denied for action: {action}")


class InvalidTokenError(AccountError):
    """Raised for malformed, expired or orphaned bearer tokens."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to create an account with a duplicate username or email."""

    def __init__(self, message: str = "Username or email already exists") -> None:
        super().__init__(message)


class AccountValidationError(AccountError):
    """Raised when account input fields are malformed.

    ``errors`` maps each failing field to its message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""
