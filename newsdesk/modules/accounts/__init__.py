"""Account domain services and models."""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountLockedError,
    AccountNotFoundError,
    AccountValidationError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidTokenError,
    PermissionDeniedError,
)
from .lockout import LockoutPolicy
from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET
from .permissions import Role, has_role, require_admin, require_role, require_super_admin
from .service import AccountService

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountUpdateInput",
    "AccountService",
    "LockoutPolicy",
    "Role",
    "has_role",
    "require_admin",
    "require_role",
    "require_super_admin",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountLockedError",
    "AccountNotFoundError",
    "AccountValidationError",
    "InsufficientPermissionsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PermissionDeniedError",
    "UNSET",
]
