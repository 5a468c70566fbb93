"""
Role hierarchy and authorization checks for privileged account operations.

Roles are ordered: ``super_admin`` implies ``admin`` implies ``user``. Every
check compares against that ordering instead of listing role names, so a
new tier only needs a rank.

All helpers are pure. They receive the caller explicitly and either return
or raise ``PermissionDeniedError``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import PermissionDeniedError

if TYPE_CHECKING:
    from .models import Account


class Role(str, Enum):
    """Account privilege tiers, lowest first."""

    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def includes(self, other: "Role | str") -> bool:
        """True if this role grants at least the privileges of ``other``."""
        return self.rank >= Role(other).rank


_ROLE_RANK: dict[Role, int] = {
    Role.USER: 0,
    Role.ADMIN: 1,
    Role.SUPER_ADMIN: 2,
}


def has_role(account: "Account", role: Role | str) -> bool:
    return Role(account.role).includes(role)


def require_role(account: "Account", role: Role | str) -> None:
    """
    Require ``account`` to hold ``role`` or a higher one.

    Raises:
        PermissionDeniedError: If the account's role is lower
    """
    required = Role(role)
    if not has_role(account, required):
        raise PermissionDeniedError(
            account_id=account.id,
            action=f"requires role {required.value}",
            message=_DENIED_MESSAGES.get(required),
        )


def require_admin(account: "Account") -> None:
    require_role(account, Role.ADMIN)


def require_super_admin(account: "Account") -> None:
    require_role(account, Role.SUPER_ADMIN)


_DENIED_MESSAGES: dict[Role, str] = {
    Role.ADMIN: "Access denied. Admin privileges required.",
    Role.SUPER_ADMIN: "Access denied. Super admin privileges required.",
}


__all__ = [
    "Role",
    "has_role",
    "require_role",
    "require_admin",
    "require_super_admin",
]
