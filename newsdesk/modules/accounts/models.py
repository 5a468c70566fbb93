"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .permissions import Role


@dataclass(slots=True)
class Account:
    id: str
    username: str
    email: str
    role: Role
    is_active: bool
    password_hash: str = field(repr=False)
    created_by: str | None = None
    login_attempts: int = 0
    lock_until: datetime | None = None
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_admin(self) -> bool:
        return self.role.includes(Role.ADMIN)

    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN

    def is_locked(self, now: datetime) -> bool:
        return self.lock_until is not None and self.lock_until > now


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    email: str
    password: str = field(repr=False)
    role: Role = Role.USER
    is_active: bool = True


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    email: str | object = UNSET
    is_active: bool | object = UNSET
    role: Role | str | object = UNSET
    password: str | object = field(default=UNSET, repr=False)
