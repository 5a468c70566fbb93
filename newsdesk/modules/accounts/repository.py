"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import Account
from .permissions import Role


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence.

    Usernames and emails passed in are already normalized to lowercase.
    """

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_identifier(self, identifier: str, *, active_only: bool = True) -> Account | None:
        ...

    async def find_conflict(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: str | None = None,
    ) -> Account | None:
        ...

    async def count_accounts(self) -> int:
        ...

    async def list_accounts(self) -> Sequence[Account]:
        ...

    async def create_account(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: Role,
        is_active: bool,
        created_by: str | None,
    ) -> Account:
        ...

    async def create_bootstrap_account(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> Account | None:
        """Insert a super admin only if the store is empty, in one statement."""
        ...

    async def update_account(
        self,
        account_id: str,
        *,
        email: str | None = None,
        is_active: bool | None = None,
        role: Role | None = None,
        created_by: str | None = None,
        password_hash: str | None = None,
    ) -> Account:
        ...

    async def register_failed_login(
        self,
        account_id: str,
        *,
        now: datetime,
        max_attempts: int,
        lock_until: datetime,
    ) -> None:
        ...

    async def register_successful_login(self, account_id: str, *, now: datetime) -> None:
        ...

    async def commit(self) -> None:
        ...
