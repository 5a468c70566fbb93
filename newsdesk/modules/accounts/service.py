"""Domain services for account management."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Awaitable, Callable, Sequence

import anyio
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.core.config import Settings, get_settings
from newsdesk.core.crypto import DEFAULT_ROUNDS, hash_password, verify_password

from .exceptions import (
    AccountAlreadyExistsError,
    AccountLockedError,
    AccountNotFoundError,
    AccountValidationError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from .lockout import LockoutPolicy
from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET
from .permissions import Role, has_role, require_super_admin
from .repository import AccountRepository
from .validation import (
    email_error,
    normalize_identifier,
    password_error,
    validate_fields,
    validate_new_account,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(
        self,
        repository: AccountRepository,
        *,
        lockout: LockoutPolicy | None = None,
        password_rounds: int = DEFAULT_ROUNDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._lockout = lockout or LockoutPolicy()
        self._password_rounds = password_rounds
        self._clock = clock

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "AccountService":
        from newsdesk.infrastructure.database.repositories.account_repository import SqlAccountRepository

        settings = settings or get_settings()
        return cls(
            SqlAccountRepository(session),
            lockout=LockoutPolicy.from_settings(settings.security),
            password_rounds=settings.security.bcrypt_rounds,
        )

    @property
    def lockout(self) -> LockoutPolicy:
        return self._lockout

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def list_accounts(self) -> Sequence[Account]:
        return await self._repository.list_accounts()

    async def count_accounts(self) -> int:
        return await self._repository.count_accounts()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def find_by_credentials(
        self,
        identifier: str,
        password: str,
        required_role: Role | str | None = None,
    ) -> Account:
        """Authenticate an active account by username or email.

        Checks run in order: account exists, role satisfies ``required_role``,
        account not locked, password matches. A wrong password counts towards
        the lockout threshold and the counter is committed even though the
        call fails.
        """
        login = normalize_identifier(identifier)
        account = await self._repository.get_by_identifier(login, active_only=True)
        if account is None:
            logger.info("Login failed: no active account for %r", login)
            raise InvalidCredentialsError()

        if required_role is not None and not has_role(account, required_role):
            logger.info(
                "Login refused for %s: role %s below %s",
                account.username,
                account.role.value,
                Role(required_role).value,
            )
            raise InsufficientPermissionsError()

        now = self._clock()
        if self._lockout.is_locked(account, now):
            logger.warning("Login refused for %s: locked until %s", account.username, account.lock_until)
            raise AccountLockedError(account.lock_until)

        if not await self.compare_password(password, account.password_hash):
            await self._repository.register_failed_login(
                account.id,
                now=now,
                max_attempts=self._lockout.max_attempts,
                lock_until=self._lockout.lock_deadline(now),
            )
            await self._repository.commit()
            logger.info("Login failed: invalid password for %s", account.username)
            raise InvalidCredentialsError()

        await self._repository.register_successful_login(account.id, now=now)
        logger.info("Account logged in: %s", account.username)
        refreshed = await self._repository.get_by_id(account.id)
        if refreshed is None:
            raise AccountNotFoundError(account.id)
        return refreshed

    async def hash_password(self, password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop.
        return await anyio.to_thread.run_sync(hash_password, password, self._password_rounds)

    async def compare_password(self, password: str, password_hash: str | None) -> bool:
        return await anyio.to_thread.run_sync(verify_password, password, password_hash)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_account(self, payload: AccountCreateInput, *, created_by: str | None = None) -> Account:
        validate_new_account(payload.username, payload.email, payload.password)
        role = Role(payload.role)
        if role is Role.ADMIN and created_by is None:
            raise AccountValidationError({"created_by": "Admin accounts must record the creating super admin"})
        if role is not Role.ADMIN:
            created_by = None

        username = normalize_identifier(payload.username)
        email = normalize_identifier(payload.email)
        if await self._repository.find_conflict(username=username, email=email) is not None:
            raise AccountAlreadyExistsError()

        account = await self._repository.create_account(
            username=username,
            email=email,
            password_hash=await self.hash_password(payload.password),
            role=role,
            is_active=payload.is_active,
            created_by=created_by,
        )
        logger.info("Account created: %s (%s) with role %s", account.username, account.id, account.role.value)
        return account

    async def create_admin_user(self, payload: AccountCreateInput, creator: Account) -> Account:
        if not creator.is_super_admin():
            raise PermissionDeniedError(
                account_id=creator.id,
                action="create admin",
                message="Only Super Admin can create admin users",
            )
        return await self.create_account(replace(payload, role=Role.ADMIN), created_by=creator.id)

    async def create_bootstrap_account(self, payload: AccountCreateInput) -> Account | None:
        """Create ``payload`` as super admin if, and only if, the store is empty.

        Returns ``None`` when any account already exists, including one that
        a concurrent bootstrap inserted first.
        """
        if await self._repository.count_accounts() > 0:
            return None

        validate_new_account(payload.username, payload.email, payload.password)
        account = await self._repository.create_bootstrap_account(
            username=normalize_identifier(payload.username),
            email=normalize_identifier(payload.email),
            password_hash=await self.hash_password(payload.password),
        )
        if account is None:
            logger.info("Bootstrap for %s lost to a concurrent registration", payload.username)
            return None
        logger.warning("Account store was empty; registered %s as bootstrap super admin", account.username)
        return account

    async def register_account(
        self,
        payload: AccountCreateInput,
        caller: Account | None = None,
        *,
        resolve_caller: Callable[[], Awaitable[Account]] | None = None,
    ) -> Account:
        """Register an account, bootstrapping the first one as super admin.

        Once the store holds an account, registrations without a super admin
        caller always produce a ``user``. ``resolve_caller`` is only awaited
        when an elevated role is requested after bootstrap, so credentials
        sent with the very first registration are never checked.
        """
        bootstrap = await self.create_bootstrap_account(payload)
        if bootstrap is not None:
            return bootstrap

        requested = Role(payload.role)
        if requested is Role.USER:
            return await self.create_account(payload)
        if caller is None and resolve_caller is not None:
            caller = await resolve_caller()
        if caller is None:
            logger.info("Self-serve registration for %s requested %s; creating user", payload.username, requested.value)
            return await self.create_account(replace(payload, role=Role.USER))

        if not caller.is_super_admin():
            raise PermissionDeniedError(
                account_id=caller.id,
                action=f"register {requested.value}",
                message="Only Super Admin can create admin users",
            )
        if requested is Role.ADMIN:
            return await self.create_admin_user(payload, caller)
        return await self.create_account(payload)

    # ------------------------------------------------------------------
    # Management
    # ------------------------------------------------------------------

    async def update_account(self, account_id: str, payload: AccountUpdateInput, actor: Account) -> Account:
        require_super_admin(actor)
        current = await self._repository.get_by_id(account_id)
        if current is None:
            raise AccountNotFoundError(account_id)

        email = None
        if payload.email is not UNSET and payload.email is not None:
            validate_fields(email=email_error(payload.email))
            email = normalize_identifier(payload.email)
            if await self._repository.find_conflict(email=email, exclude_id=account_id) is not None:
                raise AccountAlreadyExistsError()

        password_hash = None
        if payload.password is not UNSET and payload.password is not None:
            validate_fields(password=password_error(payload.password))
            password_hash = await self.hash_password(payload.password)

        role = None
        created_by = current.created_by
        if payload.role is not UNSET and payload.role is not None:
            try:
                role = Role(payload.role)
            except ValueError as exc:
                raise AccountValidationError({"role": "Role must be admin, super_admin, or user"}) from exc
            if account_id == actor.id and not role.includes(actor.role):
                raise PermissionDeniedError(actor.id, "demote self", "Super Admin cannot demote itself")
            if role is not Role.ADMIN:
                created_by = None
            elif current.role is not Role.ADMIN:
                created_by = actor.id

        is_active = None
        if payload.is_active is not UNSET and payload.is_active is not None:
            is_active = bool(payload.is_active)
            if not is_active and account_id == actor.id:
                raise PermissionDeniedError(actor.id, "deactivate self", "Super Admin cannot deactivate itself")

        account = await self._repository.update_account(
            account_id,
            email=email,
            is_active=is_active,
            role=role,
            created_by=created_by,
            password_hash=password_hash,
        )
        logger.info("Account %s updated by %s", account.username, actor.username)
        return account

    async def deactivate(self, account_id: str, actor: Account) -> Account:
        return await self.update_account(account_id, AccountUpdateInput(is_active=False), actor)
