"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import case, func, insert, literal, null, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.infrastructure.database.models import Account as AccountModel, generate_uuid
from newsdesk.modules.accounts.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from newsdesk.modules.accounts.models import Account
from newsdesk.modules.accounts.permissions import Role
from newsdesk.modules.accounts.repository import AccountRepository


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        return await self._fetch_one(stmt)

    async def get_by_identifier(self, identifier: str, *, active_only: bool = True) -> Account | None:
        stmt = select(AccountModel).where(
            or_(AccountModel.username == identifier, AccountModel.email == identifier)
        )
        if active_only:
            stmt = stmt.where(AccountModel.is_active.is_(True))
        return await self._fetch_one(stmt.limit(1))

    async def find_conflict(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: str | None = None,
    ) -> Account | None:
        clauses = []
        if username is not None:
            clauses.append(AccountModel.username == username)
        if email is not None:
            clauses.append(AccountModel.email == email)
        if not clauses:
            return None
        stmt = select(AccountModel).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(AccountModel.id != exclude_id)
        return await self._fetch_one(stmt.limit(1))

    async def count_accounts(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(AccountModel))
        return int(result.scalar_one())

    async def list_accounts(self) -> Sequence[Account]:
        stmt = select(AccountModel).order_by(AccountModel.created_at.desc(), AccountModel.username)
        result = await self._session.execute(stmt.execution_options(populate_existing=True))
        return [self._to_domain(model) for model in result.scalars().all()]

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
        model = AccountModel(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role.value,
            is_active=is_active,
            created_by=created_by,
            login_attempts=0,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise AccountAlreadyExistsError() from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def create_bootstrap_account(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> Account | None:
        # INSERT ... SELECT ... WHERE NOT EXISTS: the emptiness check and the
        # insert are one statement, so two racing bootstraps cannot both win.
        account_id = generate_uuid()
        columns = {
            "id": account_id,
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "role": Role.SUPER_ADMIN.value,
            "is_active": True,
            "login_attempts": 0,
        }
        rows = select(
            *(literal(value, AccountModel.__table__.c[name].type) for name, value in columns.items())
        ).where(~select(AccountModel.id).correlate(None).exists())
        stmt = insert(AccountModel.__table__).from_select(list(columns), rows)

        try:
            result = await self._session.execute(stmt)
        except IntegrityError as exc:
            await self._session.rollback()
            raise AccountAlreadyExistsError() from exc
        if not result.rowcount:
            return None
        return await self.get_by_id(account_id)

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
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise AccountNotFoundError(account_id)

        if email is not None:
            model.email = email
        if is_active is not None:
            model.is_active = is_active
        if role is not None:
            model.role = role.value
            model.created_by = created_by
        if password_hash is not None:
            model.password_hash = password_hash

        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise AccountAlreadyExistsError() from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def register_failed_login(
        self,
        account_id: str,
        *,
        now: datetime,
        max_attempts: int,
        lock_until: datetime,
    ) -> None:
        # Single statement: every SET expression reads the pre-update row, so
        # concurrent failures on one account cannot lose increments.
        stale_lock = (AccountModel.lock_until.is_not(None)) & (AccountModel.lock_until <= now)
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(
                login_attempts=case(
                    (stale_lock, 1),
                    else_=AccountModel.login_attempts + 1,
                ),
                lock_until=case(
                    (stale_lock, null()),
                    (
                        (AccountModel.lock_until.is_(None))
                        & (AccountModel.login_attempts + 1 >= max_attempts),
                        literal(lock_until, AccountModel.lock_until.type),
                    ),
                    else_=AccountModel.lock_until,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def register_successful_login(self, account_id: str, *, now: datetime) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(login_attempts=0, lock_until=None, last_login_at=now)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def commit(self) -> None:
        await self._session.commit()

    async def _fetch_one(self, stmt) -> Account | None:
        # populate_existing: counters may have changed through bulk UPDATEs.
        result = await self._session.execute(stmt.execution_options(populate_existing=True))
        return self._to_domain(result.scalars().first())

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            email=model.email,
            role=Role(model.role or Role.USER.value),
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            created_by=model.created_by,
            login_attempts=model.login_attempts or 0,
            lock_until=_as_utc(model.lock_until),
            last_login_at=_as_utc(model.last_login_at),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
