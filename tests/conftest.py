from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsdesk.core.config import DatabaseSettings, get_settings
from newsdesk.core.security import TokenService
from newsdesk.infrastructure.database import Base, build_engine, models  # noqa: F401
from newsdesk.infrastructure.database.repositories import SqlAccountRepository
from newsdesk.modules.accounts import AccountCreateInput, AccountService, LockoutPolicy, Role
from newsdesk.modules.auth import AuthService

TEST_ROUNDS = 4
TEST_SECRET = "tests-secret-key"
PASSWORD = "editor123"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class Stack:
    session: AsyncSession
    repository: SqlAccountRepository
    accounts: AccountService
    auth: AuthService
    tokens: TokenService


def make_input(username: str, role: Role = Role.USER, password: str = PASSWORD, email: str | None = None) -> AccountCreateInput:
    return AccountCreateInput(
        username=username,
        email=email or f"{username}@newsapp.com",
        password=password,
        role=role,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'accounts.sqlite3'}"


@pytest.fixture
def stack_factory(database_url, clock):
    """Returns an async context manager yielding services bound to a fresh database."""

    @asynccontextmanager
    async def open_stack():
        engine = build_engine(DatabaseSettings(url=database_url))
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        try:
            async with factory() as session:
                repository = SqlAccountRepository(session)
                accounts = AccountService(
                    repository,
                    lockout=LockoutPolicy(),
                    password_rounds=TEST_ROUNDS,
                    clock=clock,
                )
                tokens = TokenService(secret_key=TEST_SECRET)
                yield Stack(
                    session=session,
                    repository=repository,
                    accounts=accounts,
                    auth=AuthService(accounts, tokens),
                    tokens=tokens,
                )
        finally:
            await engine.dispose()

    return open_stack


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'api.sqlite3'}")
    monkeypatch.setenv("SECURITY__SECRET_KEY", TEST_SECRET)
    monkeypatch.setenv("SECURITY__BCRYPT_ROUNDS", str(TEST_ROUNDS))
    monkeypatch.setenv("ENVIRONMENT", "test")
    get_settings.cache_clear()

    from newsdesk.main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()
