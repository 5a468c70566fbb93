"""Account related dependency providers."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.core.config import Settings, get_settings
from newsdesk.core.security import TokenService
from newsdesk.infrastructure.database.repositories.account_repository import SqlAccountRepository
from newsdesk.interfaces.http.errors import to_http_exception
from newsdesk.modules.accounts import (
    Account,
    AccountService,
    InvalidTokenError,
    LockoutPolicy,
    PermissionDeniedError,
    require_admin,
    require_super_admin,
)
from newsdesk.modules.auth import AuthService

from .database import get_db_session

bearer_scheme = HTTPBearer(auto_error=False)


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(
        repository,
        lockout=LockoutPolicy.from_settings(settings.security),
        password_rounds=settings.security.bcrypt_rounds,
    )


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def get_auth_service(
    accounts: AccountService = Depends(get_account_service),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(accounts, tokens)


def get_optional_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


def get_bearer_token(token: Optional[str] = Depends(get_optional_bearer_token)) -> str:
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


async def get_current_account(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Account:
    try:
        return await auth_service.verify_token(token)
    except InvalidTokenError as exc:
        raise to_http_exception(exc) from exc


async def get_current_admin(account: Account = Depends(get_current_account)) -> Account:
    try:
        require_admin(account)
    except PermissionDeniedError as exc:
        raise to_http_exception(exc) from exc
    return account


async def get_super_admin(account: Account = Depends(get_current_account)) -> Account:
    try:
        require_super_admin(account)
    except PermissionDeniedError as exc:
        raise to_http_exception(exc) from exc
    return account


__all__ = [
    "bearer_scheme",
    "get_account_repository",
    "get_account_service",
    "get_auth_service",
    "get_bearer_token",
    "get_current_account",
    "get_current_admin",
    "get_optional_bearer_token",
    "get_super_admin",
    "get_token_service",
]
