"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .account import (
    get_account_repository,
    get_account_service,
    get_auth_service,
    get_bearer_token,
    get_current_account,
    get_current_admin,
    get_optional_bearer_token,
    get_super_admin,
    get_token_service,
)

__all__ = [
    "get_db_session",
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
