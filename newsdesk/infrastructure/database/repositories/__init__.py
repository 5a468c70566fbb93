"""SQLAlchemy repository implementations."""

from .account_repository import SqlAccountRepository

__all__ = ["SqlAccountRepository"]
