"""
Seed the bootstrap super admin account.

Credentials come from the ``BOOTSTRAP__USERNAME``, ``BOOTSTRAP__EMAIL`` and
``BOOTSTRAP__PASSWORD`` settings.
"""
import asyncio

from newsdesk.core.config import get_settings
from newsdesk.core.logging import configure_logging
from newsdesk.infrastructure.database import dispose_engine, init_db, session_scope
from newsdesk.modules.accounts import AccountCreateInput, AccountService


async def create_default_admin() -> None:
    """Create the super admin if the account store is still empty."""
    settings = get_settings()
    configure_logging(settings)
    await init_db()

    try:
        async with session_scope() as db:
            service = AccountService.with_session(db, settings)
            account = await service.create_bootstrap_account(
                AccountCreateInput(
                    username=settings.bootstrap.username,
                    email=settings.bootstrap.email,
                    password=settings.bootstrap.password,
                )
            )
            if account is None:
                print("Accounts already exist, nothing to do")
                return

            print("=" * 50)
            print("Super Admin account created")
            print("=" * 50)
            print(f"Username: {account.username}")
            print(f"Email:    {account.email}")
            print(f"Role:     {account.role.value}")
            print("=" * 50)
            print("Change the password after the first login!")
            print("=" * 50)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(create_default_admin())
