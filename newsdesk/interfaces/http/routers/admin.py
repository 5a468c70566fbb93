"""Administrative endpoints for managing accounts."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.interfaces.http.deps import (
    get_account_service,
    get_current_admin,
    get_db_session,
    get_super_admin,
)
from newsdesk.interfaces.http.errors import to_http_exception
from newsdesk.modules.accounts import (
    Account,
    AccountError,
    AccountService,
    AccountUpdateInput,
    UNSET,
)
from newsdesk.schemas import AccountResponse, AccountUpdate

router = APIRouter()


@router.get("/me", response_model=AccountResponse)
async def current_admin(admin: Account = Depends(get_current_admin)):
    return AccountResponse.model_validate(admin)


@router.get("/accounts", response_model=List[AccountResponse])
async def list_accounts(
    admin: Account = Depends(get_super_admin),
    account_service: AccountService = Depends(get_account_service),
):
    accounts = await account_service.list_accounts()
    return [AccountResponse.model_validate(account) for account in accounts]


@router.patch("/accounts/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: str,
    payload: AccountUpdate,
    admin: Account = Depends(get_super_admin),
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
):
    update_data = payload.model_dump(exclude_unset=True)
    update_input = AccountUpdateInput(
        email=update_data.get("email", UNSET),
        is_active=update_data.get("is_active", UNSET),
        role=update_data.get("role", UNSET),
        password=update_data.get("password", UNSET),
    )

    try:
        account = await account_service.update_account(account_id, update_input, admin)
    except AccountError as exc:
        await db.rollback()
        raise to_http_exception(exc) from exc

    await db.commit()
    return AccountResponse.model_validate(account)
