"""Authentication endpoints used by the admin dashboard."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.interfaces.http.deps import (
    get_auth_service,
    get_bearer_token,
    get_current_account,
    get_db_session,
    get_optional_bearer_token,
)
from newsdesk.interfaces.http.errors import to_http_exception
from newsdesk.modules.accounts import Account, AccountCreateInput, AccountError, Role
from newsdesk.modules.auth import AuthService
from newsdesk.schemas import (
    AccountCreate,
    AccountData,
    AccountEnvelope,
    AccountResponse,
    AuthData,
    AuthEnvelope,
    LoginRequest,
    RegisterRequest,
)

router = APIRouter()

_ROLE_LABELS = {
    Role.SUPER_ADMIN: "Super Admin",
    Role.ADMIN: "Admin",
    Role.USER: "User",
}


@router.post("/login", response_model=AuthEnvelope, summary="Log in with username or email")
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session),
) -> AuthEnvelope:
    try:
        result = await auth_service.login(payload.username, payload.password)
    except AccountError as exc:
        raise to_http_exception(exc) from exc

    await db.commit()
    return AuthEnvelope(
        message="Login successful",
        data=AuthData(admin=AccountResponse.model_validate(result.account), token=result.token),
    )


@router.post(
    "/register",
    response_model=AuthEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Register an account (the first one becomes Super Admin)",
)
async def register(
    payload: RegisterRequest,
    token: Optional[str] = Depends(get_optional_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session),
) -> AuthEnvelope:
    try:
        result = await auth_service.register(
            AccountCreateInput(
                username=payload.username,
                email=payload.email,
                password=payload.password,
                role=payload.role,
            ),
            caller_token=token,
        )
    except AccountError as exc:
        await db.rollback()
        raise to_http_exception(exc) from exc

    await db.commit()
    return AuthEnvelope(
        message=f"{_ROLE_LABELS[result.account.role]} registered successfully",
        data=AuthData(admin=AccountResponse.model_validate(result.account), token=result.token),
    )


@router.post(
    "/create-admin",
    response_model=AccountEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create an admin account (Super Admin only)",
)
async def create_admin(
    payload: AccountCreate,
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountEnvelope:
    try:
        account = await auth_service.create_admin(
            token,
            AccountCreateInput(username=payload.username, email=payload.email, password=payload.password),
        )
    except AccountError as exc:
        await db.rollback()
        raise to_http_exception(exc) from exc

    await db.commit()
    return AccountEnvelope(
        message="Admin user created successfully",
        data=AccountData(admin=AccountResponse.model_validate(account)),
    )


@router.post("/verify", response_model=AccountEnvelope, summary="Verify a bearer token")
async def verify(account: Account = Depends(get_current_account)) -> AccountEnvelope:
    return AccountEnvelope(
        message="Token is valid",
        data=AccountData(admin=AccountResponse.model_validate(account)),
    )
