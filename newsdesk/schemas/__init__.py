"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from newsdesk.modules.accounts.permissions import Role
from newsdesk.modules.accounts.validation import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, description="Username or email")
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class AccountCreate(BaseModel):
    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=r"^\s*[a-zA-Z0-9_]+\s*$",
    )
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class RegisterRequest(AccountCreate):
    role: Role = Role.USER


class AccountUpdate(BaseModel):
    email: Optional[str] = None
    is_active: Optional[bool] = None
    role: Optional[Role] = None
    password: Optional[str] = Field(None, min_length=PASSWORD_MIN_LENGTH)


class AccountResponse(BaseModel):
    id: str
    username: str
    email: str
    role: Role
    is_active: bool
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool = True
    message: str = "OK"
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[dict[str, str]] = None


class AccountData(BaseModel):
    admin: AccountResponse


class AuthData(AccountData):
    token: str
    token_type: str = "bearer"


class AccountEnvelope(SuccessResponse):
    data: AccountData


class AuthEnvelope(SuccessResponse):
    data: AuthData
