"""Translation of account domain errors into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from newsdesk.modules.accounts import (
    AccountAlreadyExistsError,
    AccountError,
    AccountLockedError,
    AccountNotFoundError,
    AccountValidationError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidTokenError,
    PermissionDeniedError,
)

STATUS_BY_ERROR: dict[type[AccountError], int] = {
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    AccountLockedError: status.HTTP_423_LOCKED,
    InsufficientPermissionsError: status.HTTP_403_FORBIDDEN,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    AccountAlreadyExistsError: status.HTTP_400_BAD_REQUEST,
    AccountValidationError: status.HTTP_400_BAD_REQUEST,
    AccountNotFoundError: status.HTTP_404_NOT_FOUND,
}

_DEFAULT_MESSAGES: dict[type[AccountError], str] = {
    AccountNotFoundError: "Account not found",
}


def to_http_exception(exc: AccountError) -> HTTPException:
    status_code = next(
        (code for error_type, code in STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    detail: str | dict = _DEFAULT_MESSAGES.get(type(exc)) or str(exc)
    if isinstance(exc, AccountValidationError):
        detail = {"message": str(exc), "errors": exc.errors}
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, InvalidTokenError) else None
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


__all__ = ["STATUS_BY_ERROR", "to_http_exception"]
