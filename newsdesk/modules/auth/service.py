"""Login, registration and token use cases built on the account service."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from newsdesk.core.security import TokenService
from newsdesk.modules.accounts import (
    Account,
    AccountCreateInput,
    AccountService,
    InvalidTokenError,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthResult:
    account: Account
    token: str


class AuthService:
    """Pairs credential checks with bearer token issuing and verification."""

    def __init__(self, accounts: AccountService, tokens: TokenService) -> None:
        self._accounts = accounts
        self._tokens = tokens

    @property
    def accounts(self) -> AccountService:
        return self._accounts

    async def login(self, identifier: str, password: str) -> AuthResult:
        account = await self._accounts.find_by_credentials(identifier, password)
        return AuthResult(account=account, token=self._tokens.issue(account.id))

    async def verify_token(self, token: str) -> Account:
        """Resolve ``token`` to its live account.

        A structurally valid token is still rejected when its account has been
        removed or deactivated since it was issued.
        """
        account_id = self._tokens.verify(token)
        account = await self._accounts.get_by_id(account_id)
        if account is None or not account.is_active:
            logger.info("Rejected token for missing or inactive account %s", account_id)
            raise InvalidTokenError("Invalid token. Admin not found or inactive.")
        return account

    async def register(self, payload: AccountCreateInput, caller_token: str | None = None) -> AuthResult:
        async def resolve_caller() -> Account:
            return await self.verify_token(caller_token)

        account = await self._accounts.register_account(
            payload,
            resolve_caller=resolve_caller if caller_token else None,
        )
        return AuthResult(account=account, token=self._tokens.issue(account.id))

    async def create_admin(self, creator_token: str, payload: AccountCreateInput) -> Account:
        creator = await self.verify_token(creator_token)
        return await self._accounts.create_admin_user(payload, creator)
