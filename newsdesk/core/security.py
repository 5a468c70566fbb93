"""Bearer token issuing and verification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from newsdesk.core.config import Settings
from newsdesk.modules.accounts.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

TOKEN_TYPE = "access"


@dataclass(slots=True)
class TokenService:
    """Signs and checks stateless access tokens.

    Tokens only carry the account id. Role and active state are looked up
    again on every verification, so changes apply before the token expires.
    """

    secret_key: str
    algorithm: str = "HS256"
    expires_delta: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expires_delta=settings.token_lifetime,
        )

    def issue(self, account_id: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": account_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_delta).timestamp()),
            "type": TOKEN_TYPE,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the account id bound to ``token``.

        Raises:
            InvalidTokenError: bad signature, expired, or unexpected claims
        """
        if not token:
            raise InvalidTokenError("No token provided")
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            logger.info("Rejected expired token")
            raise InvalidTokenError() from exc
        except JWTError as exc:
            logger.warning("Rejected invalid token: %s", exc)
            raise InvalidTokenError() from exc

        account_id = payload.get("sub")
        if payload.get("type") != TOKEN_TYPE or not isinstance(account_id, str) or not account_id:
            raise InvalidTokenError()
        return account_id


__all__ = ["TokenService"]
