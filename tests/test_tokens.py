from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from newsdesk.core.config import Settings
from newsdesk.core.security import TokenService
from newsdesk.modules.accounts import InvalidTokenError

SECRET = "tests-secret-key"


def test_issued_token_verifies_to_account_id():
    tokens = TokenService(secret_key=SECRET)
    token = tokens.issue("account-1")

    assert tokens.verify(token) == "account-1"


def test_token_carries_no_role_claim_and_expires_after_seven_days():
    tokens = TokenService(secret_key=SECRET)
    issued_at = datetime.now(timezone.utc)

    claims = jwt.get_unverified_claims(tokens.issue("account-1", now=issued_at))

    assert claims["sub"] == "account-1"
    assert "role" not in claims
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_expired_token_is_rejected():
    tokens = TokenService(secret_key=SECRET)
    token = tokens.issue("account-1", now=datetime.now(timezone.utc) - timedelta(days=8))

    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_signed_with_another_secret_is_rejected():
    token = TokenService(secret_key="another-secret-key").issue("account-1")

    with pytest.raises(InvalidTokenError):
        TokenService(secret_key=SECRET).verify(token)


def test_tampered_token_is_rejected():
    tokens = TokenService(secret_key=SECRET)
    header, payload, signature = tokens.issue("account-1").split(".")
    forged = jwt.encode({"sub": "account-2", "type": "access"}, "guess", algorithm="HS256").split(".")[1]

    with pytest.raises(InvalidTokenError):
        tokens.verify(".".join([header, forged, signature]))


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(InvalidTokenError):
        TokenService(secret_key=SECRET).verify(token)


def test_token_without_access_type_is_rejected():
    token = jwt.encode({"sub": "account-1"}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        TokenService(secret_key=SECRET).verify(token)


def test_from_settings_uses_security_section():
    settings = Settings(security={"secret_key": SECRET, "access_token_expire_minutes": 30})
    tokens = TokenService.from_settings(settings)

    assert tokens.secret_key == SECRET
    assert tokens.expires_delta == timedelta(minutes=30)
