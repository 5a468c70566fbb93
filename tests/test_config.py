from datetime import timedelta

import pytest
from pydantic import ValidationError

from newsdesk.core.config import Settings


def test_nested_sections_read_from_environment(monkeypatch):
    monkeypatch.setenv("SECURITY__MAX_LOGIN_ATTEMPTS", "3")
    monkeypatch.setenv("SECURITY__ACCESS_TOKEN_EXPIRE_MINUTES", "60")
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")

    settings = Settings()

    assert settings.security.max_login_attempts == 3
    assert settings.token_lifetime == timedelta(hours=1)
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"


def test_defaults_match_account_policy():
    security = Settings().security

    assert security.max_login_attempts == 5
    assert security.lockout_minutes == 120
    assert security.bcrypt_rounds == 12
    assert Settings().token_lifetime == timedelta(days=7)


def test_production_refuses_default_secret(monkeypatch):
    monkeypatch.delenv("SECURITY__SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(environment="production")

    settings = Settings(environment="production", security={"secret_key": "a-real-production-secret"})
    assert settings.environment == "production"
