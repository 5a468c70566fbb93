"""Application configuration using pydantic settings with structured sections."""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-newsdesk"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./newsdesk.db", alias="url")
    echo: bool = False
    pool_size: int | None = None
    max_overflow: int | None = None


class SecuritySettings(BaseModel):
    """JWT signing, password hashing cost and failed-login lockout."""

    secret_key: str = Field(default=DEFAULT_SECRET_KEY, min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    max_login_attempts: int = Field(default=5, ge=1)
    lockout_minutes: int = Field(default=120, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class BootstrapSettings(BaseModel):
    """Credentials for the super admin seeded by ``init_admin.py``."""

    username: str = "admin"
    email: str = "admin@newsapp.com"
    password: str = "admin123"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Newsdesk Admin API"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    logging: LoggingSettings = LoggingSettings()
    bootstrap: BootstrapSettings = BootstrapSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.security.access_token_expire_minutes)

    @model_validator(mode="after")
    def _require_real_secret(self) -> "Settings":
        if self.environment == "production" and self.security.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("SECURITY__SECRET_KEY must be set in production")
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()
