"""
Client configuration models and helpers.

Centralizes settings management so the library, the session layer and the
command-line tool share a consistent configuration surface.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Location and timeouts of the admin REST backend."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    base_url: str = Field(
        "http://localhost:6003/api",
        validation_alias="ADMIN_API_BASE_URL",
        description="Root URL every admin endpoint path is appended to.",
    )
    timeout_seconds: float = Field(
        30.0,
        validation_alias="ADMIN_API_TIMEOUT",
        description="Timeout applied to each individual network call.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class StorageSettings(BaseSettings):
    """Where credentials are persisted between runs."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    token_store_path: str = Field(
        ".admin/credentials.sqlite3",
        validation_alias="ADMIN_TOKEN_STORE_PATH",
    )
    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="ADMIN_TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens. "
            "Tokens are stored in plaintext when omitted."
        ),
    )


class AdminSettings(BaseSettings):
    """Root settings object for the admin client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="ADMIN_ENV")
    log_level: str = Field("INFO", validation_alias="ADMIN_LOG_LEVEL")
    api: ApiSettings = Field(default_factory=ApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache()
def get_settings() -> AdminSettings:
    """Return a cached settings object."""
    return AdminSettings()


__all__ = [
    "AdminSettings",
    "ApiSettings",
    "StorageSettings",
    "get_settings",
]
