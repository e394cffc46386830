"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. DATABASE_URL is only needed by the SQL permission store
and the operational scripts; the resolver and query builders never read it.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from care_access.core.constants import SYSTEM_TENANT_ID

_ASYNC_URL_PREFIXES = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "care-access"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (permission store)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Tenant
    default_tenant_id: str = SYSTEM_TENANT_ID
    tenant_header_name: str = "X-Tenant-ID"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Redis Cache
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_permissions: int = 300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        """Require an async driver in DATABASE_URL when it is set."""
        if self.database_url and not self.database_url.startswith(_ASYNC_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must use an async driver "
                "(postgresql+asyncpg://... or sqlite+aiosqlite://...), "
                f"got: {self.database_url.split('://', 1)[0]!r}"
            )
        if self.cache_ttl_permissions <= 0:
            raise ValueError("CACHE_TTL_PERMISSIONS must be a positive number of seconds")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
