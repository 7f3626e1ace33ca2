"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "World Staffing Awards"
    APP_ENV: str = "development"
    DEBUG: bool = False
    SECRET_KEY: str = ""  # Required - signs admin session tokens

    # Database - PostgreSQL
    DATABASE_URL: str | None = None  # Full URL wins over the POSTGRES_* parts
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "wsa"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "wsa"
    POSTGRES_SSL: bool = True
    DATABASE_ECHO: bool = False
    DB_AUTO_CREATE: bool = False  # Create tables at startup (local development)

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_required_secrets(cls, v: str, info: Any) -> str:
        """Validate that required secrets are set."""
        if not v:
            raise ValueError(f"{info.field_name} must be set in environment")
        return v

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy connection URL."""
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            # Hosted Postgres providers hand out plain postgres:// URLs
            if url.startswith("postgres://"):
                url = "postgresql+asyncpg://" + url[len("postgres://"):]
            elif url.startswith("postgresql://"):
                url = "postgresql+asyncpg://" + url[len("postgresql://"):]
            return url
        ssl = "?ssl=require" if self.POSTGRES_SSL else ""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}{ssl}"
        )

    # Admin authentication
    # Comma-separated and positionally paired: ADMIN_EMAILS[i] <-> ADMIN_PASSWORD_HASHES[i]
    ADMIN_EMAILS: str = ""
    ADMIN_PASSWORD_HASHES: str = ""
    ADMIN_SESSION_TTL_MINUTES: int = 480
    ADMIN_SESSION_COOKIE_NAME: str = "wsa_admin_session"
    JWT_ALGORITHM: str = "HS256"

    @property
    def admin_credentials(self) -> dict[str, str]:
        """Map of lowercased admin email -> bcrypt hash."""
        emails = [e.strip().lower() for e in self.ADMIN_EMAILS.split(",") if e.strip()]
        hashes = [h.strip() for h in self.ADMIN_PASSWORD_HASHES.split(",") if h.strip()]
        return dict(zip(emails, hashes))

    @property
    def cookie_secure(self) -> bool:
        """Session cookies carry the Secure flag everywhere except local development."""
        return self.APP_ENV != "development"

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        import json

        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # Public site (used to build nominee live URLs)
    SITE_URL: str = "http://localhost:3000"

    # HubSpot CRM sync
    HUBSPOT_ACCESS_TOKEN: str | None = None
    HUBSPOT_BASE_URL: str = "https://api.hubapi.com"
    HUBSPOT_TIMEOUT_SECONDS: float = 15.0
    HUBSPOT_SYNC_BATCH_SIZE: int = 10
    HUBSPOT_MAX_ATTEMPTS: int = 3
    HUBSPOT_CONTACT_LINKEDIN_KEY: str = "linkedin"
    CRON_SECRET: str | None = None  # Shared secret for scheduled sync triggers

    # Bulk upload
    MAX_BULK_UPLOAD_ROWS: int = 500


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
