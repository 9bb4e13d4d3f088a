"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum entropy for secrets (measured by character diversity)
MIN_SECRET_UNIQUE_CHARS = 16

SUPPORTED_DATABASE_SCHEMES = (
    "postgresql://",
    "postgres://",
    "postgresql+asyncpg://",
    "sqlite://",
    "sqlite+aiosqlite://",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "HR Admin API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default)
    database_url: str = Field(
        description="Database connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Security - JWT
    jwt_secret: str = Field(min_length=32)
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24 * 30
    jwt_issuer: str = "hr-api"

    # Session cookie carrying the access token
    session_cookie_name: str = "hr_session"
    session_cookie_secure: bool = True
    session_cookie_httponly: bool = True
    session_cookie_samesite: Literal["lax", "strict", "none"] = "strict"

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    # Rate limiting (requests per minute)
    rate_limit_enabled: bool = True
    rate_limit_default: int = 100
    rate_limit_auth_login: int = 5

    # Trusted reverse proxies (comma-separated IPs or CIDR ranges)
    trusted_proxies: str = ""

    # bcrypt work factor
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Password assigned to the account created alongside each new employee
    default_employee_password: str = Field(default="Password123#", min_length=8)

    # Also promote/demote managers when an employee's direct manager changes,
    # not only when a department manager changes
    role_sync_on_report_change: bool = False

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = self.database_url
        if not url.startswith(SUPPORTED_DATABASE_SCHEMES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (or SQLite outside production)"
            )

        if self.environment == "production":
            if url.startswith("sqlite"):
                raise ValueError("SQLite cannot be used in production environment")

            if len(set(self.jwt_secret)) < MIN_SECRET_UNIQUE_CHARS:
                raise ValueError(
                    f"JWT_SECRET must contain at least {MIN_SECRET_UNIQUE_CHARS} unique characters "
                    "for sufficient entropy. Use a cryptographically random value."
                )

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy.

        PostgreSQL URLs are switched to asyncpg (sslmode becomes ssl),
        SQLite URLs to aiosqlite.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            url = url.replace("sslmode=", "ssl=")
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Get trusted proxies as a list."""
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
